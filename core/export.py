"""
Delimited-text export of the currently visible records.

The default format joins raw values with commas and does no quoting, so a
name containing a comma shifts the columns of its row. Pass ``quote=True``
for RFC 4180 output when that matters.
"""

import csv
import io
import logging
import time
from typing import Any, Optional, Sequence

from core.records import EquipmentRecord, RecordId


logger = logging.getLogger(__name__)

EXPORT_HEADERS = ["Equipment Name", "Type", "Flowrate", "Pressure", "Temperature"]


def format_value(value: Any) -> str:
    """Render numbers without a trailing ``.0`` when they are integral."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _row(record: EquipmentRecord) -> list:
    return [
        format_value(value)
        for value in (
            record.equipment_name,
            record.type,
            record.flowrate,
            record.pressure,
            record.temperature,
        )
    ]


def to_delimited_text(records: Sequence[EquipmentRecord], quote: bool = False) -> str:
    """Header row plus one line per record, newline separated."""
    if quote:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EXPORT_HEADERS)
        writer.writerows(_row(record) for record in records)
        return buffer.getvalue().rstrip("\n")

    lossy = [
        record.id for record in records
        if "," in record.equipment_name or "," in record.type
    ]
    if lossy:
        logger.warning(
            "Exporting %d record(s) with commas in name or type without quoting; "
            "their columns will not line up: %s",
            len(lossy), lossy,
        )

    lines = [",".join(EXPORT_HEADERS)]
    lines.extend(",".join(_row(record)) for record in records)
    return "\n".join(lines)


def export_filename(timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"equipment_data_{timestamp_ms}.csv"


def report_filename(dataset_id: RecordId) -> str:
    return f"equipment_report_{dataset_id}.pdf"
