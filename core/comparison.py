"""Side-by-side comparison vectors for selected equipment."""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from core.records import METRICS, EquipmentRecord, RecordId


MIN_COMPARISON_SIZE = 2


@dataclass
class ComparisonVector:
    label: str
    values: List[float]

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "values": list(self.values), "dimensions": list(METRICS)}


def build_comparison_vectors(
    records: Sequence[EquipmentRecord],
    selected_ids: Sequence[RecordId],
) -> List[ComparisonVector]:
    """
    One vector per selected record, in selection order.

    Ids missing from the dataset are skipped. Fewer than two resolvable
    selections produce an empty list rather than a one-item comparison.
    """
    if len(selected_ids) < MIN_COMPARISON_SIZE:
        return []

    by_id = {record.id: record for record in records}
    vectors = [
        ComparisonVector(label=by_id[record_id].equipment_name, values=by_id[record_id].metric_values())
        for record_id in selected_ids
        if record_id in by_id
    ]
    if len(vectors) < MIN_COMPARISON_SIZE:
        return []
    return vectors
