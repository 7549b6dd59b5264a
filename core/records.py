"""
Equipment records and dataset summaries as delivered by the backend.

A loaded dataset is immutable: uploading a new file replaces the whole
record set, it never edits rows in place.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd


RecordId = Union[int, str]

METRICS: Tuple[str, ...] = ("flowrate", "pressure", "temperature")
FIELDS: Tuple[str, ...] = ("id", "equipment_name", "type") + METRICS


@dataclass(frozen=True)
class EquipmentRecord:
    """One equipment reading row."""

    id: RecordId
    equipment_name: str
    type: str
    flowrate: float
    pressure: float
    temperature: float

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "EquipmentRecord":
        try:
            return cls(
                id=payload["id"],
                equipment_name=str(payload["equipment_name"]),
                type=str(payload["type"]),
                flowrate=_as_number(payload["flowrate"]),
                pressure=_as_number(payload["pressure"]),
                temperature=_as_number(payload["temperature"]),
            )
        except KeyError as exc:
            raise ValueError(f"Equipment record is missing field {exc}") from exc

    def metric_values(self) -> List[float]:
        return [self.flowrate, self.pressure, self.temperature]

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in FIELDS}


@dataclass(frozen=True)
class Averages:
    flowrate: float = 0.0
    pressure: float = 0.0
    temperature: float = 0.0

    def get(self, metric: str) -> float:
        return getattr(self, metric)


@dataclass
class DatasetSummary:
    """Server-computed aggregate statistics over a dataset."""

    total_count: int
    averages: Averages
    type_distribution: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DatasetSummary":
        averages = payload.get("averages") or {}
        if not isinstance(averages, dict):
            raise ValueError("Summary averages must be an object")
        distribution = payload.get("type_distribution") or {}
        if not isinstance(distribution, dict):
            raise ValueError("Summary type_distribution must be an object")
        return cls(
            total_count=int(payload.get("total_count", 0)),
            averages=Averages(
                flowrate=_as_number(averages.get("flowrate", 0.0)),
                pressure=_as_number(averages.get("pressure", 0.0)),
                temperature=_as_number(averages.get("temperature", 0.0)),
            ),
            # dict keeps the key order the backend sent
            type_distribution={
                str(name): int(count)
                for name, count in distribution.items()
            },
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_count": self.total_count,
            "averages": {metric: self.averages.get(metric) for metric in METRICS},
            "type_distribution": dict(self.type_distribution),
        }


@dataclass
class LoadedDataset:
    """A dataset together with its summary, ready to hand to the controller."""

    dataset_id: Optional[RecordId]
    records: Tuple[EquipmentRecord, ...]
    summary: Optional[DatasetSummary]
    filename: Optional[str] = None
    uploaded_at: Optional[str] = None

    @classmethod
    def from_payloads(
        cls,
        detail: Dict[str, Any],
        summary: Optional[Dict[str, Any]],
    ) -> "LoadedDataset":
        """Build a dataset from the backend detail and summary responses."""
        if not isinstance(detail, dict):
            raise ValueError(f"Dataset detail must be an object, got {type(detail).__name__}")
        if summary is not None and not isinstance(summary, dict):
            raise ValueError(f"Dataset summary must be an object, got {type(summary).__name__}")
        return cls(
            dataset_id=detail.get("id"),
            records=tuple(
                EquipmentRecord.from_dict(row) for row in detail.get("equipment") or []
            ),
            summary=DatasetSummary.from_dict(summary) if summary is not None else None,
            filename=detail.get("filename"),
            uploaded_at=detail.get("uploaded_at"),
        )


def _as_number(value: Any) -> float:
    number = float(value)
    return int(number) if isinstance(value, int) and not isinstance(value, bool) else number


def summary_consistency_issues(
    records: Sequence[EquipmentRecord],
    summary: Optional[DatasetSummary],
) -> List[str]:
    """Check the summary against the records it describes."""
    if summary is None:
        return []

    issues = []
    distributed = sum(summary.type_distribution.values())
    if distributed != summary.total_count:
        issues.append(
            f"type distribution sums to {distributed} but total_count is {summary.total_count}"
        )
    if summary.total_count != len(records):
        issues.append(
            f"total_count is {summary.total_count} but {len(records)} records were loaded"
        )
    return issues


def records_to_frame(records: Sequence[EquipmentRecord]) -> pd.DataFrame:
    """
    Tabular view of the records.

    The frame index is the position of each record in the input sequence,
    so filtered or sorted frames map straight back to record objects.
    """
    return pd.DataFrame(
        [record.to_dict() for record in records],
        columns=list(FIELDS),
    )
