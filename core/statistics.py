"""
Flowrate trend, per-equipment performance scores and status bands.

Every function here tolerates empty data and zero averages: it returns an
"unavailable" or zero result instead of raising, so the dashboard can
always render something.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Sequence

import numpy as np
import pandas as pd

from config.settings import AppConfig
from core.records import METRICS, DatasetSummary, EquipmentRecord


FlowrateStatus = Literal["High", "Medium", "Low"]

_DEFAULTS = AppConfig()


def round_half_up(value: float) -> int:
    """Round halves towards positive infinity (``round`` would go to even)."""
    return int(math.floor(value + 0.5))


@dataclass
class TrendResult:
    """Spread of flowrate across the whole dataset."""

    available: bool
    max: Optional[float] = None
    min: Optional[float] = None
    range: Optional[float] = None
    variance_pct: Optional[float] = None

    @classmethod
    def unavailable(cls) -> "TrendResult":
        return cls(available=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "max": self.max,
            "min": self.min,
            "range": self.range,
            "variance_pct": self.variance_pct,
        }


def compute_trend(
    records: Sequence[EquipmentRecord],
    summary: Optional[DatasetSummary],
) -> TrendResult:
    """
    Max, min and range of flowrate plus how far the peak sits above average.

    Always computed over the full record set, never the filtered view.

    Args:
        records: every record of the loaded dataset
        summary: backend summary providing the average flowrate

    Returns:
        TrendResult; ``available`` is False for empty data, a missing
        summary or a zero average flowrate.
    """
    if not records or summary is None:
        return TrendResult.unavailable()

    avg_flowrate = summary.averages.flowrate
    if not avg_flowrate or not np.isfinite(avg_flowrate):
        return TrendResult.unavailable()

    flowrates = pd.Series([record.flowrate for record in records], dtype="float64")
    max_flowrate = float(flowrates.max())
    min_flowrate = float(flowrates.min())

    return TrendResult(
        available=True,
        max=max_flowrate,
        min=min_flowrate,
        range=max_flowrate - min_flowrate,
        variance_pct=round((max_flowrate - avg_flowrate) / avg_flowrate * 100, 2),
    )


def compute_performance_score(
    record: EquipmentRecord,
    summary: Optional[DatasetSummary],
    weight: float = _DEFAULTS.score_weight,
) -> int:
    """
    Weighted ratio of a record's metrics to the dataset averages, in percent.

    A metric whose average is zero (or missing) contributes nothing.
    Scores above 100 mean above-average equipment.
    """
    if summary is None:
        return 0

    total = 0.0
    for metric in METRICS:
        average = summary.averages.get(metric)
        if not average or not np.isfinite(average):
            continue
        total += weight * (getattr(record, metric) / average)

    return round_half_up(total)


def performance_scores(
    records: Sequence[EquipmentRecord],
    summary: Optional[DatasetSummary],
    weight: float = _DEFAULTS.score_weight,
) -> Dict[Any, int]:
    return {record.id: compute_performance_score(record, summary, weight) for record in records}


def classify_flowrate(
    value: float,
    high_threshold: float = _DEFAULTS.high_flowrate_threshold,
    medium_threshold: float = _DEFAULTS.medium_flowrate_threshold,
) -> FlowrateStatus:
    """High above 200, Medium in (150, 200], Low at or below 150."""
    if value > high_threshold:
        return "High"
    if value > medium_threshold:
        return "Medium"
    return "Low"


def flowrate_series(records: Sequence[EquipmentRecord]) -> Dict[str, List[Any]]:
    """Line-chart data: one point per record in dataset order."""
    return {
        "labels": [f"Item {position}" for position in range(1, len(records) + 1)],
        "values": [record.flowrate for record in records],
    }
