"""Type filter, free-text search and stable sorting over equipment records."""

from __future__ import annotations

from typing import List, Literal, Optional, Sequence

import pandas as pd

from core.records import EquipmentRecord, records_to_frame


ALL_TYPES = "all"
SortDirection = Literal["asc", "desc"]
SORTABLE_FIELDS = ("equipment_name", "type", "flowrate", "pressure", "temperature")
SEARCH_FIELDS = ("equipment_name", "type")


def compute_visible(
    records: Sequence[EquipmentRecord],
    filter_type: str = ALL_TYPES,
    search_term: str = "",
    sort_key: Optional[str] = None,
    sort_direction: SortDirection = "asc",
) -> List[EquipmentRecord]:
    """
    Project the record set onto what the table should show.

    Type filter first, then search, then an optional stable sort. Without
    a sort key the result keeps dataset order.
    """
    if not records:
        return []

    frame = records_to_frame(records)
    frame = apply_type_filter(frame, filter_type)
    frame = apply_search(frame, search_term)
    if sort_key is not None:
        frame = sort_frame(frame, sort_key, sort_direction)

    return [records[position] for position in frame.index]


def apply_type_filter(frame: pd.DataFrame, filter_type: str) -> pd.DataFrame:
    """Keep rows of one equipment type; an unknown type leaves nothing."""
    if filter_type == ALL_TYPES:
        return frame
    return frame.loc[frame["type"] == filter_type]


def apply_search(frame: pd.DataFrame, search_term: str) -> pd.DataFrame:
    """Case-insensitive substring match against name or type."""
    if not search_term:
        return frame

    needle = search_term.lower()
    mask = pd.Series(False, index=frame.index)
    for column in SEARCH_FIELDS:
        mask |= frame[column].astype(str).str.lower().str.contains(needle, regex=False)
    return frame.loc[mask]


def sort_frame(frame: pd.DataFrame, sort_key: str, direction: SortDirection = "asc") -> pd.DataFrame:
    """Stable sort; ties keep their incoming relative order in both directions."""
    if sort_key not in SORTABLE_FIELDS:
        raise ValueError(f"Column '{sort_key}' is not sortable")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unsupported sort direction '{direction}'")

    return frame.sort_values(sort_key, ascending=direction == "asc", kind="mergesort")


def available_filter_types(type_distribution: Optional[dict]) -> List[str]:
    """Filter choices offered to the user, "all" first."""
    return [ALL_TYPES] + list(type_distribution or {})
