"""
View-state controller: the single owner of the user's filter, search, sort,
selection, favorites and view mode for the loaded dataset.

Every mutation re-derives the view through :func:`derive`, a pure function
of the state, the records and the summary.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Optional, Sequence, Set, Tuple

from config.settings import AppConfig
from core.comparison import ComparisonVector, build_comparison_vectors
from core.favorites import FavoritesStore
from core.filtering import (
    ALL_TYPES,
    SORTABLE_FIELDS,
    SortDirection,
    available_filter_types,
    compute_visible,
)
from core.insights import Insight, compute_insights
from core.records import (
    DatasetSummary,
    EquipmentRecord,
    LoadedDataset,
    RecordId,
    summary_consistency_issues,
)
from core.statistics import (
    TrendResult,
    classify_flowrate,
    compute_trend,
    flowrate_series,
    performance_scores,
)


logger = logging.getLogger(__name__)

ViewMode = Literal["grid", "table"]
VIEW_MODES = ("grid", "table")


@dataclass
class ViewState:
    """User-controlled projection parameters."""

    filter_type: str = ALL_TYPES
    search_term: str = ""
    sort_key: Optional[str] = None
    sort_direction: SortDirection = "asc"
    # False once a filter or search change has dropped the sorted order
    sort_active: bool = False
    selected_ids: List[RecordId] = field(default_factory=list)
    view_mode: ViewMode = "table"
    # shared with every other session of the same user
    favorites: FavoritesStore = field(default_factory=FavoritesStore, repr=False)

    @property
    def favorite_ids(self) -> Set[RecordId]:
        return self.favorites.ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filter_type": self.filter_type,
            "search_term": self.search_term,
            "sort": {
                "key": self.sort_key,
                "direction": self.sort_direction,
                "active": self.sort_active,
            },
            "selected_ids": list(self.selected_ids),
            "favorite_ids": sorted(self.favorite_ids, key=str),
            "view_mode": self.view_mode,
        }


@dataclass
class DerivedView:
    """Read-only projection of the state over the loaded dataset."""

    visible_records: List[EquipmentRecord]
    trend: TrendResult
    insights: List[Insight]
    comparison_vectors: List[ComparisonVector]
    performance_scores: Dict[RecordId, int]
    statuses: Dict[RecordId, str]
    flowrate_series: Dict[str, List[Any]]
    total_count: int

    @property
    def visible_count(self) -> int:
        return len(self.visible_records)


def derive(
    state: ViewState,
    records: Sequence[EquipmentRecord],
    summary: Optional[DatasetSummary],
    config: Optional[AppConfig] = None,
) -> DerivedView:
    """Compute everything the dashboard shows from the current state."""
    config = config or AppConfig()
    visible = compute_visible(
        records,
        filter_type=state.filter_type,
        search_term=state.search_term,
        sort_key=state.sort_key if state.sort_active else None,
        sort_direction=state.sort_direction,
    )

    return DerivedView(
        visible_records=visible,
        trend=compute_trend(records, summary),
        insights=compute_insights(records, summary, config),
        comparison_vectors=build_comparison_vectors(records, state.selected_ids),
        performance_scores=performance_scores(visible, summary, config.score_weight),
        statuses={
            record.id: classify_flowrate(
                record.flowrate,
                config.high_flowrate_threshold,
                config.medium_flowrate_threshold,
            )
            for record in visible
        },
        flowrate_series=flowrate_series(records),
        total_count=len(records),
    )


class ViewStateController:
    """
    Owns the loaded dataset and the view state built on top of it.

    Loads are token-guarded: :meth:`begin_load` hands out increasing tokens
    and only the response for the newest token is applied, so a slow first
    upload cannot overwrite a faster second one.
    """

    def __init__(
        self,
        favorites: Optional[FavoritesStore] = None,
        config: Optional[AppConfig] = None,
    ):
        self.config = config or AppConfig()
        self.favorites = favorites or FavoritesStore()
        self.dataset: Optional[LoadedDataset] = None
        self.state = self._initial_state()
        self._load_token = 0
        # request handlers run on a thread pool
        self._load_lock = threading.Lock()
        self.view = derive(self.state, self.records, self.summary, self.config)

    @property
    def records(self) -> Tuple[EquipmentRecord, ...]:
        return self.dataset.records if self.dataset is not None else ()

    @property
    def summary(self) -> Optional[DatasetSummary]:
        return self.dataset.summary if self.dataset is not None else None

    @property
    def dataset_id(self) -> Optional[RecordId]:
        return self.dataset.dataset_id if self.dataset is not None else None

    def _initial_state(self) -> ViewState:
        return ViewState(
            favorites=self.favorites,
            view_mode=self.config.default_view_mode if self.config.default_view_mode in VIEW_MODES else "table",
        )

    def derive(self) -> DerivedView:
        self.view = derive(self.state, self.records, self.summary, self.config)
        return self.view

    # Dataset lifecycle

    def begin_load(self) -> int:
        with self._load_lock:
            self._load_token += 1
            return self._load_token

    def apply_dataset(self, token: int, dataset: LoadedDataset) -> bool:
        """Install a freshly loaded dataset unless a newer load has started."""
        with self._load_lock:
            if token != self._load_token:
                logger.info(
                    "Discarding stale dataset %s (token %d, current %d)",
                    dataset.dataset_id, token, self._load_token,
                )
                return False

            for issue in summary_consistency_issues(dataset.records, dataset.summary):
                logger.warning("Dataset %s summary mismatch: %s", dataset.dataset_id, issue)

            self.dataset = dataset
            self.state = self._initial_state()
            logger.info("Loaded dataset %s with %d records", dataset.dataset_id, len(dataset.records))
            self.derive()
            return True

    def load(self, dataset: LoadedDataset) -> DerivedView:
        self.apply_dataset(self.begin_load(), dataset)
        return self.view

    # Filter, search, sort

    def filter_types(self) -> List[str]:
        summary = self.summary
        return available_filter_types(summary.type_distribution if summary else None)

    def set_filter_type(self, filter_type: str) -> DerivedView:
        if filter_type not in self.filter_types():
            logger.warning("Unknown equipment type filter %r; nothing will match", filter_type)
        self.state.filter_type = filter_type
        self._drop_sort_order()
        return self.derive()

    def set_search_term(self, term: str) -> DerivedView:
        self.state.search_term = term
        self._drop_sort_order()
        return self.derive()

    def _drop_sort_order(self) -> None:
        # The chosen sort key stays recorded; only its ordering lapses.
        if not self.config.reapply_sort_on_filter:
            self.state.sort_active = False

    def toggle_sort(self, key: str) -> DerivedView:
        if key not in SORTABLE_FIELDS:
            raise ValueError(f"Column '{key}' is not sortable")

        if self.state.sort_key == key:
            self.state.sort_direction = "desc" if self.state.sort_direction == "asc" else "asc"
        else:
            self.state.sort_key = key
            self.state.sort_direction = "asc"
        self.state.sort_active = True
        return self.derive()

    # Selection

    def toggle_select(self, record_id: RecordId) -> DerivedView:
        if record_id in self.state.selected_ids:
            self.state.selected_ids.remove(record_id)
        else:
            self.state.selected_ids.append(record_id)
        return self.derive()

    def select_all(self, ids: Optional[Iterable[RecordId]] = None) -> DerivedView:
        """Replace the selection; defaults to every visible record."""
        if ids is None:
            ids = [record.id for record in self.view.visible_records]
        self.state.selected_ids = list(dict.fromkeys(ids))
        return self.derive()

    def clear_selection(self) -> DerivedView:
        self.state.selected_ids = []
        return self.derive()

    # Favorites and presentation

    def toggle_favorite(self, record_id: RecordId) -> DerivedView:
        self.favorites.toggle(record_id)
        return self.derive()

    def set_view_mode(self, mode: str) -> DerivedView:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unsupported view mode '{mode}'")
        self.state.view_mode = mode
        return self.derive()
