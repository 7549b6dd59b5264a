"""
Insight generation engine that turns a dataset and its summary into short,
dashboard-ready observations.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from config.settings import AppConfig
from core.records import DatasetSummary, EquipmentRecord
from core.statistics import round_half_up


@dataclass
class Insight:
    icon: str
    title: str
    value: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class InsightGenerator:
    """
    Generates the heuristic insight cards shown above the equipment table.

    Insights depend on the dataset only, never on filters or selection.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()

    @staticmethod
    def type_enumeration_order(
        records: Sequence[EquipmentRecord],
        type_distribution: Dict[str, int],
    ) -> List[str]:
        """
        Order in which types are considered when counts tie.

        Types appear in the order they are first seen in the dataset; types
        only known from the summary follow in the summary's key order.
        """
        order: List[str] = []
        seen = set()
        for record in records:
            if record.type in type_distribution and record.type not in seen:
                seen.add(record.type)
                order.append(record.type)
        for name in type_distribution:
            if name not in seen:
                seen.add(name)
                order.append(name)
        return order

    @classmethod
    def most_common_type(
        cls,
        records: Sequence[EquipmentRecord],
        summary: DatasetSummary,
    ) -> Optional[Insight]:
        distribution = summary.type_distribution
        if not distribution:
            return None

        best_type = None
        best_count = -1
        # strict ">" keeps the earliest type on a tie
        for name in cls.type_enumeration_order(records, distribution):
            if distribution[name] > best_count:
                best_type, best_count = name, distribution[name]

        return Insight(
            icon="🏭",
            title="Most Common Type",
            value=best_type,
            description=f"{best_count} of {summary.total_count} units are {best_type}",
        )

    def high_flowrate(self, records: Sequence[EquipmentRecord]) -> Optional[Insight]:
        threshold = self.config.high_flowrate_threshold
        count = sum(1 for record in records if record.flowrate > threshold)
        if count == 0:
            return None

        return Insight(
            icon="⚡",
            title="High Flowrate Equipment",
            value=str(count),
            description=f"{count} units running above {threshold:g} flowrate",
        )

    def system_efficiency(self, summary: DatasetSummary) -> Insight:
        reference = self.config.efficiency_reference_flowrate
        efficiency = round_half_up(summary.averages.flowrate / reference * 100) if reference else 0

        return Insight(
            icon="🎯",
            title="System Efficiency",
            value=f"{efficiency}%",
            description=f"Average flowrate relative to a {reference:g} reference maximum",
        )

    def generate(
        self,
        records: Sequence[EquipmentRecord],
        summary: Optional[DatasetSummary],
    ) -> List[Insight]:
        """
        Build the insight list in display order.

        Args:
            records: full (unfiltered) record set
            summary: backend summary; without one there is nothing to say

        Returns:
            Most common type, high-flowrate count (omitted when zero) and
            system efficiency, in that order.
        """
        if summary is None:
            return []

        candidates = [
            self.most_common_type(records, summary),
            self.high_flowrate(records),
            self.system_efficiency(summary),
        ]
        return [insight for insight in candidates if insight is not None]


def compute_insights(
    records: Sequence[EquipmentRecord],
    summary: Optional[DatasetSummary],
    config: Optional[AppConfig] = None,
) -> List[Insight]:
    return InsightGenerator(config).generate(records, summary)
