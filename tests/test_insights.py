"""Tests for insight generation."""

from config.settings import AppConfig
from core.insights import InsightGenerator, compute_insights
from core.records import Averages, DatasetSummary, EquipmentRecord


class TestInsights:
    """Tests for the ordered insight cards."""

    def test_pump_dataset_has_all_three(self, pump_records, pump_summary):
        insights = compute_insights(pump_records, pump_summary)

        assert [i.title for i in insights] == [
            "Most Common Type",
            "High Flowrate Equipment",
            "System Efficiency",
        ]
        assert insights[0].value == "Pump"
        assert insights[1].value == "1"
        # 160 / 250 * 100 = 64
        assert insights[2].value == "64%"

    def test_high_flowrate_omitted_when_none(self, pump_summary):
        records = (
            EquipmentRecord(1, "Pump A", "Pump", 200, 50, 80),
            EquipmentRecord(2, "Pump B", "Pump", 100, 40, 60),
        )

        insights = compute_insights(records, pump_summary)

        assert len(insights) == 2
        assert [i.title for i in insights] == ["Most Common Type", "System Efficiency"]

    def test_no_summary_means_no_insights(self, pump_records):
        assert compute_insights(pump_records, None) == []

    def test_efficiency_uses_configured_reference(self, pump_records, pump_summary):
        config = AppConfig(efficiency_reference_flowrate=200.0)

        insights = compute_insights(pump_records, pump_summary, config)

        assert insights[-1].value == "80%"

    def test_efficiency_rounds_half_up(self, pump_records):
        # 156.25 / 250 * 100 = 62.5
        summary = DatasetSummary(2, Averages(156.25, 45, 70), {"Pump": 2})

        assert compute_insights(pump_records, summary)[-1].value == "63%"

    def test_insight_dict_shape(self, pump_records, pump_summary):
        payload = compute_insights(pump_records, pump_summary)[0].to_dict()

        assert set(payload) == {"icon", "title", "value", "description"}


class TestMostCommonType:
    """Tests for argmax and its tie-break."""

    def test_argmax_of_distribution(self, plant_records, plant_summary):
        insight = InsightGenerator.most_common_type(plant_records, plant_summary)

        counts = plant_summary.type_distribution
        assert counts[insight.value] == max(counts.values())

    def test_tie_broken_by_first_seen_in_dataset(self):
        records = (
            EquipmentRecord(1, "V1", "Valve", 10, 1, 1),
            EquipmentRecord(2, "P1", "Pump", 10, 1, 1),
            EquipmentRecord(3, "P2", "Pump", 10, 1, 1),
            EquipmentRecord(4, "V2", "Valve", 10, 1, 1),
        )
        # summary lists Pump first; the dataset saw Valve first
        summary = DatasetSummary(4, Averages(10, 1, 1), {"Pump": 2, "Valve": 2})

        insight = InsightGenerator.most_common_type(records, summary)

        assert insight.value == "Valve"

    def test_types_missing_from_records_follow_summary_order(self):
        summary = DatasetSummary(4, Averages(10, 1, 1), {"Reactor": 2, "Tank": 2})

        insight = InsightGenerator.most_common_type((), summary)

        assert insight.value == "Reactor"

    def test_empty_distribution(self, pump_records):
        summary = DatasetSummary(0, Averages(160, 45, 70), {})

        assert InsightGenerator.most_common_type(pump_records, summary) is None
        assert [i.title for i in compute_insights(pump_records, summary)] == [
            "High Flowrate Equipment",
            "System Efficiency",
        ]
