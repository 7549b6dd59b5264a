"""Tests for type filter, search and sorting."""

import pytest

from core.filtering import available_filter_types, compute_visible


def _ids(records):
    return [record.id for record in records]


class TestTypeFilter:
    """Tests for the equipment type filter."""

    def test_all_keeps_dataset_order(self, plant_records):
        visible = compute_visible(plant_records, "all")

        assert _ids(visible) == [1, 2, 3, 4, 5, 6, 7, 8]

    def test_filter_by_type(self, plant_records):
        visible = compute_visible(plant_records, "Valve")

        assert _ids(visible) == [3, 7]
        assert all(record.type == "Valve" for record in visible)

    def test_unknown_type_yields_empty(self, plant_records):
        assert compute_visible(plant_records, "Boiler") == []

    def test_empty_records(self):
        assert compute_visible([], "Pump", "p", "flowrate", "desc") == []

    def test_available_filter_types(self, plant_summary):
        options = available_filter_types(plant_summary.type_distribution)

        assert options[0] == "all"
        assert options[1:] == ["Pump", "Compressor", "Valve", "HeatExchanger", "Reactor"]


class TestSearch:
    """Tests for case-insensitive name/type search."""

    def test_matches_name_case_insensitively(self, plant_records):
        visible = compute_visible(plant_records, search_term="pUMP-2")

        assert _ids(visible) == [5]

    def test_matches_type(self, plant_records):
        visible = compute_visible(plant_records, search_term="exchanger")

        assert _ids(visible) == [4]

    def test_empty_term_same_as_no_search(self, plant_records):
        assert compute_visible(plant_records, "Pump", "") == compute_visible(plant_records, "Pump")

    def test_term_is_literal_not_regex(self, plant_records):
        assert compute_visible(plant_records, search_term=".*") == []

    def test_filter_and_search_combine(self, pump_records):
        visible = compute_visible(pump_records, "Pump", "b")

        assert _ids(visible) == [2]

    @pytest.mark.parametrize("filter_type,term", [
        ("all", ""),
        ("Pump", ""),
        ("all", "1"),
        ("Valve", "valve"),
        ("Reactor", "zzz"),
    ])
    def test_visible_is_subset_of_records(self, plant_records, filter_type, term):
        visible = compute_visible(plant_records, filter_type, term)

        assert set(visible) <= set(plant_records)


class TestSorting:
    """Tests for stable ascending/descending sorts."""

    def test_flowrate_ascending_is_non_decreasing(self, plant_records):
        values = [r.flowrate for r in compute_visible(plant_records, sort_key="flowrate")]

        assert values == sorted(values)

    def test_flowrate_descending_is_non_increasing(self, plant_records):
        values = [
            r.flowrate
            for r in compute_visible(plant_records, sort_key="flowrate", sort_direction="desc")
        ]

        assert values == sorted(values, reverse=True)

    def test_ties_keep_dataset_order_ascending(self, plant_records):
        visible = compute_visible(plant_records, sort_key="flowrate")

        # 60.0 appears on ids 3 and 7, 95.0 on ids 2 and 6
        assert _ids(visible)[:4] == [3, 7, 2, 6]

    def test_ties_keep_dataset_order_descending(self, plant_records):
        visible = compute_visible(plant_records, sort_key="flowrate", sort_direction="desc")

        assert _ids(visible)[-4:] == [2, 6, 3, 7]

    def test_ties_on_type_keep_dataset_order(self, plant_records):
        visible = compute_visible(plant_records, sort_key="type")

        assert _ids(visible) == [2, 8, 4, 1, 5, 6, 3, 7]

    def test_names_sort_lexicographically(self, plant_records):
        names = [r.equipment_name for r in compute_visible(plant_records, sort_key="equipment_name")]

        assert names == sorted(names)

    def test_sort_applies_after_filter(self, plant_records):
        visible = compute_visible(plant_records, "Pump", sort_key="flowrate", sort_direction="desc")

        assert _ids(visible) == [5, 1]

    def test_unknown_sort_key_raises_error(self, plant_records):
        with pytest.raises(ValueError):
            compute_visible(plant_records, sort_key="colour")
