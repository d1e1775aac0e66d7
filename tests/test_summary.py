"""
tests/test_summary.py

Unit tests for the analytics-summary mapping used by the secondary tier.

Covers:
- direct mapping of totals and project-wise entries
- reserved count fixed at 0
- clamping of counts and sell rate to their valid ranges
- oversized or non-numeric values defaulting to 0
"""

from __future__ import annotations

import json

import pytest

from sales_analytics.summary import map_analytics_summary, map_project_summary


class TestTotals:
    def test_direct_mapping(self) -> None:
        report = map_analytics_summary({"flats": {"total": 10, "sold": 4, "unsold": 6, "sellRate": 40}})
        assert (report.total_flats, report.sold_flats, report.unsold_flats) == (10, 4, 6)
        assert report.sell_rate == 40
        assert report.reserved_flats == 0

    def test_missing_totals_default_to_zero(self) -> None:
        report = map_analytics_summary({})
        assert report.total_flats == 0
        assert report.sell_rate == 0.0
        assert report.project_wise == []

    def test_oversized_integers_default_to_zero(self) -> None:
        payload = json.loads('{"flats": {"total": 1' + "0" * 400 + ', "sold": 3, "sellRate": 5' + "0" * 400 + "}}")
        report = map_analytics_summary(payload)
        assert report.total_flats == 0
        assert report.sold_flats == 3
        assert report.sell_rate == 0.0


class TestBounds:
    def test_negative_counts_clamped(self) -> None:
        report = map_analytics_summary({"flats": {"total": -5, "sold": -1}})
        assert report.total_flats == 0
        assert report.sold_flats == 0

    @pytest.mark.parametrize("rate, expected", [(-12.5, 0.0), (140, 100.0), (62.5, 62.5)])
    def test_sell_rate_clamped_to_percentage_range(self, rate: float, expected: float) -> None:
        assert map_analytics_summary({"flats": {"sellRate": rate}}).sell_rate == expected

    def test_project_sell_rate_clamped(self) -> None:
        assert map_project_summary({"sellRate": 250}).sell_rate == 100.0


class TestProjectWise:
    def test_name_falls_back_to_project_name(self) -> None:
        project = map_project_summary({"projectId": "p1", "projectName": "Hill Crest", "totalFlats": "8"})
        assert project.project_name == "Hill Crest"
        assert project.total_flats == 8
        assert project.reserved_flats == 0

    def test_non_object_entry_maps_to_empty_summary(self) -> None:
        project = map_project_summary("junk")
        assert project.project_id == ""
        assert project.total_flats == 0
