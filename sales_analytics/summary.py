"""
sales_analytics/summary.py

Map the analytics endpoint's pre-aggregated payload onto FlatsAnalytics.

The payload already carries totals, so it bypasses the record normalizer
and the aggregator. Missing or non-numeric fields default to 0.

Known limitation: the endpoint reports no reserved count, so
``reserved_flats`` is always 0 for reports built here. It is not inferred
from the other totals.

Counts are clamped to be non-negative and ``sellRate`` to 0..100, so
reports from this tier keep the same bounds as aggregated ones.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domain.flats_analytics import FlatsAnalytics, ProjectSummary
from sales_analytics.accessors import first_count, first_number, first_text


def _rate(source: Mapping[str, Any], key: str) -> float:
    value = first_number(source, (key,))
    if value is None:
        return 0.0
    return min(100.0, max(0.0, value))


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def map_project_summary(project: Any) -> ProjectSummary:
    source = _as_mapping(project)
    return ProjectSummary(
        project_id=first_text(source, ("projectId",)) or "",
        project_name=first_text(source, ("name", "projectName")) or "",
        total_flats=first_count(source, ("totalFlats",)),
        sold_flats=first_count(source, ("soldFlats",)),
        unsold_flats=first_count(source, ("unsoldFlats",)),
        reserved_flats=0,
        sell_rate=_rate(source, "sellRate"),
        average_price=0.0,
    )


def map_analytics_summary(payload: Mapping[str, Any]) -> FlatsAnalytics:
    """
    Build a report from ``{"flats": {...}, "projectWise": [...]}``.
    """

    totals = _as_mapping(payload.get("flats"))
    projects = payload.get("projectWise")
    project_wise = (
        [map_project_summary(project) for project in projects]
        if isinstance(projects, list)
        else []
    )

    return FlatsAnalytics(
        total_flats=first_count(totals, ("total",)),
        sold_flats=first_count(totals, ("sold",)),
        unsold_flats=first_count(totals, ("unsold",)),
        reserved_flats=0,
        sell_rate=_rate(totals, "sellRate"),
        average_price=0.0,
        total_revenue=0.0,
        project_wise=project_wise,
        flats_by_type=[],
        flats=[],
    )
