"""
sales_analytics/overview.py

Team overview built from the project-wise flats summary endpoint.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from app.domain.flats_analytics import ProjectWiseRow, TeamOverview
from sales_analytics.accessors import first_count, first_number, first_text
from sales_analytics.aggregator import safe_rate
from sales_analytics.formatting import format_percentage

SAMPLE_TEAM_OVERVIEW: Final[TeamOverview] = TeamOverview(
    total_flats=150,
    sold_flats=95,
    unsold_flats=55,
    sold_percentage="63.3%",
)


def _percentage_text(source: Mapping[str, Any], key: str) -> str:
    value = source.get(key)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        return text if text.endswith("%") else f"{text}%"
    number = first_number(source, (key,))
    return format_percentage(number if number is not None else 0.0)


def _map_row(row: Any) -> ProjectWiseRow:
    source = row if isinstance(row, Mapping) else {}
    return ProjectWiseRow(
        project_name=first_text(source, ("projectName",)) or "",
        sold=first_count(source, ("sold",)),
        unsold=first_count(source, ("unSold",)),
        sold_percentage=_percentage_text(source, "soldPercentage"),
        unsold_percentage=_percentage_text(source, "unsoldPercentage"),
    )


def map_project_wise_summary(payload: Mapping[str, Any]) -> TeamOverview:
    """
    Map ``{result: [...], allSold, allUnsold, totalFlats}`` to a TeamOverview.
    """

    total = first_count(payload, ("totalFlats",))
    sold = first_count(payload, ("allSold",))
    rows = payload.get("result")
    return TeamOverview(
        total_flats=total,
        sold_flats=sold,
        unsold_flats=first_count(payload, ("allUnsold",)),
        sold_percentage=format_percentage(safe_rate(sold, total)),
        projects=[_map_row(row) for row in rows] if isinstance(rows, list) else [],
    )
