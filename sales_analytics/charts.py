"""
sales_analytics/charts.py

Chart- and table-ready rows derived from aggregate reports.
"""

from __future__ import annotations

from typing import Any, Final

from app.domain.flats_analytics import FlatsAnalytics
from sales_analytics.aggregator import safe_rate
from sales_analytics.formatting import format_compact_currency, format_percentage

STATUS_COLORS: Final[dict[str, str]] = {
    "Sold": "#22c55e",
    "Unsold": "#6b7280",
    "Reserved": "#3b82f6",
}


def status_distribution(report: FlatsAnalytics) -> list[dict[str, Any]]:
    return [
        {"name": "Sold", "value": report.sold_flats, "color": STATUS_COLORS["Sold"]},
        {"name": "Unsold", "value": report.unsold_flats, "color": STATUS_COLORS["Unsold"]},
        {"name": "Reserved", "value": report.reserved_flats, "color": STATUS_COLORS["Reserved"]},
    ]


def sold_unsold_distribution(total_sold: int, total_unsold: int) -> list[dict[str, Any]]:
    return [
        {"name": "Sold Flats", "value": total_sold, "color": STATUS_COLORS["Sold"]},
        {"name": "Unsold Flats", "value": total_unsold, "color": STATUS_COLORS["Unsold"]},
    ]


def project_bar_rows(report: FlatsAnalytics) -> list[dict[str, Any]]:
    return [
        {
            "name": project.project_name,
            "total": project.total_flats,
            "sold": project.sold_flats,
            "unsold": project.unsold_flats,
            "reserved": project.reserved_flats,
            "sell_rate": format_percentage(project.sell_rate),
            "average_price": format_compact_currency(project.average_price),
        }
        for project in report.project_wise
    ]


def type_bar_rows(report: FlatsAnalytics) -> list[dict[str, Any]]:
    return [
        {
            "name": flat_type.flat_type,
            "total": flat_type.total,
            "sold": flat_type.sold,
            "unsold": flat_type.unsold,
            "reserved": flat_type.reserved,
            "sell_rate": format_percentage(safe_rate(flat_type.sold, flat_type.total)),
            "average_price": format_compact_currency(flat_type.average_price),
        }
        for flat_type in report.flats_by_type
    ]


def inventory_rows(report: FlatsAnalytics, limit: int = 50) -> list[dict[str, Any]]:
    """
    Table rows for the first ``limit`` flats of the report.
    """

    return [
        {
            "flat_number": flat.flat_number,
            "project": flat.project_name,
            "type": flat.flat_type,
            "size": f"{flat.size:,.0f} sq ft",
            "price": format_compact_currency(flat.price),
            "status": flat.status,
            "buyer": flat.buyer_name or "",
        }
        for flat in report.flats[: max(0, limit)]
    ]
