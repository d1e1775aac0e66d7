"""
sales_analytics/cash.py

Outstanding and received cash computations for the payments view.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Final

from app.domain.flats_analytics import CashRow, CashSummary, StackedCashRow
from sales_analytics.accessors import first_text, to_number
from sales_analytics.aggregator import safe_rate

MIN_OUTSTANDING: Final[float] = 10_000.0
"""Projects owing less than this are left out of the project table."""


def _amount(value: Any) -> float:
    number = to_number(value)
    return number if number is not None else 0.0


def build_project_name_map(projects: Iterable[Any]) -> dict[str, str]:
    """
    Map both ``projectId`` and ``_id`` of every project to its name.
    """

    names: dict[str, str] = {}
    for project in projects:
        if not isinstance(project, Mapping):
            continue
        name = first_text(project, ("projectName",))
        if not name:
            continue
        for key in ("projectId", "_id"):
            project_id = first_text(project, (key,))
            if project_id:
                names[project_id] = name
    return names


def display_name(project_id: str, names: Mapping[str, str]) -> str:
    return names.get(project_id) or f"Project {project_id[:8]}..."


def build_cash_rows(
    outstanding_by_project: Mapping[str, Any],
    received_by_project: Mapping[str, Any] | None,
    names: Mapping[str, str],
    *,
    min_outstanding: float = MIN_OUTSTANDING,
) -> list[CashRow]:
    """
    One row per project, in payload order, dropping small balances.
    """

    received_map = received_by_project or {}
    rows: list[CashRow] = []
    for project_id, raw_outstanding in outstanding_by_project.items():
        outstanding = _amount(raw_outstanding)
        if outstanding < min_outstanding:
            continue
        received = _amount(received_map.get(project_id))
        rows.append(
            CashRow(
                project_id=str(project_id),
                project_name=display_name(str(project_id), names),
                outstanding=outstanding,
                received=received,
                completion_rate=safe_rate(received, outstanding),
            )
        )
    return rows


def stacked_cash_rows(rows: Iterable[CashRow]) -> list[StackedCashRow]:
    """
    Split each project's outstanding amount into received and remaining.
    """

    return [
        StackedCashRow(
            project_name=row.project_name,
            received=row.received,
            remaining=max(0.0, row.outstanding - row.received),
            outstanding=row.outstanding,
        )
        for row in rows
    ]


def summarize_cash(
    total_outstanding: float,
    received_by_project: Mapping[str, Any] | None,
) -> CashSummary:
    total_received = sum(_amount(value) for value in (received_by_project or {}).values())
    due = total_outstanding - total_received
    return CashSummary(
        total_outstanding=total_outstanding,
        total_received=total_received,
        due=due,
        due_percentage=safe_rate(due, total_outstanding) if total_outstanding > 0 else 0.0,
    )
