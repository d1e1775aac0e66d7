"""
sales_analytics/aggregator.py

Fold canonical flat records into a FlatsAnalytics report.

Formulas
--------
Sell Rate      = sold / total * 100          (0 when total is 0)
Total Revenue  = sum(price) over sold flats
Average Price  = sum(price) / total          (0 when total is 0)

Project and flat-type groups are independent partitions of the input:
every record lands in exactly one of each. Groups are emitted in order of
first occurrence and only for keys actually observed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from app.domain.flats_analytics import (
    FlatRecord,
    FlatsAnalytics,
    FlatStatus,
    ProjectSummary,
    TypeSummary,
)


def safe_rate(numerator: float, denominator: float) -> float:
    """
    Percentage of ``numerator`` over ``denominator``; 0.0 for an empty base.
    """

    if denominator == 0:
        return 0.0
    return numerator / denominator * 100.0


def safe_mean(total: float, count: int) -> float:
    if count == 0:
        return 0.0
    return total / count


@dataclass
class _Tally:
    total: int = 0
    sold: int = 0
    unsold: int = 0
    reserved: int = 0
    price_sum: float = 0.0
    revenue: float = 0.0

    def add(self, record: FlatRecord) -> None:
        self.total += 1
        self.price_sum += record.price
        if record.status == FlatStatus.SOLD:
            self.sold += 1
            self.revenue += record.price
        elif record.status == FlatStatus.RESERVED:
            self.reserved += 1
        else:
            self.unsold += 1


@dataclass
class _ProjectTally(_Tally):
    project_name: str = ""


@dataclass
class _Accumulator:
    overall: _Tally = field(default_factory=_Tally)
    projects: dict[str, _ProjectTally] = field(default_factory=dict)
    types: dict[str, _Tally] = field(default_factory=dict)


def aggregate(records: Sequence[FlatRecord]) -> FlatsAnalytics:
    """
    Build the aggregate report in a single pass over ``records``.
    """

    acc = _Accumulator()
    for record in records:
        acc.overall.add(record)

        project = acc.projects.get(record.project_id)
        if project is None:
            project = _ProjectTally(project_name=record.project_name)
            acc.projects[record.project_id] = project
        project.add(record)

        flat_type = acc.types.get(record.flat_type)
        if flat_type is None:
            flat_type = _Tally()
            acc.types[record.flat_type] = flat_type
        flat_type.add(record)

    overall = acc.overall
    return FlatsAnalytics(
        total_flats=overall.total,
        sold_flats=overall.sold,
        unsold_flats=overall.unsold,
        reserved_flats=overall.reserved,
        sell_rate=safe_rate(overall.sold, overall.total),
        average_price=safe_mean(overall.price_sum, overall.total),
        total_revenue=overall.revenue,
        project_wise=[
            ProjectSummary(
                project_id=project_id,
                project_name=tally.project_name,
                total_flats=tally.total,
                sold_flats=tally.sold,
                unsold_flats=tally.unsold,
                reserved_flats=tally.reserved,
                sell_rate=safe_rate(tally.sold, tally.total),
                average_price=safe_mean(tally.price_sum, tally.total),
            )
            for project_id, tally in acc.projects.items()
        ],
        flats_by_type=[
            TypeSummary(
                flat_type=flat_type,
                total=tally.total,
                sold=tally.sold,
                unsold=tally.unsold,
                reserved=tally.reserved,
                sell_rate=safe_rate(tally.sold, tally.total),
                average_price=safe_mean(tally.price_sum, tally.total),
            )
            for flat_type, tally in acc.types.items()
        ],
        flats=list(records),
    )
