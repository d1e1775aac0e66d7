"""
app/domain/flats_analytics.py

Domain models for flat sales analytics.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class SchemaKind:
    FLATS = "flats"
    ANALYTICS = "analytics"


class FlatStatus:
    SOLD = "sold"
    UNSOLD = "unsold"
    RESERVED = "reserved"

    ALL = (SOLD, UNSOLD, RESERVED)


class FlatType:
    ONE_BHK = "1BHK"
    TWO_BHK = "2BHK"
    THREE_BHK = "3BHK"
    FOUR_BHK = "4BHK"

    ORDERED = (ONE_BHK, TWO_BHK, THREE_BHK, FOUR_BHK)
    DEFAULT = TWO_BHK


class DataTier:
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class FlatRecord:
    """
    Canonical representation of one flat after normalization.
    """

    flat_id: str
    project_id: str
    project_name: str
    flat_number: str
    flat_type: str
    size: float
    price: float
    status: str
    buyer_name: str | None = None
    sold_date: str | None = None


@dataclass(frozen=True)
class ProjectSummary:
    """
    Per-project breakdown of flat counts and prices.
    """

    project_id: str
    project_name: str
    total_flats: int
    sold_flats: int
    unsold_flats: int
    reserved_flats: int
    sell_rate: float
    average_price: float


@dataclass(frozen=True)
class TypeSummary:
    """
    Per-flat-type breakdown of flat counts and prices.
    """

    flat_type: str
    total: int
    sold: int
    unsold: int
    reserved: int
    sell_rate: float
    average_price: float


@dataclass(frozen=True)
class FlatsAnalytics:
    """
    Aggregate report consumed by every chart and table.

    Recomputed on every fetch; never persisted.
    """

    total_flats: int
    sold_flats: int
    unsold_flats: int
    reserved_flats: int
    sell_rate: float
    average_price: float
    total_revenue: float
    project_wise: list[ProjectSummary] = field(default_factory=list)
    flats_by_type: list[TypeSummary] = field(default_factory=list)
    flats: list[FlatRecord] = field(default_factory=list)


@dataclass(frozen=True)
class TierRejection:
    """
    Why one tier of the fallback ladder was skipped.
    """

    tier: str
    reason: str


@dataclass(frozen=True)
class FetchOutcome:
    """
    Provenance of a resolved report: which tier produced it and why
    earlier tiers were rejected.
    """

    tier: str
    reasons: list[TierRejection] = field(default_factory=list)
    warning: str | None = None

    @property
    def is_degraded(self) -> bool:
        return self.tier != DataTier.PRIMARY

    @property
    def is_sample_data(self) -> bool:
        return self.tier == DataTier.SYNTHETIC


@dataclass(frozen=True)
class ResolvedAnalytics:
    report: FlatsAnalytics
    outcome: FetchOutcome


@dataclass(frozen=True)
class ProjectWiseRow:
    """
    One row of the project-wise sold/unsold summary.
    """

    project_name: str
    sold: int
    unsold: int
    sold_percentage: str
    unsold_percentage: str


@dataclass(frozen=True)
class TeamOverview:
    """
    Headline sold/unsold figures for one team.
    """

    total_flats: int
    sold_flats: int
    unsold_flats: int
    sold_percentage: str
    projects: list[ProjectWiseRow] = field(default_factory=list)


@dataclass(frozen=True)
class ResolvedOverview:
    overview: TeamOverview
    warning: str | None = None


@dataclass(frozen=True)
class CashRow:
    """
    Outstanding and received cash for one project.
    """

    project_id: str
    project_name: str
    outstanding: float
    received: float
    completion_rate: float


@dataclass(frozen=True)
class StackedCashRow:
    project_name: str
    received: float
    remaining: float
    outstanding: float


@dataclass(frozen=True)
class CashSummary:
    total_outstanding: float
    total_received: float
    due: float
    due_percentage: float


@dataclass(frozen=True)
class OutstandingCashReport:
    """
    Everything the outstanding-cash page renders for one team.

    ``summary`` is ``None`` when the total outstanding figure could not be
    fetched. ``errors`` lists one message per failed upstream call.
    """

    summary: CashSummary | None
    rows: list[CashRow] = field(default_factory=list)
    stacked_rows: list[StackedCashRow] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
