"""
app/domain package marker.
"""

from app.domain.flats_analytics import (
    CashRow,
    CashSummary,
    DataTier,
    FetchOutcome,
    FlatRecord,
    FlatsAnalytics,
    FlatStatus,
    FlatType,
    OutstandingCashReport,
    ProjectSummary,
    ProjectWiseRow,
    ResolvedAnalytics,
    ResolvedOverview,
    SchemaKind,
    StackedCashRow,
    TeamOverview,
    TierRejection,
    TypeSummary,
)

__all__ = [
    "CashRow",
    "CashSummary",
    "DataTier",
    "FetchOutcome",
    "FlatRecord",
    "FlatsAnalytics",
    "FlatStatus",
    "FlatType",
    "OutstandingCashReport",
    "ProjectSummary",
    "ProjectWiseRow",
    "ResolvedAnalytics",
    "ResolvedOverview",
    "SchemaKind",
    "StackedCashRow",
    "TeamOverview",
    "TierRejection",
    "TypeSummary",
]
