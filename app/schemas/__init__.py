"""
app/schemas package marker.
"""

from app.schemas.analytics import (
    CashRowResponse,
    CashSummaryResponse,
    FlatResponse,
    FlatsAnalyticsResponse,
    FormattedFiguresResponse,
    HealthResponse,
    OutstandingCashResponse,
    ProjectSummaryResponse,
    ProjectWiseRowResponse,
    StackedCashRowResponse,
    TeamOverviewResponse,
    TierRejectionResponse,
    TypeSummaryResponse,
)

__all__ = [
    "CashRowResponse",
    "CashSummaryResponse",
    "FlatResponse",
    "FlatsAnalyticsResponse",
    "FormattedFiguresResponse",
    "HealthResponse",
    "OutstandingCashResponse",
    "ProjectSummaryResponse",
    "ProjectWiseRowResponse",
    "StackedCashRowResponse",
    "TeamOverviewResponse",
    "TierRejectionResponse",
    "TypeSummaryResponse",
]
