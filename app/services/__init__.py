"""
app/services package marker.
"""

from app.services.flats_analytics_service import (
    FlatsAnalyticsResolver,
    ResolverState,
    get_flats_analytics_resolver,
)
from app.services.outstanding_cash_service import (
    OutstandingCashService,
    get_outstanding_cash_service,
)
from app.services.project_names_service import (
    ProjectNameService,
    enrich_project_names,
    get_project_name_service,
    with_project_names,
)
from app.services.request_guard import LatestRequestGuard
from app.services.team_overview_service import TeamOverviewService, get_team_overview_service

__all__ = [
    "FlatsAnalyticsResolver",
    "ResolverState",
    "get_flats_analytics_resolver",
    "OutstandingCashService",
    "get_outstanding_cash_service",
    "ProjectNameService",
    "enrich_project_names",
    "get_project_name_service",
    "with_project_names",
    "LatestRequestGuard",
    "TeamOverviewService",
    "get_team_overview_service",
]
