"""
app/api/routers/analytics_router.py

Flats analytics and team overview endpoints.

GET /analytics/{team_id}/flats
    Resolved report plus its provenance (tier, warning, rejected tiers).
    Never fails because of upstream problems: degraded tiers are reported
    in the payload, not as an error status.

GET /analytics/{team_id}/overview
    Headline sold/unsold figures from the project-wise summary.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.domain.flats_analytics import FlatsAnalytics
from app.schemas.analytics import (
    FlatResponse,
    FlatsAnalyticsResponse,
    FormattedFiguresResponse,
    ProjectSummaryResponse,
    ProjectWiseRowResponse,
    TeamOverviewResponse,
    TierRejectionResponse,
    TypeSummaryResponse,
)
from app.services.flats_analytics_service import (
    FlatsAnalyticsResolver,
    get_flats_analytics_resolver,
)
from app.services.project_names_service import (
    ProjectNameService,
    get_project_name_service,
    with_project_names,
)
from app.services.team_overview_service import TeamOverviewService, get_team_overview_service
from sales_analytics.formatting import format_compact_currency, format_percentage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _formatted(report: FlatsAnalytics) -> FormattedFiguresResponse:
    return FormattedFiguresResponse(
        sell_rate=format_percentage(report.sell_rate),
        average_price=format_compact_currency(report.average_price),
        total_revenue=format_compact_currency(report.total_revenue),
    )


@router.get("/{team_id}/flats", response_model=FlatsAnalyticsResponse)
def get_flats_analytics(
    team_id: str,
    include_flats: bool = Query(default=False, description="Include the per-flat list"),
    enrich_names: bool = Query(default=True, description="Replace project ids with display names"),
    resolver: FlatsAnalyticsResolver = Depends(get_flats_analytics_resolver),
    project_names: ProjectNameService = Depends(get_project_name_service),
) -> FlatsAnalyticsResponse:
    """
    Resolve the flats analytics report for one team.
    """

    try:
        resolved = resolver.resolve(team_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if enrich_names:
        resolved = with_project_names(resolved, project_names, team_id.strip())

    report = resolved.report
    outcome = resolved.outcome

    if outcome.is_degraded:
        logger.info(
            "Serving degraded analytics team_id=%s tier=%s",
            team_id,
            outcome.tier,
        )

    return FlatsAnalyticsResponse(
        team_id=team_id.strip(),
        tier=outcome.tier,
        warning=outcome.warning,
        rejected_tiers=[TierRejectionResponse.model_validate(item) for item in outcome.reasons],
        total_flats=report.total_flats,
        sold_flats=report.sold_flats,
        unsold_flats=report.unsold_flats,
        reserved_flats=report.reserved_flats,
        sell_rate=report.sell_rate,
        average_price=report.average_price,
        total_revenue=report.total_revenue,
        formatted=_formatted(report),
        project_wise=[ProjectSummaryResponse.model_validate(item) for item in report.project_wise],
        flats_by_type=[TypeSummaryResponse.model_validate(item) for item in report.flats_by_type],
        flats=[FlatResponse.model_validate(item) for item in report.flats] if include_flats else None,
    )


@router.get("/{team_id}/overview", response_model=TeamOverviewResponse)
def get_team_overview(
    team_id: str,
    overview_service: TeamOverviewService = Depends(get_team_overview_service),
) -> TeamOverviewResponse:
    try:
        resolved = overview_service.load(team_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    overview = resolved.overview
    return TeamOverviewResponse(
        team_id=team_id.strip(),
        warning=resolved.warning,
        total_flats=overview.total_flats,
        sold_flats=overview.sold_flats,
        unsold_flats=overview.unsold_flats,
        sold_percentage=overview.sold_percentage,
        projects=[ProjectWiseRowResponse.model_validate(row) for row in overview.projects],
    )
