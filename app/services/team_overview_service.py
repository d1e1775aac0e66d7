"""
app/services/team_overview_service.py

Headline sold/unsold overview for one team, with a sample-data fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Final

from app.connectors import (
    ConnectorRequestError,
    PayloadShapeError,
    SiteNoteConnector,
    get_sitenote_connector,
)
from app.domain.flats_analytics import ResolvedOverview
from sales_analytics.overview import SAMPLE_TEAM_OVERVIEW, map_project_wise_summary

logger = logging.getLogger(__name__)

OVERVIEW_FALLBACK_WARNING: Final[str] = "Failed to load analytics data. Showing sample data."


class TeamOverviewService:
    def __init__(self, *, connector: SiteNoteConnector) -> None:
        self._connector = connector

    def load(self, team_id: str) -> ResolvedOverview:
        """
        Fetch the project-wise summary; fall back to the fixed sample on failure.
        """

        normalized_team_id = (team_id or "").strip()
        if not normalized_team_id:
            raise ValueError("team_id must not be blank.")

        try:
            payload = self._connector.fetch_project_wise_flats(normalized_team_id)
            if not isinstance(payload, Mapping):
                raise PayloadShapeError(
                    f"project-wise payload is {type(payload).__name__}, expected object"
                )
        except (ConnectorRequestError, PayloadShapeError) as exc:
            logger.warning(
                "Team overview fetch failed team_id=%s error=%s",
                normalized_team_id,
                exc,
            )
            return ResolvedOverview(overview=SAMPLE_TEAM_OVERVIEW, warning=OVERVIEW_FALLBACK_WARNING)

        return ResolvedOverview(overview=map_project_wise_summary(payload))


@lru_cache(maxsize=1)
def get_team_overview_service() -> TeamOverviewService:
    return TeamOverviewService(connector=get_sitenote_connector())
