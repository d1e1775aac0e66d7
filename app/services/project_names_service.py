"""
app/services/project_names_service.py

Project display-name lookup and enrichment of aggregate reports.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from functools import lru_cache

from app.connectors import ConnectorRequestError, SiteNoteConnector, get_sitenote_connector
from app.domain.flats_analytics import FlatsAnalytics, ResolvedAnalytics
from sales_analytics.cash import build_project_name_map

logger = logging.getLogger(__name__)


class ProjectNameService:
    """
    Fetch the id -> name mapping for a team's projects.
    """

    def __init__(self, *, connector: SiteNoteConnector) -> None:
        self._connector = connector

    def lookup(self, team_id: str) -> dict[str, str]:
        """
        Return the mapping, or an empty one when the lookup fails.
        """

        try:
            payload = self._connector.fetch_projects(team_id)
        except ConnectorRequestError as exc:
            logger.warning("Project name lookup failed team_id=%s error=%s", team_id, exc)
            return {}

        if not isinstance(payload, list):
            logger.warning(
                "Unexpected project list payload team_id=%s type=%s",
                team_id,
                type(payload).__name__,
            )
            return {}
        return build_project_name_map(payload)


def enrich_project_names(report: FlatsAnalytics, names: Mapping[str, str]) -> FlatsAnalytics:
    """
    Return a copy of ``report`` whose project groups carry known display names.

    Counts and ordering are untouched.
    """

    if not names:
        return report

    project_wise = [
        dataclasses.replace(project, project_name=names[project.project_id])
        if project.project_id in names
        else project
        for project in report.project_wise
    ]
    return dataclasses.replace(report, project_wise=project_wise)


def with_project_names(
    resolved: ResolvedAnalytics,
    project_names: ProjectNameService,
    team_id: str,
) -> ResolvedAnalytics:
    """
    Enrich a resolved report with display names. Sample data and reports
    without project groups are returned unchanged.
    """

    if resolved.outcome.is_sample_data or not resolved.report.project_wise:
        return resolved
    names = project_names.lookup(team_id)
    return ResolvedAnalytics(
        report=enrich_project_names(resolved.report, names),
        outcome=resolved.outcome,
    )


@lru_cache(maxsize=1)
def get_project_name_service() -> ProjectNameService:
    return ProjectNameService(connector=get_sitenote_connector())
