"""
app/services/outstanding_cash_service.py

Outstanding and received cash per team and per project.

The total and the project-wise figures come from separate endpoints and
fail independently: each failure adds one message to the report and
leaves its part empty.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Final

from app.config import get_cash_settings
from app.connectors import (
    ConnectorRequestError,
    PayloadShapeError,
    SiteNoteConnector,
    get_sitenote_connector,
)
from app.domain.flats_analytics import CashRow, OutstandingCashReport
from app.services.project_names_service import ProjectNameService, get_project_name_service
from sales_analytics.accessors import to_number
from sales_analytics.cash import MIN_OUTSTANDING, build_cash_rows, stacked_cash_rows, summarize_cash

logger = logging.getLogger(__name__)

TOTAL_FETCH_ERROR: Final[str] = "Failed to fetch total outstanding cash"
PROJECT_FETCH_ERROR: Final[str] = "Failed to fetch project-wise outstanding cash"


def _mapping_field(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise PayloadShapeError(f"'{key}' is {type(value).__name__}, expected object")
    return value


class OutstandingCashService:
    def __init__(
        self,
        *,
        connector: SiteNoteConnector,
        project_names: ProjectNameService,
        min_outstanding: float = MIN_OUTSTANDING,
    ) -> None:
        self._connector = connector
        self._project_names = project_names
        self._min_outstanding = min_outstanding

    def load(self, team_id: str) -> OutstandingCashReport:
        normalized_team_id = (team_id or "").strip()
        if not normalized_team_id:
            raise ValueError("team_id must not be blank.")

        errors: list[str] = []

        total_outstanding = self._fetch_total(normalized_team_id)
        if total_outstanding is None:
            errors.append(TOTAL_FETCH_ERROR)

        project_figures = self._fetch_project_figures(normalized_team_id)
        if project_figures is None:
            errors.append(PROJECT_FETCH_ERROR)
            outstanding_by_project: Mapping[str, Any] = {}
            received_by_project: Mapping[str, Any] = {}
        else:
            outstanding_by_project, received_by_project = project_figures

        rows: list[CashRow] = []
        if outstanding_by_project:
            names = self._project_names.lookup(normalized_team_id)
            rows = build_cash_rows(
                outstanding_by_project,
                received_by_project,
                names,
                min_outstanding=self._min_outstanding,
            )

        summary = None
        if total_outstanding is not None and project_figures is not None:
            summary = summarize_cash(total_outstanding, received_by_project)

        return OutstandingCashReport(
            summary=summary,
            rows=rows,
            stacked_rows=stacked_cash_rows(rows),
            errors=errors,
        )

    def _fetch_total(self, team_id: str) -> float | None:
        try:
            payload = self._connector.fetch_outstanding_cash(team_id)
            if not isinstance(payload, Mapping):
                raise PayloadShapeError(
                    f"outstanding cash payload is {type(payload).__name__}, expected object"
                )
            total = to_number(payload.get("totalOutstandingCash"))
            if total is None:
                raise PayloadShapeError("totalOutstandingCash is missing or not numeric")
        except (ConnectorRequestError, PayloadShapeError) as exc:
            logger.warning("Outstanding cash fetch failed team_id=%s error=%s", team_id, exc)
            return None
        return total

    def _fetch_project_figures(
        self, team_id: str
    ) -> tuple[Mapping[str, Any], Mapping[str, Any]] | None:
        try:
            payload = self._connector.fetch_project_outstanding_cash(team_id)
            if not isinstance(payload, Mapping):
                raise PayloadShapeError(
                    f"project cash payload is {type(payload).__name__}, expected object"
                )
            outstanding = _mapping_field(payload, "projectWiseOutstandingCash")
            received = _mapping_field(payload, "projectWiseReceivedCash")
        except (ConnectorRequestError, PayloadShapeError) as exc:
            logger.warning(
                "Project-wise outstanding cash fetch failed team_id=%s error=%s",
                team_id,
                exc,
            )
            return None
        return outstanding, received


@lru_cache(maxsize=1)
def get_outstanding_cash_service() -> OutstandingCashService:
    return OutstandingCashService(
        connector=get_sitenote_connector(),
        project_names=get_project_name_service(),
        min_outstanding=get_cash_settings().min_outstanding,
    )
