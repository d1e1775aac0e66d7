"""
app/connectors/sitenote_connector.py

Connector for the SiteNote analytics API (flats, analytics, projects, payments).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any
from urllib.parse import quote

import requests

from app.config import (
    ExternalHTTPSettings,
    SiteNoteAPISettings,
    get_external_http_settings,
    get_sitenote_api_settings,
)
from app.connectors.base import BaseConnector

JSON_HEADERS = {"Content-Type": "application/json"}


class SiteNoteConnector(BaseConnector):
    """
    Thin per-endpoint wrappers. Every method returns parsed JSON as-is and
    raises ConnectorRequestError on transport failure; shape checks belong
    to the caller.
    """

    def __init__(
        self,
        *,
        settings: SiteNoteAPISettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="sitenote", http_settings=http_settings, session=session)
        self._settings = settings

    def fetch_team_flats(self, team_id: str) -> Any:
        return self._get(f"flats/getallteamflats/{self._team_segment(team_id)}")

    def fetch_team_analytics(self, team_id: str) -> Any:
        return self._get(f"analytics/{self._team_segment(team_id)}")

    def fetch_project_wise_flats(self, team_id: str) -> Any:
        return self._get(f"flats/getprojectwiseflats/{self._team_segment(team_id)}")

    def fetch_projects(self, team_id: str) -> Any:
        return self._get(f"project/getProjectsByTeamId/{self._team_segment(team_id)}")

    def fetch_outstanding_cash(self, team_id: str) -> Any:
        return self._get(f"payment/outstanding-cash/{self._team_segment(team_id)}")

    def fetch_project_outstanding_cash(self, team_id: str) -> Any:
        return self._get(f"payment/outstanding-cash-project/{self._team_segment(team_id)}")

    def _get(self, path: str) -> Any:
        url = f"{self._settings.base_url.rstrip('/')}/{path}"
        return self._request_json(method="GET", url=url, headers=JSON_HEADERS)

    @staticmethod
    def _team_segment(team_id: str) -> str:
        normalized = (team_id or "").strip()
        if not normalized:
            raise ValueError("team_id must not be blank.")
        return quote(normalized, safe="")


@lru_cache(maxsize=1)
def get_sitenote_connector() -> SiteNoteConnector:
    """
    Build and cache the shared SiteNote connector.
    """

    return SiteNoteConnector(
        settings=get_sitenote_api_settings(),
        http_settings=get_external_http_settings(),
    )
