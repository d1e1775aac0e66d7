"""
Shared fixtures: an in-memory stand-in for the SiteNote connector.
"""

from __future__ import annotations

from typing import Any

import pytest

from app.connectors import ConnectorRequestError
from app.observability import RecordingEventSink

_MISSING = object()


class FakeSiteNoteConnector:
    """
    Returns canned payloads per endpoint. A payload that is an Exception
    instance is raised instead; an endpoint without a payload raises
    ConnectorRequestError as an unreachable upstream would.
    """

    def __init__(self, **payloads: Any) -> None:
        self._payloads = payloads
        self.calls: list[tuple[str, str]] = []

    def _answer(self, endpoint: str, team_id: str) -> Any:
        self.calls.append((endpoint, team_id))
        payload = self._payloads.get(endpoint, _MISSING)
        if payload is _MISSING:
            raise ConnectorRequestError(f"sitenote: {endpoint} unavailable.")
        if isinstance(payload, Exception):
            raise payload
        return payload

    def called(self, endpoint: str) -> bool:
        return any(name == endpoint for name, _ in self.calls)

    def fetch_team_flats(self, team_id: str) -> Any:
        return self._answer("team_flats", team_id)

    def fetch_team_analytics(self, team_id: str) -> Any:
        return self._answer("team_analytics", team_id)

    def fetch_project_wise_flats(self, team_id: str) -> Any:
        return self._answer("project_wise_flats", team_id)

    def fetch_projects(self, team_id: str) -> Any:
        return self._answer("projects", team_id)

    def fetch_outstanding_cash(self, team_id: str) -> Any:
        return self._answer("outstanding_cash", team_id)

    def fetch_project_outstanding_cash(self, team_id: str) -> Any:
        return self._answer("project_outstanding_cash", team_id)


@pytest.fixture()
def events() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture()
def sample_flats() -> list[dict[str, Any]]:
    return [
        {
            "_id": "f1",
            "projectId": "p1",
            "projectName": "Lake View",
            "bhkSize": "2BHK",
            "squareFeet": 1000,
            "customerName": "Asha Rao",
        },
        {
            "_id": "f2",
            "projectId": "p1",
            "projectName": "Lake View",
            "bhkSize": "3BHK",
            "isSold": True,
        },
        {
            "_id": "f3",
            "projectId": "p2",
            "projectName": "Hill Crest",
            "bhkSize": "1BHK",
            "status": "reserved",
        },
        {
            "_id": "f4",
            "projectId": "p2",
            "projectName": "Hill Crest",
            "bhkSize": "2BHK",
        },
    ]
