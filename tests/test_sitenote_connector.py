"""
tests/test_sitenote_connector.py

SiteNoteConnector URL building, retry policy and error mapping.

The requests session is a Mock; backoff sleeps are patched out.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest
import requests

from app.config import ExternalHTTPSettings, SiteNoteAPISettings
from app.connectors import ConnectorRequestError, SiteNoteConnector


def _response(status_code: int, payload: Any = None) -> Mock:
    response = Mock(status_code=status_code)
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return response


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    sleeps: list[float] = []
    monkeypatch.setattr("app.connectors.base.time.sleep", sleeps.append)
    return sleeps


@pytest.fixture()
def session() -> Mock:
    return Mock(spec=requests.Session)


def _connector(session: Mock, max_retries: int = 2) -> SiteNoteConnector:
    return SiteNoteConnector(
        settings=SiteNoteAPISettings(base_url="https://api.example.test/api/"),
        http_settings=ExternalHTTPSettings(
            max_retries=max_retries,
            backoff_initial_seconds=0.5,
            backoff_multiplier=2.0,
            rate_limit_per_second=0,
        ),
        session=session,
    )


class TestEndpoints:
    @pytest.mark.parametrize(
        "method_name, path",
        [
            ("fetch_team_flats", "flats/getallteamflats/team-1"),
            ("fetch_team_analytics", "analytics/team-1"),
            ("fetch_project_wise_flats", "flats/getprojectwiseflats/team-1"),
            ("fetch_projects", "project/getProjectsByTeamId/team-1"),
            ("fetch_outstanding_cash", "payment/outstanding-cash/team-1"),
            ("fetch_project_outstanding_cash", "payment/outstanding-cash-project/team-1"),
        ],
    )
    def test_urls(self, session: Mock, method_name: str, path: str) -> None:
        session.request.return_value = _response(200, {"ok": True})
        result = getattr(_connector(session), method_name)("team-1")

        assert result == {"ok": True}
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == f"https://api.example.test/api/{path}"

    def test_team_id_is_escaped(self, session: Mock) -> None:
        session.request.return_value = _response(200, [])
        _connector(session).fetch_team_flats(" team/1 ")
        assert session.request.call_args.kwargs["url"].endswith("/getallteamflats/team%2F1")

    def test_blank_team_id_never_hits_network(self, session: Mock) -> None:
        with pytest.raises(ValueError):
            _connector(session).fetch_team_flats("  ")
        session.request.assert_not_called()


class TestRetryPolicy:
    def test_retryable_status_then_success(self, session: Mock, no_sleep: list[float]) -> None:
        session.request.side_effect = [_response(503), _response(200, [1])]
        assert _connector(session).fetch_team_flats("team-1") == [1]
        assert session.request.call_count == 2
        assert no_sleep == [0.5]

    def test_client_error_is_not_retried(self, session: Mock) -> None:
        session.request.return_value = _response(404)
        with pytest.raises(ConnectorRequestError) as excinfo:
            _connector(session).fetch_team_flats("team-1")
        assert excinfo.value.status_code == 404
        assert session.request.call_count == 1

    def test_connection_errors_exhaust_retries(self, session: Mock, no_sleep: list[float]) -> None:
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ConnectorRequestError):
            _connector(session, max_retries=2).fetch_team_flats("team-1")
        assert session.request.call_count == 3
        assert no_sleep == [0.5, 1.0]

    def test_persistent_rate_limit_reports_status(self, session: Mock) -> None:
        session.request.return_value = _response(429)
        with pytest.raises(ConnectorRequestError) as excinfo:
            _connector(session, max_retries=1).fetch_team_flats("team-1")
        assert excinfo.value.status_code == 429

    def test_invalid_json_is_a_request_error(self, session: Mock) -> None:
        response = _response(200)
        response.json.side_effect = ValueError("Expecting value")
        session.request.return_value = response
        with pytest.raises(ConnectorRequestError, match="not valid JSON"):
            _connector(session).fetch_team_analytics("team-1")
