"""
tests/test_flats_analytics_resolver.py

Fallback ladder behaviour of FlatsAnalyticsResolver.

The connector is replaced by an in-memory fake; no network is touched.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from app.connectors import ConnectorRequestError
from app.domain.flats_analytics import DataTier
from app.observability import RecordingEventSink
from app.services.flats_analytics_service import (
    SECONDARY_WARNING,
    SYNTHETIC_WARNING,
    FlatsAnalyticsResolver,
    ResolverState,
)
from sales_analytics.synthetic import generate_synthetic_analytics
from tests.conftest import FakeSiteNoteConnector

SECONDARY_PAYLOAD = {"flats": {"total": 10, "sold": 4, "unsold": 6, "sellRate": 40}}


def _resolver(connector: FakeSiteNoteConnector, events: RecordingEventSink) -> FlatsAnalyticsResolver:
    return FlatsAnalyticsResolver(connector=connector, events=events, synthetic_seed=42)


class TestPrimaryTier:
    def test_oversized_field_does_not_reject_live_flats(self, events: RecordingEventSink) -> None:
        rows = json.loads('[{"bhkSize": "2BHK", "squareFeet": 1' + "0" * 400 + '}, {"isSold": true}]')
        connector = FakeSiteNoteConnector(team_flats=rows)
        resolved = _resolver(connector, events).resolve("team-1")

        assert resolved.outcome.tier == DataTier.PRIMARY
        assert resolved.outcome.reasons == []
        assert resolved.report.total_flats == 2
        assert resolved.report.sold_flats == 1

    def test_bare_list_resolves_primary(
        self, sample_flats: list[dict[str, Any]], events: RecordingEventSink
    ) -> None:
        connector = FakeSiteNoteConnector(team_flats=sample_flats)
        resolved = _resolver(connector, events).resolve("team-1")

        assert resolved.outcome.tier == DataTier.PRIMARY
        assert resolved.outcome.reasons == []
        assert resolved.outcome.warning is None
        assert resolved.report.total_flats == 4
        assert not connector.called("team_analytics")

    @pytest.mark.parametrize("wrapper", ["flats", "data"])
    def test_wrapped_list_resolves_primary(
        self, wrapper: str, sample_flats: list[dict[str, Any]], events: RecordingEventSink
    ) -> None:
        connector = FakeSiteNoteConnector(team_flats={wrapper: sample_flats})
        resolved = _resolver(connector, events).resolve("team-1")
        assert resolved.outcome.tier == DataTier.PRIMARY

    def test_team_id_is_trimmed(
        self, sample_flats: list[dict[str, Any]], events: RecordingEventSink
    ) -> None:
        connector = FakeSiteNoteConnector(team_flats=sample_flats)
        _resolver(connector, events).resolve("  team-1 ")
        assert connector.calls == [("team_flats", "team-1")]


class TestSecondaryTier:
    def test_empty_primary_falls_through(self, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector(team_flats=[], team_analytics=SECONDARY_PAYLOAD)
        resolved = _resolver(connector, events).resolve("team-1")

        assert resolved.outcome.tier == DataTier.SECONDARY
        assert resolved.outcome.warning == SECONDARY_WARNING
        assert [r.tier for r in resolved.outcome.reasons] == [DataTier.PRIMARY]
        assert "no records" in resolved.outcome.reasons[0].reason

    def test_primary_request_failure_falls_through(self, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector(team_analytics=SECONDARY_PAYLOAD)
        resolved = _resolver(connector, events).resolve("team-1")

        assert resolved.outcome.tier == DataTier.SECONDARY
        assert resolved.outcome.reasons[0].reason.startswith("request failed")

    def test_primary_shape_error_falls_through(self, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector(
            team_flats={"items": []}, team_analytics=SECONDARY_PAYLOAD
        )
        resolved = _resolver(connector, events).resolve("team-1")
        assert resolved.outcome.reasons[0].reason.startswith("unusable payload")

    def test_summary_maps_directly(self, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector(team_flats=[], team_analytics=SECONDARY_PAYLOAD)
        report = _resolver(connector, events).resolve("team-1").report

        assert report.total_flats == 10
        assert report.sold_flats == 4
        assert report.unsold_flats == 6
        assert report.sell_rate == 40
        assert report.reserved_flats == 0
        assert report.flats_by_type == []
        assert report.flats == []

    def test_project_wise_entries_are_mapped(self, events: RecordingEventSink) -> None:
        payload = {
            **SECONDARY_PAYLOAD,
            "projectWise": [
                {"projectId": "p1", "name": "Lake View", "totalFlats": 6, "soldFlats": 3, "unsoldFlats": 3, "sellRate": 50},
            ],
        }
        connector = FakeSiteNoteConnector(team_analytics=payload)
        report = _resolver(connector, events).resolve("team-1").report

        (project,) = report.project_wise
        assert project.project_name == "Lake View"
        assert project.sell_rate == 50
        assert project.reserved_flats == 0


class TestSyntheticTier:
    def test_both_live_tiers_failing_yields_sample_data(self, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector(team_flats=[])
        resolved = _resolver(connector, events).resolve("team-1")

        assert resolved.outcome.tier == DataTier.SYNTHETIC
        assert resolved.outcome.is_sample_data
        assert resolved.outcome.warning == SYNTHETIC_WARNING
        assert [r.tier for r in resolved.outcome.reasons] == [DataTier.PRIMARY, DataTier.SECONDARY]
        assert resolved.report == generate_synthetic_analytics(42)

    def test_non_object_secondary_payload_rejected(self, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector(team_flats=[], team_analytics=[1, 2, 3])
        resolved = _resolver(connector, events).resolve("team-1")

        assert resolved.outcome.tier == DataTier.SYNTHETIC
        assert resolved.outcome.reasons[1].reason.startswith("unusable payload")

    def test_unexpected_exception_is_contained(self, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector(
            team_flats=RuntimeError("boom"), team_analytics=RuntimeError("bang")
        )
        resolved = _resolver(connector, events).resolve("team-1")

        assert resolved.outcome.tier == DataTier.SYNTHETIC
        assert resolved.outcome.reasons[0].reason == "unexpected error: boom"
        assert resolved.outcome.reasons[1].reason == "unexpected error: bang"


class TestResolverContract:
    @pytest.mark.parametrize("team_id", ["", "   "])
    def test_blank_team_id_rejected(self, team_id: str, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector()
        with pytest.raises(ValueError):
            _resolver(connector, events).resolve(team_id)
        assert connector.calls == []

    def test_state_transitions_are_emitted(self, events: RecordingEventSink) -> None:
        connector = FakeSiteNoteConnector(
            team_flats=ConnectorRequestError("sitenote: down"),
            team_analytics=SECONDARY_PAYLOAD,
        )
        _resolver(connector, events).resolve("team-1")

        states = [e.fields["state"] for e in events.events if e.name == "analytics_state_changed"]
        assert states == [
            ResolverState.TRYING_PRIMARY,
            ResolverState.TRYING_SECONDARY,
            ResolverState.RESOLVED,
        ]
        assert events.names().count("analytics_tier_rejected") == 1
        assert events.names()[-1] == "analytics_resolved"
        assert events.events[-1].fields["tier"] == DataTier.SECONDARY

    def test_each_call_runs_the_ladder_afresh(
        self, sample_flats: list[dict[str, Any]], events: RecordingEventSink
    ) -> None:
        connector = FakeSiteNoteConnector(team_flats=sample_flats)
        resolver = _resolver(connector, events)
        resolver.resolve("team-1")
        resolver.resolve("team-1")
        assert connector.calls.count(("team_flats", "team-1")) == 2
