"""
app/services/flats_analytics_service.py

Fallback resolver for the flats analytics report.

Tiers are tried one at a time, each fully settled before the next:

    TRYING_PRIMARY   -> team flats endpoint, normalized and aggregated
    TRYING_SECONDARY -> analytics endpoint, mapped from its summary shape
    SYNTHETIC        -> seeded sample data, always flagged as such

The first tier that yields a report wins. Every rejected tier records a
reason. Transport errors, shape errors and unexpected exceptions are all
caught at the tier boundary; callers only ever receive a ResolvedAnalytics.

Concurrent calls for the same team are not de-duplicated. A caller that
may issue overlapping requests must discard stale completions itself
(see ``app.services.request_guard``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any, Final

from app.config import get_synthetic_data_settings
from app.connectors import (
    ConnectorRequestError,
    PayloadShapeError,
    SiteNoteConnector,
    get_sitenote_connector,
)
from app.domain.flats_analytics import (
    DataTier,
    FetchOutcome,
    FlatsAnalytics,
    ResolvedAnalytics,
    SchemaKind,
    TierRejection,
)
from app.observability import EventSink, LoggingEventSink
from sales_analytics.aggregator import aggregate
from sales_analytics.normalizer import normalize_many
from sales_analytics.summary import map_analytics_summary
from sales_analytics.synthetic import generate_synthetic_analytics

logger = logging.getLogger(__name__)

FLATS_PAYLOAD_KEYS: Final[tuple[str, ...]] = ("flats", "data")
"""Wrapper keys that may hold the flats list, in lookup order."""

SECONDARY_WARNING: Final[str] = "Using analytics data (flats endpoint unavailable)"
SYNTHETIC_WARNING: Final[str] = "Could not load live data. Showing sample data."


class ResolverState:
    TRYING_PRIMARY = "trying_primary"
    TRYING_SECONDARY = "trying_secondary"
    SYNTHETIC = "synthetic"
    RESOLVED = "resolved"


def extract_flat_rows(payload: Any) -> list[Any]:
    """
    Return the flats list from a bare list or a known wrapper object.

    Raises
    ------
    PayloadShapeError
        When no list can be found.
    """

    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in FLATS_PAYLOAD_KEYS:
            rows = payload.get(key)
            if isinstance(rows, list):
                return rows
        raise PayloadShapeError(
            f"flats payload has no list under any of {list(FLATS_PAYLOAD_KEYS)}"
        )
    raise PayloadShapeError(f"flats payload is {type(payload).__name__}, expected list or object")


class FlatsAnalyticsResolver:
    """
    Resolve a FlatsAnalytics report for one team through the fallback ladder.

    Stateless between calls; safe to share.
    """

    def __init__(
        self,
        *,
        connector: SiteNoteConnector,
        events: EventSink | None = None,
        synthetic_seed: int | None = None,
    ) -> None:
        self._connector = connector
        self._events = events or LoggingEventSink()
        self._synthetic_seed = synthetic_seed

    def resolve(self, team_id: str) -> ResolvedAnalytics:
        """
        Run the ladder for ``team_id``.

        Raises ValueError for a blank team id; nothing else escapes.
        """

        normalized_team_id = (team_id or "").strip()
        if not normalized_team_id:
            raise ValueError("team_id must not be blank.")

        rejections: list[TierRejection] = []

        self._transition(normalized_team_id, ResolverState.TRYING_PRIMARY)
        report = self._try_tier(
            DataTier.PRIMARY, normalized_team_id, self._load_primary, rejections
        )
        if report is not None:
            return self._resolved(normalized_team_id, report, DataTier.PRIMARY, rejections, None)

        self._transition(normalized_team_id, ResolverState.TRYING_SECONDARY)
        report = self._try_tier(
            DataTier.SECONDARY, normalized_team_id, self._load_secondary, rejections
        )
        if report is not None:
            return self._resolved(
                normalized_team_id, report, DataTier.SECONDARY, rejections, SECONDARY_WARNING
            )

        self._transition(normalized_team_id, ResolverState.SYNTHETIC)
        report = generate_synthetic_analytics(self._synthetic_seed)
        return self._resolved(
            normalized_team_id, report, DataTier.SYNTHETIC, rejections, SYNTHETIC_WARNING
        )

    def _load_primary(self, team_id: str) -> FlatsAnalytics:
        rows = extract_flat_rows(self._connector.fetch_team_flats(team_id))
        if not rows:
            raise PayloadShapeError("flats endpoint returned no records")
        return aggregate(normalize_many(rows, SchemaKind.FLATS))

    def _load_secondary(self, team_id: str) -> FlatsAnalytics:
        payload = self._connector.fetch_team_analytics(team_id)
        if not isinstance(payload, Mapping):
            raise PayloadShapeError(
                f"analytics payload is {type(payload).__name__}, expected object"
            )
        return map_analytics_summary(payload)

    def _try_tier(
        self,
        tier: str,
        team_id: str,
        loader: Callable[[str], FlatsAnalytics],
        rejections: list[TierRejection],
    ) -> FlatsAnalytics | None:
        try:
            return loader(team_id)
        except ConnectorRequestError as exc:
            reason = f"request failed: {exc}"
        except PayloadShapeError as exc:
            reason = f"unusable payload: {exc}"
        except Exception as exc:
            logger.exception(
                "Unhandled analytics tier failure tier=%s team_id=%s error=%s",
                tier,
                team_id,
                exc,
            )
            reason = f"unexpected error: {exc}"

        rejections.append(TierRejection(tier=tier, reason=reason))
        self._events.emit("analytics_tier_rejected", team_id=team_id, tier=tier, reason=reason)
        return None

    def _transition(self, team_id: str, state: str) -> None:
        self._events.emit("analytics_state_changed", team_id=team_id, state=state)

    def _resolved(
        self,
        team_id: str,
        report: FlatsAnalytics,
        tier: str,
        rejections: list[TierRejection],
        warning: str | None,
    ) -> ResolvedAnalytics:
        self._transition(team_id, ResolverState.RESOLVED)
        self._events.emit(
            "analytics_resolved",
            team_id=team_id,
            tier=tier,
            total_flats=report.total_flats,
            rejected_tiers=[rejection.tier for rejection in rejections],
        )
        return ResolvedAnalytics(
            report=report,
            outcome=FetchOutcome(tier=tier, reasons=list(rejections), warning=warning),
        )


@lru_cache(maxsize=1)
def get_flats_analytics_resolver() -> FlatsAnalyticsResolver:
    """
    Build and cache the flats analytics resolver.
    """

    return FlatsAnalyticsResolver(
        connector=get_sitenote_connector(),
        synthetic_seed=get_synthetic_data_settings().seed,
    )
