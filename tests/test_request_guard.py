"""
tests/test_request_guard.py

LatestRequestGuard keeps only the newest completed result.
"""

from __future__ import annotations

from app.services.request_guard import LatestRequestGuard


class TestLatestRequestGuard:
    def test_empty_until_first_accept(self) -> None:
        guard: LatestRequestGuard[str] = LatestRequestGuard()
        assert guard.current is None
        assert guard.latest_token == 0

    def test_latest_request_is_kept(self) -> None:
        guard: LatestRequestGuard[str] = LatestRequestGuard()
        token = guard.begin()
        assert guard.accept(token, "team-a")
        assert guard.current == "team-a"

    def test_stale_completion_is_discarded(self) -> None:
        guard: LatestRequestGuard[str] = LatestRequestGuard()
        first = guard.begin()
        second = guard.begin()

        assert guard.accept(second, "team-b")
        assert not guard.accept(first, "team-a")
        assert guard.current == "team-b"

    def test_stale_completion_before_newer_one_is_also_dropped(self) -> None:
        guard: LatestRequestGuard[str] = LatestRequestGuard()
        first = guard.begin()
        guard.begin()

        assert not guard.accept(first, "team-a")
        assert guard.current is None
