"""
app/services/request_guard.py

Keep only the newest completed result when requests may overlap.

Resolvers do not cancel or de-duplicate in-flight calls. A caller that
can start a new fetch before the previous one settles takes a token from
``begin()`` and hands the result to ``accept()``; results carrying an older
token than the newest issued one are dropped.
"""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class LatestRequestGuard(Generic[T]):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._current: T | None = None

    def begin(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def accept(self, token: int, value: T) -> bool:
        """
        Store ``value`` if ``token`` is the newest issued. Returns whether it was stored.
        """

        with self._lock:
            if token != self._issued:
                return False
            self._current = value
            return True

    @property
    def current(self) -> T | None:
        with self._lock:
            return self._current

    @property
    def latest_token(self) -> int:
        with self._lock:
            return self._issued
