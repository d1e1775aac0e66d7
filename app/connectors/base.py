"""
app/connectors/base.py

Shared HTTP mechanics for upstream JSON APIs: pacing, retries with
exponential backoff, and a single error type for transport failures.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from app.config import ExternalHTTPSettings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class ConnectorRequestError(RuntimeError):
    """
    Raised when an upstream call cannot produce a JSON body.

    ``status_code`` is set when the failure was an HTTP error response.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PayloadShapeError(ValueError):
    """
    Raised when an upstream payload parses but does not have the expected shape.
    """


class _RetryableResponse(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"retryable status {status_code}")
        self.status_code = status_code


class BaseConnector:
    """
    Request helpers that return parsed JSON or raise ConnectorRequestError.
    """

    source: str

    def __init__(
        self,
        *,
        source: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self._session = session or requests.Session()
        self._http = http_settings
        self._min_interval_seconds = (
            1.0 / http_settings.rate_limit_per_second if http_settings.rate_limit_per_second > 0 else 0.0
        )
        self._last_sent_at: float = 0.0

    def _request_json(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        response = self._request(method=method, url=url, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Upstream returned non-JSON body source=%s url=%s", self.source, url)
            raise ConnectorRequestError(f"{self.source}: response was not valid JSON.") from exc

    def _request(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Send with up to ``max_retries`` extra attempts.

        Timeouts, connection errors and RETRYABLE_STATUS_CODES are retried;
        any other error status fails immediately.
        """

        attempts = self._http.max_retries + 1
        last_error: Exception | None = None
        for attempt in range(attempts):
            try:
                return self._send(method=method, url=url, params=params, headers=headers)
            except _RetryableResponse as exc:
                last_error = exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc

            if attempt + 1 >= attempts:
                break
            wait_seconds = self._backoff_seconds(attempt)
            logger.warning(
                "Retrying upstream request source=%s attempt=%s/%s wait_seconds=%.2f url=%s error=%s",
                self.source,
                attempt + 1,
                self._http.max_retries,
                wait_seconds,
                url,
                last_error,
            )
            time.sleep(wait_seconds)

        logger.error(
            "Upstream request gave up source=%s attempts=%s url=%s error=%s",
            self.source,
            attempts,
            url,
            last_error,
        )
        status_code = last_error.status_code if isinstance(last_error, _RetryableResponse) else None
        raise ConnectorRequestError(
            f"{self.source}: request failed after {attempts} attempts.",
            status_code=status_code,
        ) from last_error

    def _send(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> requests.Response:
        self._wait_for_slot()
        response = self._session.request(
            method=method,
            url=url,
            params=params,
            headers=headers,
            timeout=self._http.timeout_seconds,
        )
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise _RetryableResponse(response.status_code)
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            logger.error(
                "Upstream rejected request source=%s status=%s url=%s",
                self.source,
                response.status_code,
                url,
            )
            raise ConnectorRequestError(
                f"{self.source}: request failed with status {response.status_code}.",
                status_code=response.status_code,
            ) from exc
        return response

    def _backoff_seconds(self, attempt: int) -> float:
        return self._http.backoff_initial_seconds * (self._http.backoff_multiplier**attempt)

    def _wait_for_slot(self) -> None:
        """
        Space outbound requests at least ``1 / rate_limit_per_second`` apart.
        """

        if self._min_interval_seconds <= 0:
            return
        remaining = self._min_interval_seconds - (time.monotonic() - self._last_sent_at)
        if remaining > 0:
            time.sleep(remaining)
        self._last_sent_at = time.monotonic()
