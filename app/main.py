from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from app.config import get_sitenote_api_settings
from app.schemas.analytics import HealthResponse

API_VERSION = "1.0.0"


def _validate_env() -> None:
    """
    Validate configuration at startup.

    Raises RuntimeError listing every invalid value so the operator can fix
    all problems in one restart cycle.
    """

    errors: list[str] = []

    base_url = get_sitenote_api_settings().base_url
    if not base_url.startswith(("http://", "https://")):
        errors.append(
            f"SITENOTE_API_BASE_URL='{base_url}' is not valid. It must start with http:// or https://."
        )

    seed = os.getenv("SYNTHETIC_DATA_SEED", "").strip()
    if seed and not seed.lstrip("-").isdigit():
        errors.append(f"SYNTHETIC_DATA_SEED='{seed}' is not an integer.")

    if errors:
        raise RuntimeError(
            "Startup validation failed, invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="SiteNote Sales Analytics API",
        version=API_VERSION,
    )

    from app.api.routers import analytics_router, payments_router

    application.include_router(analytics_router)
    application.include_router(payments_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok", version=API_VERSION)

    return application


app = create_app()
