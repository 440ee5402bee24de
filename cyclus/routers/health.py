"""Health check endpoint — public, no auth required."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from cyclus.dependencies import AppSettings
from cyclus.engine.config_loader import ConfigValidationError, get_engine_config

router = APIRouter(tags=["system"])
logger = logging.getLogger("cyclus.health")


@router.get("/health")
async def health_check(settings: AppSettings) -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Also reports whether the engine configuration is loaded.
    """
    engine_version: str | None = None
    try:
        engine_version = get_engine_config().version
    except (ConfigValidationError, FileNotFoundError) as exc:
        logger.warning("Health check engine config probe failed: %s", exc)

    return {
        "status": "healthy" if engine_version else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "engine_config": engine_version or "unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
