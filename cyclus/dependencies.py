"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from cyclus.config import Settings, get_settings
from cyclus.engine.config_loader import get_engine_config
from cyclus.engine.predictor import CycleEngine


def get_engine() -> CycleEngine:
    """Return an engine bound to the current (possibly hot-reloaded) config.

    Engines are cheap and stateless; building one per request picks up a
    reload without any cache invalidation.
    """
    return CycleEngine(get_engine_config())


# Annotated shortcuts for route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
Engine = Annotated[CycleEngine, Depends(get_engine)]
