"""Cyclus cycle phase & fertility prediction engine.

Pure, synchronous computation over a snapshot of recorded history: no I/O,
no clock reads, no shared mutable state apart from the immutable config.

Core modules:
    base          — Canonical input/output dataclasses and enums
    config_loader — Load/validate/hot-reload engine_config.yaml
    preferences   — Apply preference defaults (the only place they live)
    aggregator    — Cycle length statistics, variability, sufficiency, trend
    classifier    — Day-in-cycle → phase → season
    estimator     — Ovulation band and fertile window
    forecaster    — Next-period range
    calendar      — Per-day flags and season runs
    labels        — Season wire keys and localized labels
    summary       — Categorical, privacy-safe summaries
    predictor     — CycleEngine, the single entry point
"""

from cyclus.engine.base import (
    BleedingIntensity,
    BleedingLog,
    CalendarDay,
    CalendarView,
    ConfidenceCategory,
    CyclePreferences,
    CyclePrediction,
    CycleRecord,
    Phase,
    Season,
    SeasonRun,
    VariabilityCategory,
)
from cyclus.engine.config_loader import EngineConfig, get_engine_config
from cyclus.engine.predictor import CycleEngine

__all__ = [
    "CycleEngine",
    "CyclePrediction",
    "CyclePreferences",
    "CycleRecord",
    "BleedingLog",
    "BleedingIntensity",
    "CalendarDay",
    "CalendarView",
    "SeasonRun",
    "Phase",
    "Season",
    "VariabilityCategory",
    "ConfidenceCategory",
    "EngineConfig",
    "get_engine_config",
]
