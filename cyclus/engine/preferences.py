"""Preferences resolver: the only place preference defaults are applied.

Stored preferences are nullable (a user may skip onboarding questions, or no
preferences row may exist at all).  Every other engine component works on
``ResolvedPreferences`` and never sees an unset value.
"""

from __future__ import annotations

import logging

from cyclus.engine.base import CyclePreferences, ResolvedPreferences
from cyclus.engine.config_loader import EngineConfig, get_engine_config

logger = logging.getLogger("cyclus.engine.preferences")


def _positive_or_default(value: int | None, default: int, name: str) -> int:
    if value is None:
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%s, using default %d", name, value, default)
        return default
    return value


def resolve_preferences(
    preferences: CyclePreferences | None,
    config: EngineConfig | None = None,
) -> ResolvedPreferences:
    """Apply configured defaults to stored preferences.

    Args:
        preferences: Stored preferences row, or None when the user has none.
        config:      Engine config (defaults to the global singleton).

    Returns:
        ResolvedPreferences with every field set.
    """
    defaults = (config or get_engine_config()).defaults
    prefs = preferences or CyclePreferences()

    cycle_length = _positive_or_default(
        prefs.avg_cycle_length_days, defaults.cycle_length_days, "avg_cycle_length_days"
    )
    period_length = _positive_or_default(
        prefs.avg_period_length_days, defaults.period_length_days, "avg_period_length_days"
    )
    luteal_length = _positive_or_default(
        prefs.luteal_phase_length_days, defaults.luteal_phase_days, "luteal_phase_length_days"
    )
    show_fertile = (
        defaults.show_fertile_days
        if prefs.show_fertile_days is None
        else prefs.show_fertile_days
    )

    return ResolvedPreferences(
        cycle_length_days=cycle_length,
        period_length_days=period_length,
        luteal_phase_days=luteal_length,
        show_fertile_days=show_fertile,
        onboarding_completed=prefs.onboarding_completed,
        perimenopause=prefs.perimenopause,
    )
