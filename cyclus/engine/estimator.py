"""Fertile window and ovulation estimation.

Ovulation is back-calculated from the luteal phase length, which is far more
stable between cycles than the follicular phase.  The estimate is a band
rather than a day:

    O              = max(1, L - luteal)
    ovulation_min  = start + (O - band)
    ovulation_max  = start + (O + band)
    fertile window = [ovulation_min - before, ovulation_max + after]

``before`` covers sperm viability and ``after`` ovum viability.  The window
never starts before the cycle start it is anchored to.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from cyclus.engine.base import FertilityEstimate
from cyclus.engine.classifier import ovulation_day_offset
from cyclus.engine.config_loader import EngineConfig, get_engine_config

logger = logging.getLogger("cyclus.engine.estimator")


def band_midpoint(start: date, end: date) -> date:
    """Return the single midpoint date of an inclusive band (rounding down)."""
    return start + timedelta(days=(end - start).days // 2)


def estimate_fertility(
    latest_cycle_start: date,
    cycle_length: int,
    luteal_length: int,
    config: EngineConfig | None = None,
) -> FertilityEstimate:
    """Estimate the ovulation band and fertile window for the current cycle.

    Args:
        latest_cycle_start: Anchor cycle start.
        cycle_length:       Effective cycle length.
        luteal_length:      Resolved luteal phase length.
        config:             Engine config (defaults to the global singleton).

    Returns:
        FertilityEstimate with
        ``fertile_window_start <= ovulation_min <= ovulation_max <= fertile_window_end``.
    """
    config = config or get_engine_config()
    band = config.ovulation.estimate_band_days
    window = config.fertile_window

    offset = ovulation_day_offset(cycle_length, luteal_length, config)
    ovulation_min = max(latest_cycle_start, latest_cycle_start + timedelta(days=offset - band))
    ovulation_max = latest_cycle_start + timedelta(days=offset + band)

    fertile_start = max(
        latest_cycle_start,
        ovulation_min - timedelta(days=window.days_before_ovulation),
    )
    fertile_end = ovulation_max + timedelta(days=window.days_after_ovulation)

    if cycle_length - luteal_length < offset:
        logger.debug(
            "Ovulation offset clamped to %d (L=%d, luteal=%d)",
            offset,
            cycle_length,
            luteal_length,
        )

    return FertilityEstimate(
        ovulation_day_offset=offset,
        ovulation_min=ovulation_min,
        ovulation_max=ovulation_max,
        ovulation_date=band_midpoint(ovulation_min, ovulation_max),
        fertile_window_start=fertile_start,
        fertile_window_end=fertile_end,
    )
