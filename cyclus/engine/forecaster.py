"""Next-period forecasting.

The expected start is one effective cycle length after the latest recorded
start.  The forecast is reported as a range whose half-width grows with the
observed variability (regular ±1, slightly variable ±3, variable or unknown
±5 days with the bundled config).
"""

from __future__ import annotations

from datetime import date, timedelta

from cyclus.engine.base import PeriodForecast, VariabilityCategory
from cyclus.engine.config_loader import EngineConfig, get_engine_config


def forecast_next_period(
    latest_cycle_start: date,
    cycle_length: int,
    variability: VariabilityCategory,
    config: EngineConfig | None = None,
) -> PeriodForecast:
    """Project the next bleeding start as a (min, max) range.

    Args:
        latest_cycle_start: Anchor cycle start.
        cycle_length:       Effective cycle length.
        variability:        Variability category from the aggregator.
        config:             Engine config (defaults to the global singleton).
    """
    band = (config or get_engine_config()).forecast.band_for(variability)
    expected = latest_cycle_start + timedelta(days=cycle_length)
    return PeriodForecast(
        expected=expected,
        start_min=expected - timedelta(days=band),
        start_max=expected + timedelta(days=band),
        band_days=band,
    )
