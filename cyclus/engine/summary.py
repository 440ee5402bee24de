"""Categorical summaries for analytics and narrative-insight generation.

Anything that leaves the application for analytics or text generation gets
this summary and nothing else: coarse categories only, never dates, exact
lengths, counts, or identifiers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable

from cyclus.engine.base import BleedingIntensity, BleedingLog, CyclePrediction
from cyclus.engine.config_loader import EngineConfig, get_engine_config
from cyclus.engine.labels import season_key


@dataclass(frozen=True)
class CategoricalSummary:
    """Privacy-safe view of a prediction.

    Attributes:
        cycle_length_category: 'short', 'average', 'long' or 'unknown'.
        variability_category:  Variability category value.
        data_volume:           Sufficiency category value.
        bleeding_days:         'none', 'few', 'average' or 'many'.
        trend:                 Cycle trend value.
        phase:                 Current phase value.
        season:                Current season key ('lente', ...).
        perimenopause:         'yes' or 'unknown'.
    """

    cycle_length_category: str
    variability_category: str
    data_volume: str
    bleeding_days: str
    trend: str
    phase: str
    season: str
    perimenopause: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def categorize_cycle_length(
    prediction: CyclePrediction,
    config: EngineConfig | None = None,
) -> str:
    """Bucket the effective cycle length; 'unknown' until a length was observed."""
    if prediction.cycles_used == 0:
        return "unknown"
    sc = (config or get_engine_config()).summary
    length = prediction.avg_cycle_length_days
    if length < sc.short_cycle_below_days:
        return "short"
    if length > sc.long_cycle_above_days:
        return "long"
    return "average"


def categorize_bleeding_days(
    bleeding_logs: Iterable[BleedingLog],
    config: EngineConfig | None = None,
) -> str:
    sc = (config or get_engine_config()).summary
    count = len({log.date for log in bleeding_logs if log.intensity != BleedingIntensity.none})
    if count == 0:
        return "none"
    if count <= sc.bleeding_days_few_max:
        return "few"
    if count <= sc.bleeding_days_average_max:
        return "average"
    return "many"


def summarize(
    prediction: CyclePrediction,
    bleeding_logs: Iterable[BleedingLog] = (),
    perimenopause: bool = False,
    config: EngineConfig | None = None,
) -> CategoricalSummary:
    """Reduce a prediction (plus logged bleeding) to categorical features.

    Args:
        prediction:    Engine prediction.
        bleeding_logs: Bleeding logs of the period being summarized.
        perimenopause: Whether the user reported being perimenopausal.
        config:        Engine config (defaults to the global singleton).
    """
    config = config or get_engine_config()
    return CategoricalSummary(
        cycle_length_category=categorize_cycle_length(prediction, config),
        variability_category=prediction.variability_category.value,
        data_volume=prediction.confidence_category.value,
        bleeding_days=categorize_bleeding_days(bleeding_logs, config),
        trend=prediction.cycle_trend.value,
        phase=prediction.current_phase.value,
        season=season_key(prediction.current_season),
        perimenopause="yes" if perimenopause else "unknown",
    )
