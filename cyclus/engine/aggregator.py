"""Cycle history aggregation.

Turns the recorded cycle starts into the summary statistics every projection
works from:

- effective cycle length: rounded mean of the observed lengths, with the
  preference (or configured default) used only while nothing was observed
- variability: spread (max - min) of the observed lengths, bucketed
- sufficiency: how many observed lengths back the estimate, bucketed
- trend: whether the two most recent cycles are clearly shorter or longer
  than the two oldest

Only ``computed_length_days`` is trusted.  Records are sorted by start date
and nothing else is reconciled; hand-edited contradictory rows are the
storage layer's concern.
"""

from __future__ import annotations

import logging
import math
import statistics
from datetime import date
from typing import Iterable, Sequence

from cyclus.engine.base import (
    ConfidenceCategory,
    CycleRecord,
    CycleStats,
    CycleTrend,
    ResolvedPreferences,
    VariabilityCategory,
)
from cyclus.engine.config_loader import EngineConfig, get_engine_config

logger = logging.getLogger("cyclus.engine.aggregator")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class CycleHistoryAggregator:
    """Summarize a user's recorded cycles.

    Usage::

        aggregator = CycleHistoryAggregator()
        stats = aggregator.aggregate(records, resolved_preferences)
        stats.effective_cycle_length   # 30
        stats.variability_category     # VariabilityCategory.variable
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or get_engine_config()

    def aggregate(
        self,
        records: Sequence[CycleRecord],
        preferences: ResolvedPreferences,
    ) -> CycleStats:
        """Compute summary statistics over the recorded history.

        Args:
            records:     Recorded cycles, any order (most recent first is usual).
            preferences: Resolved preferences; supplies the fallback length.

        Returns:
            CycleStats.  Never raises for sparse or empty history.
        """
        ordered = sorted(records, key=lambda r: r.start_date, reverse=True)
        lengths = self.observed_lengths(ordered)
        latest_start = ordered[0].start_date if ordered else None

        if lengths:
            effective = _round_half_up(statistics.mean(lengths))
        else:
            effective = preferences.cycle_length_days

        spread = max(lengths) - min(lengths) if len(lengths) >= 2 else None

        stats = CycleStats(
            effective_cycle_length=effective,
            variability_days=spread,
            variability_category=self.categorize_variability(spread),
            sufficiency_category=self.categorize_sufficiency(len(lengths)),
            cycles_used=len(lengths),
            latest_cycle_start=latest_start,
            trend=self.detect_trend(lengths),
        )
        logger.debug(
            "Aggregated %d records (%d lengths): L=%d spread=%s %s/%s",
            len(ordered),
            len(lengths),
            stats.effective_cycle_length,
            spread,
            stats.variability_category.value,
            stats.sufficiency_category.value,
        )
        return stats

    @staticmethod
    def observed_lengths(records: Iterable[CycleRecord]) -> list[int]:
        """Return usable cycle lengths in record order.

        Unset lengths (ongoing cycle) are skipped; non-positive lengths can
        only come from duplicate start dates and are dropped.
        """
        lengths: list[int] = []
        for record in records:
            length = record.computed_length_days
            if length is None:
                continue
            if length <= 0:
                logger.warning(
                    "Dropping non-positive cycle length %d for cycle starting %s",
                    length,
                    record.start_date,
                )
                continue
            lengths.append(length)
        return lengths

    def categorize_variability(self, spread: int | None) -> VariabilityCategory:
        """Bucket the spread of observed lengths (None → unknown)."""
        if spread is None:
            return VariabilityCategory.unknown
        vc = self._config.variability
        if spread <= vc.regular_max_days:
            return VariabilityCategory.regular
        if spread <= vc.slightly_variable_max_days:
            return VariabilityCategory.slightly_variable
        return VariabilityCategory.variable

    def categorize_sufficiency(self, count: int) -> ConfidenceCategory:
        sc = self._config.sufficiency
        if count >= sc.adequate_min_cycles:
            return ConfidenceCategory.adequate
        if count >= sc.limited_min_cycles:
            return ConfidenceCategory.limited
        return ConfidenceCategory.insufficient

    def detect_trend(self, lengths: Sequence[int]) -> CycleTrend:
        """Compare the two most recent cycle lengths against the two oldest.

        Args:
            lengths: Observed lengths, most recent first.
        """
        if len(lengths) < 2:
            return CycleTrend.unknown
        if len(lengths) < 3:
            return CycleTrend.stable

        threshold = self._config.watchouts.trend_threshold_days
        recent = statistics.mean(lengths[:2])
        older = statistics.mean(lengths[-2:])
        if recent < older - threshold:
            return CycleTrend.shorter
        if recent > older + threshold:
            return CycleTrend.longer
        return CycleTrend.stable


def derive_cycle_records(
    start_dates: Iterable[date],
    config: EngineConfig | None = None,
) -> list[CycleRecord]:
    """Build cycle records from recorded start dates.

    Duplicate dates collapse to one start.  Each start's length is the gap to
    the next later start; the latest start stays open (length None).  Closed
    cycles longer than the long-cycle threshold are flagged anovulatory.

    Args:
        start_dates: Recorded first days of bleeding, any order.
        config:      Engine config (defaults to the global singleton).

    Returns:
        Records ordered most recent first, as storage returns them.
    """
    long_cycle_days = (config or get_engine_config()).watchouts.long_cycle_days
    starts = sorted(set(start_dates))

    records: list[CycleRecord] = []
    for current, following in zip(starts, starts[1:]):
        length = (following - current).days
        records.append(
            CycleRecord(
                start_date=current,
                computed_length_days=length,
                is_anovulatory=length > long_cycle_days,
            )
        )
    if starts:
        records.append(CycleRecord(start_date=starts[-1]))

    records.reverse()
    return records
