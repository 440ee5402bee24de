"""Cycle prediction engine.

Wires the components together:

    preferences ─► resolver ─┐
                             ├─► aggregator ─► classifier / estimator / forecaster ─► prediction
    cycle records ───────────┘                                                          │
    bleeding logs ─────────────────────────────────────────────► calendar segmenter ◄───┘

Does NOT assume a 28-day cycle once any cycle length has been observed, and
tolerates empty, minimal or irregular history — typical of perimenopause.
Every call is a pure function of its arguments: "today" is always passed in
as ``as_of``, nothing is read from the clock and nothing is cached.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from cyclus.engine.aggregator import CycleHistoryAggregator
from cyclus.engine.base import (
    BleedingLog,
    CalendarView,
    ConfidenceCategory,
    CyclePreferences,
    CyclePrediction,
    CycleRecord,
    CycleStats,
    Rationale,
    VariabilityCategory,
    Watchout,
)
from cyclus.engine.calendar import CalendarSegmenter
from cyclus.engine.classifier import classify_date
from cyclus.engine.config_loader import EngineConfig, get_engine_config
from cyclus.engine.estimator import estimate_fertility
from cyclus.engine.forecaster import forecast_next_period
from cyclus.engine.preferences import resolve_preferences
from cyclus.engine.summary import CategoricalSummary, summarize

logger = logging.getLogger("cyclus.engine.predictor")


class CycleEngine:
    """Predict cycle phase, fertile window and next period from recorded history.

    Usage::

        engine = CycleEngine()
        prediction = engine.predict(
            cycles=records,
            preferences=prefs,
            as_of=date(2026, 2, 15),
        )
        view = engine.calendar(prediction, bleeding_logs)
        print(prediction.current_phase, prediction.next_period_start_min)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or get_engine_config()
        self._aggregator = CycleHistoryAggregator(self._config)
        self._segmenter = CalendarSegmenter(self._config)

    @property
    def config(self) -> EngineConfig:
        return self._config

    def predict(
        self,
        cycles: Sequence[CycleRecord],
        preferences: CyclePreferences | None,
        as_of: date,
    ) -> CyclePrediction:
        """Generate a prediction from recorded cycles.

        Args:
            cycles:      Recorded cycles (most recent first, re-sorted anyway).
            preferences: Stored preferences, or None when the user has none.
            as_of:       The day to classify as "today".

        Returns:
            CyclePrediction.  Without history only the categories and resolved
            lengths are set; every date field stays None.
        """
        resolved = resolve_preferences(preferences, self._config)
        stats = self._aggregator.aggregate(cycles, resolved)

        prediction = CyclePrediction(
            as_of=as_of,
            avg_cycle_length_days=stats.effective_cycle_length,
            avg_period_length_days=resolved.period_length_days,
            luteal_phase_length_days=resolved.luteal_phase_days,
            show_fertile_days=resolved.show_fertile_days,
            confidence_category=stats.sufficiency_category,
            variability_category=stats.variability_category,
            variability_days=stats.variability_days,
            cycles_used=stats.cycles_used,
            cycle_trend=stats.trend,
            latest_cycle_start=stats.latest_cycle_start,
            watchouts=self._watchouts(stats),
            rationale=self._rationale(stats),
        )

        anchor = stats.latest_cycle_start
        if anchor is None:
            logger.debug("No recorded cycles as of %s; returning unknown phase", as_of)
            return prediction

        today = classify_date(
            as_of,
            anchor,
            stats.effective_cycle_length,
            resolved.period_length_days,
            resolved.luteal_phase_days,
            self._config,
        )
        prediction.current_day_in_cycle = today.day_in_cycle
        prediction.current_phase = today.phase
        prediction.current_season = today.season

        fertility = estimate_fertility(
            anchor, stats.effective_cycle_length, resolved.luteal_phase_days, self._config
        )
        prediction.ovulation_min = fertility.ovulation_min
        prediction.ovulation_max = fertility.ovulation_max
        prediction.ovulation_date = fertility.ovulation_date
        prediction.fertile_window_start = fertility.fertile_window_start
        prediction.fertile_window_end = fertility.fertile_window_end

        forecast = forecast_next_period(
            anchor, stats.effective_cycle_length, stats.variability_category, self._config
        )
        prediction.next_period_expected = forecast.expected
        prediction.next_period_start_min = forecast.start_min
        prediction.next_period_start_max = forecast.start_max

        logger.debug(
            "Prediction as of %s: day %s %s, next period %s..%s (%s)",
            as_of,
            prediction.current_day_in_cycle,
            prediction.current_phase.value,
            prediction.next_period_start_min,
            prediction.next_period_start_max,
            prediction.confidence_category.value,
        )
        return prediction

    def calendar(
        self,
        prediction: CyclePrediction,
        bleeding_logs: Iterable[BleedingLog] = (),
        start: date | None = None,
        end: date | None = None,
    ) -> CalendarView:
        """Build the calendar view for a prediction (default window around ``as_of``)."""
        return self._segmenter.build(prediction, bleeding_logs, start=start, end=end)

    def summarize(
        self,
        prediction: CyclePrediction,
        bleeding_logs: Iterable[BleedingLog] = (),
        preferences: CyclePreferences | None = None,
    ) -> CategoricalSummary:
        """Reduce a prediction to the categorical summary safe for analytics/AI."""
        perimenopause = bool(preferences and preferences.perimenopause)
        return summarize(prediction, bleeding_logs, perimenopause, self._config)

    def should_prompt_bleeding_log(
        self,
        prediction: CyclePrediction,
        bleeding_logs: Iterable[BleedingLog] = (),
    ) -> bool:
        """Return True when the user should be asked to log today's bleeding.

        That is: ``as_of`` is within the first days after the latest recorded
        start and nothing has been logged for ``as_of`` yet.  Projected future
        cycles never trigger a prompt.
        """
        if prediction.latest_cycle_start is None:
            return False
        days_since_start = (prediction.as_of - prediction.latest_cycle_start).days
        if not 0 <= days_since_start < self._config.reminders.bleeding_prompt_days:
            return False
        return all(log.date != prediction.as_of for log in bleeding_logs)

    def _watchouts(self, stats: CycleStats) -> list[Watchout]:
        watchouts: list[Watchout] = []
        if stats.cycles_used and stats.effective_cycle_length > self._config.watchouts.long_cycle_days:
            watchouts.append(Watchout.long_cycles)
        if stats.variability_category == VariabilityCategory.variable:
            watchouts.append(Watchout.high_variability)
        if (
            stats.latest_cycle_start is not None
            and stats.sufficiency_category != ConfidenceCategory.adequate
        ):
            watchouts.append(Watchout.few_cycles)
        return watchouts

    @staticmethod
    def _rationale(stats: CycleStats) -> Rationale:
        if stats.cycles_used == 0:
            return Rationale.insufficient_data
        if stats.variability_category == VariabilityCategory.variable:
            return Rationale.variable_cycle
        return Rationale.recent_cycles
