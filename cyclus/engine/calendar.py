"""Calendar segmentation: per-day flags plus contiguous season runs.

For every date in a window the segmenter derives:

- day-in-cycle, phase and season (via the shared classifier)
- whether bleeding was logged, and with which intensity
- whether the day falls in the predicted next period — suppressed whenever
  any bleeding log exists for that day, logged data always wins
- whether the day is fertile, and whether it is the single ovulation day
  (both suppressed when the user hides fertility data)

Days are then grouped into maximal runs of the same season for section
headers.  The runs partition the day list: concatenating them reproduces it
exactly, in order.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable

from cyclus.engine.base import (
    BleedingIntensity,
    BleedingLog,
    CalendarDay,
    CalendarView,
    CyclePrediction,
    SeasonRun,
)
from cyclus.engine.classifier import classify_date
from cyclus.engine.config_loader import EngineConfig, get_engine_config

logger = logging.getLogger("cyclus.engine.calendar")


def calendar_window(
    as_of: date,
    config: EngineConfig | None = None,
) -> tuple[date, date]:
    """Return the default inclusive display window around ``as_of``.

    With the bundled config: 7 days before through 27 days after (35 days).
    """
    cc = (config or get_engine_config()).calendar
    return _shift(as_of, -cc.days_before), _shift(as_of, cc.days_after)


def _shift(day: date, days: int) -> date:
    """Add days, saturating at the ends of the representable date range."""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def _in_range(day: date, start: date | None, end: date | None) -> bool:
    """Inclusive range test; an unset bound means no range."""
    return start is not None and end is not None and start <= day <= end


def group_season_runs(days: list[CalendarDay]) -> list[SeasonRun]:
    """Group consecutive days with the same season into runs."""
    runs: list[SeasonRun] = []
    run_start = 0
    for index in range(1, len(days) + 1):
        if index == len(days) or days[index].season != days[run_start].season:
            runs.append(
                SeasonRun(
                    season=days[run_start].season,
                    start_index=run_start,
                    end_index=index - 1,
                    start_date=days[run_start].date,
                    end_date=days[index - 1].date,
                )
            )
            run_start = index
    return runs


class CalendarSegmenter:
    """Build the day-by-day calendar for a prediction.

    Usage::

        segmenter = CalendarSegmenter()
        view = segmenter.build(prediction, bleeding_logs)
        for run in view.runs:
            render_header(run.season, view.days_in_run(run))
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or get_engine_config()

    def build(
        self,
        prediction: CyclePrediction,
        bleeding_logs: Iterable[BleedingLog] = (),
        start: date | None = None,
        end: date | None = None,
    ) -> CalendarView:
        """Classify every date in ``[start, end]`` and group the season runs.

        Args:
            prediction:    Prediction to decorate the days with.
            bleeding_logs: Logged bleeding days (any range; extra days ignored).
            start:         First day (defaults to the configured window start).
            end:           Last day, inclusive (defaults to the window end).

        Returns:
            CalendarView.  An empty range yields no days and no runs.
        """
        default_start, default_end = calendar_window(prediction.as_of, self._config)
        start = start or default_start
        end = end or default_end

        logs_by_date: dict[date, BleedingLog] = {log.date: log for log in bleeding_logs}

        # [min, max + period) as an inclusive range
        predicted_period_end: date | None = None
        if prediction.next_period_start_max is not None:
            predicted_period_end = _shift(
                prediction.next_period_start_max, prediction.avg_period_length_days - 1
            )

        show_fertile = prediction.show_fertile_days
        days: list[CalendarDay] = []
        for offset in range((end - start).days + 1):
            current = start + timedelta(days=offset)
            classification = classify_date(
                current,
                prediction.latest_cycle_start,
                prediction.avg_cycle_length_days,
                prediction.avg_period_length_days,
                prediction.luteal_phase_length_days,
                self._config,
            )
            log = logs_by_date.get(current)
            days.append(
                CalendarDay(
                    date=current,
                    day_in_cycle=classification.day_in_cycle,
                    phase=classification.phase,
                    season=classification.season,
                    has_bleeding_logged=log is not None and log.intensity != BleedingIntensity.none,
                    bleeding_intensity=log.intensity if log else None,
                    is_intermenstrual=bool(log and log.is_intermenstrual),
                    is_predicted_period=log is None
                    and _in_range(current, prediction.next_period_start_min, predicted_period_end),
                    is_fertile=show_fertile
                    and _in_range(
                        current, prediction.fertile_window_start, prediction.fertile_window_end
                    ),
                    is_ovulation_day=show_fertile
                    and prediction.ovulation_date is not None
                    and current == prediction.ovulation_date,
                    is_today=current == prediction.as_of,
                )
            )

        runs = group_season_runs(days)
        logger.debug(
            "Built calendar %s..%s: %d days in %d season runs", start, end, len(days), len(runs)
        )
        return CalendarView(days=days, runs=runs)
