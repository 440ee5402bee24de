"""Phase and season classification for any calendar date.

A date is first reduced to a 0-based day-in-cycle offset from the latest
recorded cycle start, modulo the effective cycle length, so dates before the
start or many cycles after it still land inside ``[0, L)``.  The offset is
then mapped to a phase by back-calculating ovulation from the luteal length:

    O = max(1, L - luteal)

    [0, period)            menstrual   winter
    [period, O - 1)        follicular  spring
    [O - 1, O + 1]         ovulatory   summer
    [O + 2, L)             luteal      autumn

Bands are clipped so they always partition ``[0, L)``: when the period runs
into the ovulatory band the follicular band collapses to zero width, and a
period as long as the cycle makes every day menstrual.

This module is the single source of the classification rule.  The calendar
segmenter and the predictor both call it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from cyclus.engine.base import PHASE_TO_SEASON, Phase, PhaseClassification, Season
from cyclus.engine.config_loader import EngineConfig, get_engine_config


def ovulation_day_offset(
    cycle_length: int,
    luteal_length: int,
    config: EngineConfig | None = None,
) -> int:
    """Return the estimated ovulation offset from the cycle start.

    Clamped to the configured minimum (day 1) so a luteal length at or above
    the cycle length never yields a negative offset.
    """
    min_offset = (config or get_engine_config()).ovulation.min_offset_days
    return max(min_offset, cycle_length - luteal_length)


@dataclass(frozen=True)
class PhaseBands:
    """Exclusive band ends over ``[0, cycle_length)``.

    ``0 <= menstrual_end <= follicular_end <= ovulatory_end <= cycle_length``
    always holds; luteal covers ``[ovulatory_end, cycle_length)``.
    """

    cycle_length: int
    ovulation_offset: int
    menstrual_end: int
    follicular_end: int
    ovulatory_end: int

    def phase_for(self, day_in_cycle: int) -> Phase:
        day = day_in_cycle % self.cycle_length
        if day < self.menstrual_end:
            return Phase.menstrual
        if day < self.follicular_end:
            return Phase.follicular
        if day < self.ovulatory_end:
            return Phase.ovulatory
        return Phase.luteal

    def span(self, phase: Phase) -> range:
        """Return the day offsets covered by ``phase`` (empty for unknown)."""
        return {
            Phase.menstrual: range(0, self.menstrual_end),
            Phase.follicular: range(self.menstrual_end, self.follicular_end),
            Phase.ovulatory: range(self.follicular_end, self.ovulatory_end),
            Phase.luteal: range(self.ovulatory_end, self.cycle_length),
        }.get(phase, range(0))


def phase_bands(
    cycle_length: int,
    period_length: int,
    luteal_length: int,
    config: EngineConfig | None = None,
) -> PhaseBands:
    """Compute the phase partition for one cycle length.

    Args:
        cycle_length:  Effective cycle length (clamped to at least 1 day).
        period_length: Resolved period length.
        luteal_length: Resolved luteal phase length.
        config:        Engine config (defaults to the global singleton).
    """
    config = config or get_engine_config()
    length = max(1, cycle_length)
    half_width = config.ovulation.phase_half_width_days
    offset = ovulation_day_offset(length, luteal_length, config)

    menstrual_end = min(max(0, period_length), length)
    follicular_end = min(max(offset - half_width, menstrual_end), length)
    ovulatory_end = min(max(offset + half_width + 1, follicular_end), length)

    return PhaseBands(
        cycle_length=length,
        ovulation_offset=offset,
        menstrual_end=menstrual_end,
        follicular_end=follicular_end,
        ovulatory_end=ovulatory_end,
    )


def day_in_cycle(target: date, cycle_start: date, cycle_length: int) -> int:
    """Return the 0-based offset of ``target`` in its (projected) cycle."""
    return (target - cycle_start).days % max(1, cycle_length)


def classify_date(
    target: date,
    latest_cycle_start: date | None,
    cycle_length: int,
    period_length: int,
    luteal_length: int,
    config: EngineConfig | None = None,
) -> PhaseClassification:
    """Classify a calendar date into day-in-cycle, phase and season.

    Args:
        target:             Date to classify.
        latest_cycle_start: Most recent recorded start, or None without history.
        cycle_length:       Effective cycle length.
        period_length:      Resolved period length.
        luteal_length:      Resolved luteal phase length.
        config:             Engine config (defaults to the global singleton).

    Returns:
        PhaseClassification; ``unknown``/``unknown`` with no day when there is
        no recorded start.
    """
    if latest_cycle_start is None:
        return PhaseClassification(day_in_cycle=None, phase=Phase.unknown, season=Season.unknown)

    bands = phase_bands(cycle_length, period_length, luteal_length, config)
    day = day_in_cycle(target, latest_cycle_start, bands.cycle_length)
    phase = bands.phase_for(day)
    return PhaseClassification(day_in_cycle=day, phase=phase, season=PHASE_TO_SEASON[phase])
