"""Canonical data models for the Cyclus prediction engine.

Inputs (preferences, cycle records, bleeding logs) arrive from the storage
collaborator as plain values; outputs (prediction, calendar days, season
runs) are consumed by rendering and by the categorical summary.  These
dataclasses are the single source of truth shared by every engine component.

Phase and season are language-neutral enums.  Wire keys and localized labels
are looked up in ``cyclus.engine.labels``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Phase(str, Enum):
    menstrual = "menstrual"
    follicular = "follicular"
    ovulatory = "ovulatory"
    luteal = "luteal"
    unknown = "unknown"


class Season(str, Enum):
    """Seasonal metaphor for a phase (winter = menstrual, ..., autumn = luteal)."""

    winter = "winter"
    spring = "spring"
    summer = "summer"
    autumn = "autumn"
    unknown = "unknown"


PHASE_TO_SEASON: dict[Phase, Season] = {
    Phase.menstrual: Season.winter,
    Phase.follicular: Season.spring,
    Phase.ovulatory: Season.summer,
    Phase.luteal: Season.autumn,
    Phase.unknown: Season.unknown,
}


class BleedingIntensity(str, Enum):
    """Bleeding intensity as stored by the application (Dutch wire literals)."""

    none = "geen"
    spotting = "spotting"
    light = "licht"
    normal = "normaal"
    heavy = "hevig"


class VariabilityCategory(str, Enum):
    unknown = "unknown"
    regular = "regular"
    slightly_variable = "slightly-variable"
    variable = "variable"


class ConfidenceCategory(str, Enum):
    insufficient = "insufficient"
    limited = "limited"
    adequate = "adequate"


class CycleTrend(str, Enum):
    unknown = "unknown"
    stable = "stable"
    shorter = "shorter"
    longer = "longer"


class Watchout(str, Enum):
    """Non-diagnostic observations attached to a prediction."""

    long_cycles = "long_cycles"
    high_variability = "high_variability"
    few_cycles = "few_cycles"


class Rationale(str, Enum):
    """Why the prediction is as (un)certain as it is; shown next to the dates."""

    insufficient_data = "insufficient_data"
    variable_cycle = "variable_cycle"
    recent_cycles = "recent_cycles"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CyclePreferences:
    """User-declared cycle settings, as stored.  Any numeric field may be unset.

    Attributes:
        avg_cycle_length_days:    Declared average cycle length.
        avg_period_length_days:   Declared average bleeding duration.
        luteal_phase_length_days: Days from ovulation to the next period.
        show_fertile_days:        Whether fertility data may be surfaced.
        onboarding_completed:     Set once the user finished cycle onboarding.
        perimenopause:            User reported being perimenopausal.
    """

    avg_cycle_length_days: int | None = None
    avg_period_length_days: int | None = None
    luteal_phase_length_days: int | None = None
    show_fertile_days: bool | None = None
    onboarding_completed: bool = False
    perimenopause: bool = False


@dataclass(frozen=True)
class ResolvedPreferences:
    """Preferences with every default applied.  Produced only by the resolver."""

    cycle_length_days: int
    period_length_days: int
    luteal_phase_days: int
    show_fertile_days: bool
    onboarding_completed: bool
    perimenopause: bool


@dataclass(frozen=True)
class CycleRecord:
    """A recorded cycle start.

    Attributes:
        start_date:           First day of bleeding (user-entered ground truth).
        computed_length_days: Days until the next recorded start; None while the
                              cycle is ongoing.
        is_anovulatory:       Closed cycle longer than the long-cycle threshold.
    """

    start_date: date
    computed_length_days: int | None = None
    is_anovulatory: bool = False


@dataclass(frozen=True)
class BleedingLog:
    date: date
    intensity: BleedingIntensity
    is_intermenstrual: bool = False


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CycleStats:
    """Summary statistics over the recorded history.

    Attributes:
        effective_cycle_length: Rounded mean of observed lengths, or the
                                preference/default when nothing was observed.
        variability_days:       max - min of observed lengths (None if < 2).
        variability_category:   Bucketed variability.
        sufficiency_category:   Bucketed number of observed lengths.
        cycles_used:            Number of observed lengths used.
        latest_cycle_start:     Most recent recorded start (None without history).
        trend:                  Recent vs. older cycle lengths.
    """

    effective_cycle_length: int
    variability_days: int | None
    variability_category: VariabilityCategory
    sufficiency_category: ConfidenceCategory
    cycles_used: int
    latest_cycle_start: date | None
    trend: CycleTrend = CycleTrend.unknown


@dataclass(frozen=True)
class PhaseClassification:
    day_in_cycle: int | None
    phase: Phase
    season: Season


@dataclass(frozen=True)
class FertilityEstimate:
    """Ovulation band and fertile window as absolute dates."""

    ovulation_day_offset: int
    ovulation_min: date
    ovulation_max: date
    ovulation_date: date
    fertile_window_start: date
    fertile_window_end: date


@dataclass(frozen=True)
class PeriodForecast:
    expected: date
    start_min: date
    start_max: date
    band_days: int


@dataclass
class CyclePrediction:
    """Engine output for one user as of one day.

    Every date field is an estimate.  Without any recorded cycle start the
    phase and season are ``unknown`` and all date fields stay ``None``.

    Attributes:
        as_of:                    The explicit "today" the prediction was made for.
        avg_cycle_length_days:    Effective cycle length used for every projection.
        current_day_in_cycle:     0-based offset of ``as_of`` in the cycle.
        current_phase:            Phase of ``as_of``.
        current_season:           Seasonal alias of ``current_phase``.
        fertile_window_start:     First fertile day (inclusive).
        fertile_window_end:       Last fertile day (inclusive).
        ovulation_min:            Earliest ovulation estimate.
        ovulation_max:            Latest ovulation estimate.
        ovulation_date:           Midpoint of the ovulation band.
        next_period_expected:     Unwidened next-period estimate.
        next_period_start_min:    Earliest expected next period start.
        next_period_start_max:    Latest expected next period start.
        confidence_category:      Data sufficiency.
        variability_category:     Spread of observed cycle lengths.
        variability_days:         Raw spread (None with fewer than 2 cycles).
        cycles_used:              Number of observed cycle lengths.
        cycle_trend:              Whether recent cycles are getting shorter/longer.
        latest_cycle_start:       Anchor of all offsets.
        avg_period_length_days:   Resolved period length.
        luteal_phase_length_days: Resolved luteal length.
        show_fertile_days:        Resolved fertility display preference.
        watchouts:                Non-diagnostic observation codes.
        rationale:                Basis of the estimate, as a code.
    """

    as_of: date
    avg_cycle_length_days: int
    avg_period_length_days: int
    luteal_phase_length_days: int
    show_fertile_days: bool
    confidence_category: ConfidenceCategory
    variability_category: VariabilityCategory
    current_phase: Phase = Phase.unknown
    current_season: Season = Season.unknown
    current_day_in_cycle: int | None = None
    latest_cycle_start: date | None = None
    fertile_window_start: date | None = None
    fertile_window_end: date | None = None
    ovulation_min: date | None = None
    ovulation_max: date | None = None
    ovulation_date: date | None = None
    next_period_expected: date | None = None
    next_period_start_min: date | None = None
    next_period_start_max: date | None = None
    variability_days: int | None = None
    cycles_used: int = 0
    cycle_trend: CycleTrend = CycleTrend.unknown
    watchouts: list[Watchout] = field(default_factory=list)
    rationale: Rationale = Rationale.insufficient_data

    @property
    def has_history(self) -> bool:
        return self.latest_cycle_start is not None


@dataclass(frozen=True)
class CalendarDay:
    date: date
    day_in_cycle: int | None
    phase: Phase
    season: Season
    has_bleeding_logged: bool = False
    bleeding_intensity: BleedingIntensity | None = None
    is_intermenstrual: bool = False
    is_predicted_period: bool = False
    is_fertile: bool = False
    is_ovulation_day: bool = False
    is_today: bool = False


@dataclass(frozen=True)
class SeasonRun:
    """A maximal run of consecutive calendar days sharing one season.

    ``start_index`` and ``end_index`` are inclusive positions in the day list.
    """

    season: Season
    start_index: int
    end_index: int
    start_date: date
    end_date: date

    @property
    def length(self) -> int:
        return self.end_index - self.start_index + 1


@dataclass
class CalendarView:
    days: list[CalendarDay] = field(default_factory=list)
    runs: list[SeasonRun] = field(default_factory=list)

    def days_in_run(self, run: SeasonRun) -> list[CalendarDay]:
        return self.days[run.start_index : run.end_index + 1]
