"""Pydantic models for the cycle API: history snapshots in, predictions out.

Inbound models accept both the engine field names and the column names used
by the storage collaborator (``avg_cycle_length``, ``computed_cycle_length``,
``log_date``), so rows can be forwarded unchanged.  Seasons leave the API
under their wire keys (``winter | lente | zomer | herfst | onbekend``).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import AliasChoices, Field

from cyclus.engine.base import (
    BleedingIntensity,
    BleedingLog,
    CalendarDay,
    CalendarView,
    ConfidenceCategory,
    CyclePreferences,
    CyclePrediction,
    CycleRecord,
    CycleTrend,
    Phase,
    SeasonRun,
    VariabilityCategory,
)
from cyclus.engine.labels import (
    phase_label,
    rationale_message,
    season_key,
    season_label,
    watchout_message,
)
from cyclus.engine.summary import CategoricalSummary
from cyclus.models.base import CyclusBase

MAX_CALENDAR_DAYS = 366


# ---------- Inbound ----------

class CyclePreferencesIn(CyclusBase):
    avg_cycle_length_days: int | None = Field(default=None, ge=1, le=180, alias="avg_cycle_length")
    avg_period_length_days: int | None = Field(default=None, ge=1, le=30, alias="avg_period_length")
    luteal_phase_length_days: int | None = Field(
        default=None, ge=1, le=30, alias="luteal_phase_length"
    )
    show_fertile_days: bool | None = None
    onboarding_completed: bool = False
    perimenopause: bool = False

    def to_engine(self) -> CyclePreferences:
        return CyclePreferences(
            avg_cycle_length_days=self.avg_cycle_length_days,
            avg_period_length_days=self.avg_period_length_days,
            luteal_phase_length_days=self.luteal_phase_length_days,
            show_fertile_days=self.show_fertile_days,
            onboarding_completed=self.onboarding_completed,
            perimenopause=self.perimenopause,
        )


class CycleRecordIn(CyclusBase):
    start_date: date
    computed_length_days: int | None = Field(default=None, alias="computed_cycle_length")
    is_anovulatory: bool = False

    def to_engine(self) -> CycleRecord:
        return CycleRecord(
            start_date=self.start_date,
            computed_length_days=self.computed_length_days,
            is_anovulatory=self.is_anovulatory,
        )


class BleedingLogIn(CyclusBase):
    log_date: date = Field(validation_alias=AliasChoices("log_date", "date"))
    intensity: BleedingIntensity
    is_intermenstrual: bool = False

    def to_engine(self) -> BleedingLog:
        return BleedingLog(
            date=self.log_date,
            intensity=self.intensity,
            is_intermenstrual=self.is_intermenstrual,
        )


class CycleSnapshot(CyclusBase):
    """Everything the engine needs for one user, read by the caller in one go."""

    preferences: CyclePreferencesIn | None = None
    cycles: list[CycleRecordIn] = Field(default_factory=list, max_length=120)
    bleeding_logs: list[BleedingLogIn] = Field(default_factory=list, max_length=1000)
    as_of: date | None = None

    def engine_cycles(self) -> list[CycleRecord]:
        return [c.to_engine() for c in self.cycles]

    def engine_preferences(self) -> CyclePreferences | None:
        return self.preferences.to_engine() if self.preferences else None

    def engine_bleeding_logs(self) -> list[BleedingLog]:
        return [log.to_engine() for log in self.bleeding_logs]


class CalendarRequest(CycleSnapshot):
    start: date | None = None
    end: date | None = None

    def bounds(self, default_start: date, default_end: date) -> tuple[date, date]:
        """Return the requested range with unset ends taken from the defaults."""
        return self.start or default_start, self.end or default_end


# ---------- Outbound ----------

class WatchoutRead(CyclusBase):
    code: str
    message: str


class CyclePredictionRead(CyclusBase):
    as_of: date
    avg_cycle_length_days: int
    avg_period_length_days: int
    luteal_phase_length_days: int
    current_day_in_cycle: int | None = None
    current_phase: Phase
    current_season: str
    phase_label: str
    season_label: str
    latest_cycle_start: date | None = None
    fertile_window_start: date | None = None
    fertile_window_end: date | None = None
    ovulation_min: date | None = None
    ovulation_max: date | None = None
    ovulation_date: date | None = None
    next_period_expected: date | None = None
    next_period_start_min: date | None = None
    next_period_start_max: date | None = None
    confidence_category: ConfidenceCategory
    variability_category: VariabilityCategory
    cycle_trend: CycleTrend
    cycles_used: int
    show_fertile_days: bool
    watchouts: list[WatchoutRead] = Field(default_factory=list)
    rationale: str
    rationale_message: str
    is_estimate: bool = True

    @classmethod
    def from_prediction(cls, prediction: CyclePrediction, locale: str = "nl") -> "CyclePredictionRead":
        data: dict[str, Any] = {
            "as_of": prediction.as_of,
            "avg_cycle_length_days": prediction.avg_cycle_length_days,
            "avg_period_length_days": prediction.avg_period_length_days,
            "luteal_phase_length_days": prediction.luteal_phase_length_days,
            "current_day_in_cycle": prediction.current_day_in_cycle,
            "current_phase": prediction.current_phase,
            "current_season": season_key(prediction.current_season),
            "phase_label": phase_label(prediction.current_phase, locale),
            "season_label": season_label(prediction.current_season, locale),
            "latest_cycle_start": prediction.latest_cycle_start,
            "next_period_expected": prediction.next_period_expected,
            "next_period_start_min": prediction.next_period_start_min,
            "next_period_start_max": prediction.next_period_start_max,
            "confidence_category": prediction.confidence_category,
            "variability_category": prediction.variability_category,
            "cycle_trend": prediction.cycle_trend,
            "cycles_used": prediction.cycles_used,
            "show_fertile_days": prediction.show_fertile_days,
            "watchouts": [
                WatchoutRead(code=w.value, message=watchout_message(w, locale))
                for w in prediction.watchouts
            ],
            "rationale": prediction.rationale.value,
            "rationale_message": rationale_message(prediction.rationale, locale),
        }
        # Fertility dates are withheld when the user hides fertile days
        if prediction.show_fertile_days:
            data.update(
                fertile_window_start=prediction.fertile_window_start,
                fertile_window_end=prediction.fertile_window_end,
                ovulation_min=prediction.ovulation_min,
                ovulation_max=prediction.ovulation_max,
                ovulation_date=prediction.ovulation_date,
            )
        return cls(**data)


class CalendarDayRead(CyclusBase):
    calendar_date: date = Field(
        validation_alias=AliasChoices("calendar_date", "date"),
        serialization_alias="date",
    )
    day_in_cycle: int | None = None
    phase: Phase
    season: str
    has_bleeding_logged: bool
    bleeding_intensity: BleedingIntensity | None = None
    is_intermenstrual: bool
    is_predicted_period: bool
    is_fertile: bool
    is_ovulation_day: bool
    is_today: bool

    @classmethod
    def from_day(cls, day: CalendarDay) -> "CalendarDayRead":
        return cls(
            calendar_date=day.date,
            day_in_cycle=day.day_in_cycle,
            phase=day.phase,
            season=season_key(day.season),
            has_bleeding_logged=day.has_bleeding_logged,
            bleeding_intensity=day.bleeding_intensity,
            is_intermenstrual=day.is_intermenstrual,
            is_predicted_period=day.is_predicted_period,
            is_fertile=day.is_fertile,
            is_ovulation_day=day.is_ovulation_day,
            is_today=day.is_today,
        )


class SeasonRunRead(CyclusBase):
    season: str
    label: str
    start_index: int
    end_index: int
    start_date: date
    end_date: date

    @classmethod
    def from_run(cls, run: SeasonRun, locale: str = "nl") -> "SeasonRunRead":
        return cls(
            season=season_key(run.season),
            label=season_label(run.season, locale),
            start_index=run.start_index,
            end_index=run.end_index,
            start_date=run.start_date,
            end_date=run.end_date,
        )


class CalendarRead(CyclusBase):
    prediction: CyclePredictionRead
    days: list[CalendarDayRead]
    runs: list[SeasonRunRead]
    prompt_bleeding_log: bool = False

    @classmethod
    def from_view(
        cls,
        prediction: CyclePrediction,
        view: CalendarView,
        prompt_bleeding_log: bool = False,
        locale: str = "nl",
    ) -> "CalendarRead":
        return cls(
            prediction=CyclePredictionRead.from_prediction(prediction, locale),
            days=[CalendarDayRead.from_day(d) for d in view.days],
            runs=[SeasonRunRead.from_run(r, locale) for r in view.runs],
            prompt_bleeding_log=prompt_bleeding_log,
        )


class CycleSummaryRead(CyclusBase):
    cycle_length_category: str
    variability_category: str
    data_volume: str
    bleeding_days: str
    trend: str
    phase: str
    season: str
    perimenopause: str

    @classmethod
    def from_summary(cls, summary: CategoricalSummary) -> "CycleSummaryRead":
        return cls(**summary.to_dict())
