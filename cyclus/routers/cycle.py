"""Stateless cycle prediction endpoints.

The caller reads the user's preferences, cycles and bleeding logs from
storage and posts them as one snapshot; nothing is persisted here.  When the
snapshot carries no ``as_of`` the server's current date is used — the engine
itself never reads the clock.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from cyclus.dependencies import Engine
from cyclus.engine.calendar import calendar_window
from cyclus.models.cycle import (
    MAX_CALENDAR_DAYS,
    CalendarRead,
    CalendarRequest,
    CyclePredictionRead,
    CycleSnapshot,
    CycleSummaryRead,
)

router = APIRouter(prefix="/cycle", tags=["cycle"])
logger = logging.getLogger("cyclus.routers.cycle")

LocaleQuery = Query(default="nl", pattern="^(nl|en)$")


def _as_of(snapshot: CycleSnapshot) -> date:
    return snapshot.as_of or date.today()


@router.post("/prediction", response_model=CyclePredictionRead)
async def predict(engine: Engine, body: CycleSnapshot, locale: str = LocaleQuery) -> Any:
    prediction = engine.predict(body.engine_cycles(), body.engine_preferences(), _as_of(body))
    return CyclePredictionRead.from_prediction(prediction, locale)


@router.post("/calendar", response_model=CalendarRead)
async def calendar(engine: Engine, body: CalendarRequest, locale: str = LocaleQuery) -> Any:
    as_of = _as_of(body)
    start, end = body.bounds(*calendar_window(as_of, engine.config))
    if (end - start).days + 1 > MAX_CALENDAR_DAYS:
        raise HTTPException(
            status_code=422,
            detail=f"Calendar range may span at most {MAX_CALENDAR_DAYS} days",
        )
    prediction = engine.predict(body.engine_cycles(), body.engine_preferences(), as_of)
    bleeding_logs = body.engine_bleeding_logs()
    view = engine.calendar(prediction, bleeding_logs, start=start, end=end)
    return CalendarRead.from_view(
        prediction,
        view,
        prompt_bleeding_log=engine.should_prompt_bleeding_log(prediction, bleeding_logs),
        locale=locale,
    )


@router.post("/summary", response_model=CycleSummaryRead)
async def summary(engine: Engine, body: CycleSnapshot) -> Any:
    """Categorical summary only — safe to forward to analytics or text generation."""
    preferences = body.engine_preferences()
    prediction = engine.predict(body.engine_cycles(), preferences, _as_of(body))
    result = engine.summarize(prediction, body.engine_bleeding_logs(), preferences)
    logger.info(
        "Cycle summary: %s/%s/%s",
        result.data_volume,
        result.variability_category,
        result.season,
    )
    return CycleSummaryRead.from_summary(result)
