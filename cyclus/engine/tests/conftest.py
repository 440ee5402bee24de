"""Shared fixtures and history builders for cycle engine tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from cyclus.engine.base import BleedingIntensity, BleedingLog, CycleRecord
from cyclus.engine.config_loader import EngineConfig, load_engine_config
from cyclus.engine.predictor import CycleEngine

# Anchor used by the worked examples
CYCLE_START = date(2024, 1, 1)
TEST_DATE = date(2024, 1, 15)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def engine_config() -> EngineConfig:
    """Load the real engine config for tests."""
    return load_engine_config()


@pytest.fixture
def engine(engine_config: EngineConfig) -> CycleEngine:
    return CycleEngine(engine_config)


# ---------------------------------------------------------------------------
# History builders
# ---------------------------------------------------------------------------


def make_records(lengths: list[int], first_start: date = CYCLE_START) -> list[CycleRecord]:
    """Build closed cycles with the given lengths (oldest first) plus an open one.

    Returned most recent first, as storage returns them.
    """
    records: list[CycleRecord] = []
    start = first_start
    for length in lengths:
        records.append(CycleRecord(start_date=start, computed_length_days=length))
        start += timedelta(days=length)
    records.append(CycleRecord(start_date=start))
    records.reverse()
    return records


def make_log(
    d: date,
    intensity: BleedingIntensity = BleedingIntensity.normal,
    is_intermenstrual: bool = False,
) -> BleedingLog:
    return BleedingLog(date=d, intensity=intensity, is_intermenstrual=is_intermenstrual)
