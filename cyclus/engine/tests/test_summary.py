"""Tests for categorical summaries."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from cyclus.engine.base import BleedingIntensity
from cyclus.engine.config_loader import EngineConfig
from cyclus.engine.predictor import CycleEngine
from cyclus.engine.summary import categorize_bleeding_days, categorize_cycle_length, summarize
from cyclus.engine.tests.conftest import CYCLE_START, TEST_DATE, make_log, make_records


def bleeding_days(n: int, intensity: BleedingIntensity = BleedingIntensity.normal):
    return [make_log(CYCLE_START + timedelta(days=i), intensity) for i in range(n)]


class TestSummarize:
    def test_no_history(self, engine: CycleEngine, engine_config: EngineConfig) -> None:
        prediction = engine.predict([], None, TEST_DATE)
        summary = summarize(prediction, config=engine_config)
        assert summary.to_dict() == {
            "cycle_length_category": "unknown",
            "variability_category": "unknown",
            "data_volume": "insufficient",
            "bleeding_days": "none",
            "trend": "unknown",
            "phase": "unknown",
            "season": "onbekend",
            "perimenopause": "unknown",
        }

    def test_irregular_history(self, engine: CycleEngine, engine_config: EngineConfig) -> None:
        prediction = engine.predict(make_records([26, 34]), None, date(2024, 3, 3))
        summary = summarize(prediction, bleeding_days(4), perimenopause=True, config=engine_config)
        assert summary.cycle_length_category == "average"
        assert summary.variability_category == "variable"
        assert summary.data_volume == "limited"
        assert summary.bleeding_days == "average"
        assert summary.trend == "stable"
        assert summary.phase == "menstrual"
        assert summary.season == "winter"
        assert summary.perimenopause == "yes"

    def test_no_dates_or_numbers_leak(self, engine: CycleEngine, engine_config: EngineConfig) -> None:
        """Only category strings leave through the summary."""
        prediction = engine.predict(make_records([31, 33, 29]), None, date(2024, 4, 10))
        values = summarize(prediction, bleeding_days(5), config=engine_config).to_dict().values()
        assert all(isinstance(v, str) for v in values)
        assert not any(ch.isdigit() for v in values for ch in v)


class TestCategories:
    @pytest.mark.parametrize(
        ("lengths", "expected"),
        [([22, 23], "short"), ([25], "average"), ([35], "average"), ([40, 38], "long")],
    )
    def test_cycle_length(
        self, engine: CycleEngine, engine_config: EngineConfig, lengths: list[int], expected: str
    ) -> None:
        prediction = engine.predict(make_records(lengths), None, date(2024, 6, 1))
        assert categorize_cycle_length(prediction, engine_config) == expected

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "none"), (1, "few"), (3, "few"), (4, "average"), (7, "average"), (8, "many")],
    )
    def test_bleeding_days(self, engine_config: EngineConfig, count: int, expected: str) -> None:
        assert categorize_bleeding_days(bleeding_days(count), engine_config) == expected

    def test_none_intensity_not_counted(self, engine_config: EngineConfig) -> None:
        logs = bleeding_days(2) + bleeding_days(6, BleedingIntensity.none)[2:]
        assert categorize_bleeding_days(logs, engine_config) == "few"

    def test_duplicate_dates_counted_once(self, engine_config: EngineConfig) -> None:
        logs = bleeding_days(2) + bleeding_days(2, BleedingIntensity.heavy)
        assert categorize_bleeding_days(logs, engine_config) == "few"
