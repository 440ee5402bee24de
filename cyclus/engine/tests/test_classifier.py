"""Tests for day-in-cycle, phase and season classification."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from cyclus.engine.base import PHASE_TO_SEASON, Phase, Season
from cyclus.engine.classifier import (
    classify_date,
    day_in_cycle,
    ovulation_day_offset,
    phase_bands,
)
from cyclus.engine.config_loader import EngineConfig
from cyclus.engine.tests.conftest import CYCLE_START

PHASE_ORDER = [Phase.menstrual, Phase.follicular, Phase.ovulatory, Phase.luteal]


def classify(target: date, engine_config: EngineConfig, length: int = 28, period: int = 5, luteal: int = 13):
    return classify_date(target, CYCLE_START, length, period, luteal, engine_config)


class TestWorkedExamples:
    def test_cycle_start_is_menstrual(self, engine_config: EngineConfig) -> None:
        result = classify(CYCLE_START, engine_config)
        assert result.day_in_cycle == 0
        assert result.phase == Phase.menstrual
        assert result.season == Season.winter

    def test_day_14_is_ovulatory(self, engine_config: EngineConfig) -> None:
        """O = 28 - 13 = 15, so the ovulatory band is days 14-16."""
        result = classify(date(2024, 1, 15), engine_config)
        assert result.day_in_cycle == 14
        assert result.phase == Phase.ovulatory
        assert result.season == Season.summer

    @pytest.mark.parametrize(
        ("offset", "phase"),
        [
            (4, Phase.menstrual),
            (5, Phase.follicular),
            (13, Phase.follicular),
            (16, Phase.ovulatory),
            (17, Phase.luteal),
            (27, Phase.luteal),
        ],
    )
    def test_band_edges(self, engine_config: EngineConfig, offset: int, phase: Phase) -> None:
        result = classify(CYCLE_START + timedelta(days=offset), engine_config)
        assert result.phase == phase

    def test_no_history_is_unknown(self, engine_config: EngineConfig) -> None:
        result = classify_date(date(2024, 1, 15), None, 28, 5, 13, engine_config)
        assert result.day_in_cycle is None
        assert result.phase == Phase.unknown
        assert result.season == Season.unknown


class TestProjection:
    def test_dates_after_cycle_wrap(self, engine_config: EngineConfig) -> None:
        """Dates past the expected period are projected into later cycles."""
        result = classify(date(2024, 2, 5), engine_config)
        assert result.day_in_cycle == 7
        assert result.phase == Phase.follicular

    def test_dates_before_start_wrap(self, engine_config: EngineConfig) -> None:
        result = classify(date(2023, 12, 31), engine_config)
        assert result.day_in_cycle == 27
        assert result.phase == Phase.luteal

    def test_day_in_cycle_range(self) -> None:
        for delta in range(-60, 120):
            d = day_in_cycle(CYCLE_START + timedelta(days=delta), CYCLE_START, 31)
            assert 0 <= d < 31

    def test_season_follows_phase(self, engine_config: EngineConfig) -> None:
        for delta in range(0, 40):
            result = classify(CYCLE_START + timedelta(days=delta), engine_config)
            assert result.season == PHASE_TO_SEASON[result.phase]


class TestPartition:
    @pytest.mark.parametrize("length", [1, 2, 5, 14, 21, 28, 35, 45, 60, 90])
    def test_bands_partition_cycle(self, engine_config: EngineConfig, length: int) -> None:
        """Every day of the cycle falls in exactly one phase, in phase order."""
        for period in (1, 5, 8):
            for luteal in (10, 13, 16):
                bands = phase_bands(length, period, luteal, engine_config)
                days = [d for phase in PHASE_ORDER for d in bands.span(phase)]
                assert days == list(range(bands.cycle_length))
                for phase in PHASE_ORDER:
                    for d in bands.span(phase):
                        assert bands.phase_for(d) == phase

    def test_luteal_longer_than_cycle(self, engine_config: EngineConfig) -> None:
        """O clamps to day 1; the ovulatory band is swallowed by the period."""
        assert ovulation_day_offset(10, 13, engine_config) == 1
        bands = phase_bands(10, 5, 13, engine_config)
        assert bands.ovulation_offset == 1
        assert len(bands.span(Phase.menstrual)) == 5
        assert len(bands.span(Phase.follicular)) == 0
        assert len(bands.span(Phase.ovulatory)) == 0
        assert len(bands.span(Phase.luteal)) == 5

    def test_period_reaching_ovulation(self, engine_config: EngineConfig) -> None:
        """A period running past O - 1 collapses the follicular band."""
        bands = phase_bands(20, 9, 13, engine_config)  # O = 7
        assert len(bands.span(Phase.follicular)) == 0
        assert bands.phase_for(8) == Phase.menstrual
        assert bands.phase_for(9) == Phase.luteal

    def test_period_as_long_as_cycle(self, engine_config: EngineConfig) -> None:
        bands = phase_bands(28, 40, 13, engine_config)
        assert {bands.phase_for(d) for d in range(28)} == {Phase.menstrual}

    def test_unknown_span_is_empty(self, engine_config: EngineConfig) -> None:
        assert len(phase_bands(28, 5, 13, engine_config).span(Phase.unknown)) == 0
