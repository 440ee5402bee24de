"""Tests for cycle history aggregation."""

from __future__ import annotations

from datetime import date

import pytest

from cyclus.engine.aggregator import CycleHistoryAggregator, derive_cycle_records
from cyclus.engine.base import (
    ConfidenceCategory,
    CyclePreferences,
    CycleRecord,
    CycleTrend,
    VariabilityCategory,
)
from cyclus.engine.config_loader import EngineConfig
from cyclus.engine.preferences import resolve_preferences
from cyclus.engine.tests.conftest import CYCLE_START, make_records


@pytest.fixture
def aggregator(engine_config: EngineConfig) -> CycleHistoryAggregator:
    return CycleHistoryAggregator(engine_config)


@pytest.fixture
def defaults(engine_config: EngineConfig):
    return resolve_preferences(None, engine_config)


class TestAggregate:
    def test_two_irregular_cycles(self, aggregator: CycleHistoryAggregator, defaults) -> None:
        """Lengths 26 and 34 average to 30 with a variable spread of 8."""
        stats = aggregator.aggregate(make_records([26, 34]), defaults)
        assert stats.effective_cycle_length == 30
        assert stats.variability_days == 8
        assert stats.variability_category == VariabilityCategory.variable
        assert stats.sufficiency_category == ConfidenceCategory.limited
        assert stats.cycles_used == 2
        assert stats.latest_cycle_start == date(2024, 3, 1)

    def test_empty_history(self, aggregator: CycleHistoryAggregator, defaults) -> None:
        stats = aggregator.aggregate([], defaults)
        assert stats.effective_cycle_length == 28
        assert stats.variability_days is None
        assert stats.variability_category == VariabilityCategory.unknown
        assert stats.sufficiency_category == ConfidenceCategory.insufficient
        assert stats.cycles_used == 0
        assert stats.latest_cycle_start is None
        assert stats.trend == CycleTrend.unknown

    def test_single_open_cycle_uses_preference(
        self, aggregator: CycleHistoryAggregator, engine_config: EngineConfig
    ) -> None:
        """With no observed length the declared average is used."""
        prefs = resolve_preferences(CyclePreferences(avg_cycle_length_days=33), engine_config)
        stats = aggregator.aggregate([CycleRecord(start_date=CYCLE_START)], prefs)
        assert stats.effective_cycle_length == 33
        assert stats.latest_cycle_start == CYCLE_START
        assert stats.sufficiency_category == ConfidenceCategory.insufficient

    def test_observed_lengths_override_preference(
        self, aggregator: CycleHistoryAggregator, engine_config: EngineConfig
    ) -> None:
        prefs = resolve_preferences(CyclePreferences(avg_cycle_length_days=28), engine_config)
        stats = aggregator.aggregate(make_records([40]), prefs)
        assert stats.effective_cycle_length == 40

    def test_mean_rounds_half_up(self, aggregator: CycleHistoryAggregator, defaults) -> None:
        """28.5 rounds to 29, not to the even 28."""
        stats = aggregator.aggregate(make_records([28, 29]), defaults)
        assert stats.effective_cycle_length == 29

    def test_single_length_has_no_spread(
        self, aggregator: CycleHistoryAggregator, defaults
    ) -> None:
        stats = aggregator.aggregate(make_records([30]), defaults)
        assert stats.variability_days is None
        assert stats.variability_category == VariabilityCategory.unknown
        assert stats.sufficiency_category == ConfidenceCategory.limited

    def test_adequate_history(self, aggregator: CycleHistoryAggregator, defaults) -> None:
        stats = aggregator.aggregate(make_records([28, 29, 27, 28]), defaults)
        assert stats.sufficiency_category == ConfidenceCategory.adequate
        assert stats.variability_category == VariabilityCategory.regular

    def test_record_order_does_not_matter(
        self, aggregator: CycleHistoryAggregator, defaults
    ) -> None:
        records = make_records([26, 34, 30])
        assert aggregator.aggregate(records, defaults) == aggregator.aggregate(
            list(reversed(records)), defaults
        )

    def test_non_positive_lengths_dropped(
        self, aggregator: CycleHistoryAggregator, defaults
    ) -> None:
        records = [
            CycleRecord(start_date=date(2024, 2, 1), computed_length_days=0),
            CycleRecord(start_date=date(2024, 1, 1), computed_length_days=31),
        ]
        stats = aggregator.aggregate(records, defaults)
        assert stats.cycles_used == 1
        assert stats.effective_cycle_length == 31


class TestCategories:
    @pytest.mark.parametrize(
        ("spread", "expected"),
        [
            (None, VariabilityCategory.unknown),
            (0, VariabilityCategory.regular),
            (3, VariabilityCategory.regular),
            (4, VariabilityCategory.slightly_variable),
            (7, VariabilityCategory.slightly_variable),
            (8, VariabilityCategory.variable),
        ],
    )
    def test_variability_boundaries(
        self, aggregator: CycleHistoryAggregator, spread, expected
    ) -> None:
        assert aggregator.categorize_variability(spread) == expected

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, ConfidenceCategory.insufficient),
            (1, ConfidenceCategory.limited),
            (2, ConfidenceCategory.limited),
            (3, ConfidenceCategory.adequate),
        ],
    )
    def test_sufficiency_boundaries(
        self, aggregator: CycleHistoryAggregator, count: int, expected
    ) -> None:
        assert aggregator.categorize_sufficiency(count) == expected


class TestTrend:
    def test_too_few_lengths(self, aggregator: CycleHistoryAggregator) -> None:
        assert aggregator.detect_trend([]) == CycleTrend.unknown
        assert aggregator.detect_trend([28]) == CycleTrend.unknown
        assert aggregator.detect_trend([28, 35]) == CycleTrend.stable

    def test_shortening(self, aggregator: CycleHistoryAggregator) -> None:
        assert aggregator.detect_trend([24, 25, 30, 31]) == CycleTrend.shorter

    def test_lengthening(self, aggregator: CycleHistoryAggregator) -> None:
        """Longer recent cycles are the typical perimenopause pattern."""
        assert aggregator.detect_trend([38, 36, 29, 28]) == CycleTrend.longer

    def test_within_threshold_is_stable(self, aggregator: CycleHistoryAggregator) -> None:
        assert aggregator.detect_trend([28, 29, 28]) == CycleTrend.stable


class TestDeriveCycleRecords:
    def test_gaps_become_lengths(self, engine_config: EngineConfig) -> None:
        records = derive_cycle_records(
            [date(2024, 1, 1), date(2024, 1, 29), date(2024, 3, 30), date(2024, 1, 29)],
            engine_config,
        )
        assert [r.start_date for r in records] == [
            date(2024, 3, 30),
            date(2024, 1, 29),
            date(2024, 1, 1),
        ]
        assert [r.computed_length_days for r in records] == [None, 61, 28]
        assert [r.is_anovulatory for r in records] == [False, True, False]

    def test_no_starts(self, engine_config: EngineConfig) -> None:
        assert derive_cycle_records([], engine_config) == []

    def test_single_start_is_open(self, engine_config: EngineConfig) -> None:
        assert derive_cycle_records([CYCLE_START], engine_config) == [
            CycleRecord(start_date=CYCLE_START)
        ]
