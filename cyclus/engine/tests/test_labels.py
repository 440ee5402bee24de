"""Tests for season keys and localized labels."""

from __future__ import annotations

import pytest

from cyclus.engine.base import Phase, Rationale, Season, Watchout
from cyclus.engine.labels import (
    PHASE_LABELS,
    RATIONALE_MESSAGES,
    SEASON_LABELS,
    WATCHOUT_MESSAGES,
    phase_label,
    rationale_message,
    season_key,
    season_label,
    watchout_message,
)


class TestSeasonKeys:
    @pytest.mark.parametrize(
        ("season", "key"),
        [
            (Season.winter, "winter"),
            (Season.spring, "lente"),
            (Season.summer, "zomer"),
            (Season.autumn, "herfst"),
            (Season.unknown, "onbekend"),
        ],
    )
    def test_wire_keys(self, season: Season, key: str) -> None:
        assert season_key(season) == key


class TestLabels:
    @pytest.mark.parametrize("locale", ["nl", "en"])
    def test_tables_are_complete(self, locale: str) -> None:
        assert set(SEASON_LABELS[locale]) == set(Season)
        assert set(PHASE_LABELS[locale]) == set(Phase)
        assert set(WATCHOUT_MESSAGES[locale]) == set(Watchout)
        assert set(RATIONALE_MESSAGES[locale]) == set(Rationale)

    def test_english_labels(self) -> None:
        assert season_label(Season.autumn, "en") == "Autumn"
        assert phase_label(Phase.luteal, "en") == "Luteal phase"

    def test_unknown_locale_falls_back_to_dutch(self) -> None:
        assert season_label(Season.spring, "de") == "Lente"
        assert phase_label(Phase.menstrual, "de") == "Menstruatie"
        assert watchout_message(Watchout.few_cycles, "de") == watchout_message(
            Watchout.few_cycles, "nl"
        )

    def test_rationale_messages(self) -> None:
        assert rationale_message(Rationale.recent_cycles) == "Op basis van je laatste cycli."
        assert rationale_message(Rationale.insufficient_data, "en") == (
            "Not enough data yet to make predictions."
        )
