"""Presentation lookups: wire keys and localized labels.

The engine works on language-neutral enums.  The rest of the application
stores and exchanges seasons under their Dutch keys (``lente``, ``zomer``,
...), so those keys are produced here and nowhere else.  Display labels are
kept per locale; unknown locales fall back to Dutch.
"""

from __future__ import annotations

from cyclus.engine.base import Phase, Rationale, Season, Watchout

DEFAULT_LOCALE = "nl"

# Season → key used verbatim by the rest of the system
SEASON_KEYS: dict[Season, str] = {
    Season.winter: "winter",
    Season.spring: "lente",
    Season.summer: "zomer",
    Season.autumn: "herfst",
    Season.unknown: "onbekend",
}

SEASON_LABELS: dict[str, dict[Season, str]] = {
    "nl": {
        Season.winter: "Winter",
        Season.spring: "Lente",
        Season.summer: "Zomer",
        Season.autumn: "Herfst",
        Season.unknown: "Onbekend",
    },
    "en": {
        Season.winter: "Winter",
        Season.spring: "Spring",
        Season.summer: "Summer",
        Season.autumn: "Autumn",
        Season.unknown: "Unknown",
    },
}

PHASE_LABELS: dict[str, dict[Phase, str]] = {
    "nl": {
        Phase.menstrual: "Menstruatie",
        Phase.follicular: "Folliculaire fase",
        Phase.ovulatory: "Ovulatie",
        Phase.luteal: "Luteale fase",
        Phase.unknown: "Onbekend",
    },
    "en": {
        Phase.menstrual: "Menstruation",
        Phase.follicular: "Follicular phase",
        Phase.ovulatory: "Ovulation",
        Phase.luteal: "Luteal phase",
        Phase.unknown: "Unknown",
    },
}

WATCHOUT_MESSAGES: dict[str, dict[Watchout, str]] = {
    "nl": {
        Watchout.long_cycles: (
            "Je cycli zijn langer dan gemiddeld. Dit kan bij perimenopauze voorkomen."
        ),
        Watchout.high_variability: (
            "Je cycluslengte varieert sterk. Voorspellingen zijn minder betrouwbaar."
        ),
        Watchout.few_cycles: (
            "Er zijn nog weinig cycli gelogd. Voorspellingen zijn een ruwe schatting."
        ),
    },
    "en": {
        Watchout.long_cycles: (
            "Your cycles are longer than average. This can happen in perimenopause."
        ),
        Watchout.high_variability: (
            "Your cycle length varies a lot. Predictions are less reliable."
        ),
        Watchout.few_cycles: (
            "Only a few cycles have been logged. Predictions are a rough estimate."
        ),
    },
}

RATIONALE_MESSAGES: dict[str, dict[Rationale, str]] = {
    "nl": {
        Rationale.insufficient_data: "Nog niet genoeg data om voorspellingen te maken.",
        Rationale.variable_cycle: (
            "Je cyclus is wisselend, voorspellingen zijn een ruime schatting."
        ),
        Rationale.recent_cycles: "Op basis van je laatste cycli.",
    },
    "en": {
        Rationale.insufficient_data: "Not enough data yet to make predictions.",
        Rationale.variable_cycle: (
            "Your cycle varies, so predictions are a broad estimate."
        ),
        Rationale.recent_cycles: "Based on your most recent cycles.",
    },
}


def _table(tables: dict[str, dict], locale: str) -> dict:
    return tables.get(locale) or tables[DEFAULT_LOCALE]


def season_key(season: Season) -> str:
    return SEASON_KEYS[season]


def season_label(season: Season, locale: str = DEFAULT_LOCALE) -> str:
    return _table(SEASON_LABELS, locale)[season]


def phase_label(phase: Phase, locale: str = DEFAULT_LOCALE) -> str:
    return _table(PHASE_LABELS, locale)[phase]


def watchout_message(watchout: Watchout, locale: str = DEFAULT_LOCALE) -> str:
    return _table(WATCHOUT_MESSAGES, locale)[watchout]


def rationale_message(rationale: Rationale, locale: str = DEFAULT_LOCALE) -> str:
    return _table(RATIONALE_MESSAGES, locale)[rationale]
