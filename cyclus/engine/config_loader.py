"""Load, validate, and hot-reload the Cyclus engine configuration.

The config lives in ``engine_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_engine_config()`` to re-read from
disk after an edit — no restart required.

Usage::

    from cyclus.engine.config_loader import get_engine_config

    config = get_engine_config()
    band = config.forecast.band_for(VariabilityCategory.variable)   # 5
    luteal = config.defaults.luteal_phase_days                       # 13
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from cyclus.engine.base import VariabilityCategory

logger = logging.getLogger("cyclus.engine.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "engine_config.yaml"

# Forecast bands must widen in this order
_VARIABILITY_ORDER = (
    VariabilityCategory.regular,
    VariabilityCategory.slightly_variable,
    VariabilityCategory.variable,
)


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DefaultsConfig:
    """Fallbacks for unset user preferences."""

    cycle_length_days: int = 28
    period_length_days: int = 5
    luteal_phase_days: int = 13
    show_fertile_days: bool = True


@dataclass(frozen=True)
class VariabilityConfig:
    regular_max_days: int = 3
    slightly_variable_max_days: int = 7


@dataclass(frozen=True)
class SufficiencyConfig:
    limited_min_cycles: int = 1
    adequate_min_cycles: int = 3


@dataclass(frozen=True)
class OvulationConfig:
    """Ovulation offset clamp and band widths."""

    min_offset_days: int = 1
    estimate_band_days: int = 1
    phase_half_width_days: int = 1


@dataclass(frozen=True)
class FertileWindowConfig:
    days_before_ovulation: int = 5
    days_after_ovulation: int = 1


@dataclass(frozen=True)
class ForecastConfig:
    """Next-period uncertainty band (± days) per variability category."""

    band_days: dict[VariabilityCategory, int] = field(
        default_factory=lambda: {
            VariabilityCategory.regular: 1,
            VariabilityCategory.slightly_variable: 3,
            VariabilityCategory.variable: 5,
            VariabilityCategory.unknown: 5,
        }
    )

    def band_for(self, category: VariabilityCategory) -> int:
        """Return the band for a category, falling back to the widest band."""
        if category in self.band_days:
            return self.band_days[category]
        return max(self.band_days.values())


@dataclass(frozen=True)
class CalendarConfig:
    days_before: int = 7
    days_after: int = 27

    @property
    def window_days(self) -> int:
        return self.days_before + self.days_after + 1


@dataclass(frozen=True)
class WatchoutConfig:
    long_cycle_days: int = 45
    trend_threshold_days: int = 3


@dataclass(frozen=True)
class SummaryConfig:
    short_cycle_below_days: int = 25
    long_cycle_above_days: int = 35
    bleeding_days_few_max: int = 3
    bleeding_days_average_max: int = 7


@dataclass(frozen=True)
class ReminderConfig:
    bleeding_prompt_days: int = 5


@dataclass(frozen=True)
class EngineConfig:
    """Complete, validated engine configuration.

    This is the single in-memory representation of engine_config.yaml.
    Every engine component reads its constants from this object.
    """

    version: str = "1.0"
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    variability: VariabilityConfig = field(default_factory=VariabilityConfig)
    sufficiency: SufficiencyConfig = field(default_factory=SufficiencyConfig)
    ovulation: OvulationConfig = field(default_factory=OvulationConfig)
    fertile_window: FertileWindowConfig = field(default_factory=FertileWindowConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    watchouts: WatchoutConfig = field(default_factory=WatchoutConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    reminders: ReminderConfig = field(default_factory=ReminderConfig)
    _raw: dict = field(default_factory=dict, repr=False, compare=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when engine_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed or not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Engine config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")
    return raw


def _validate_and_build(raw: dict) -> EngineConfig:
    """Validate the raw YAML dict and construct an EngineConfig.

    Missing sections and keys fall back to the dataclass defaults.  Every
    problem found is collected and reported in a single error.

    Raises:
        ConfigValidationError: If any value is missing a valid type or range.
    """
    errors: list[str] = []

    def _section(key: str) -> dict:
        value = raw.get(key) or {}
        if not isinstance(value, dict):
            errors.append(f"'{key}' must be a mapping")
            return {}
        return value

    def _int(d: dict, key: str, section: str, default: int, minimum: int = 0) -> int:
        value = d.get(key, default)
        if isinstance(value, bool):
            errors.append(f"{section}.{key} must be an integer, got {value!r}")
            return default
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"{section}.{key} must be an integer, got {value!r}")
            return default
        if number < minimum:
            errors.append(f"{section}.{key} = {number} must be >= {minimum}")
        return number

    def _bool(d: dict, key: str, section: str, default: bool) -> bool:
        value = d.get(key, default)
        if not isinstance(value, bool):
            errors.append(f"{section}.{key} must be true or false, got {value!r}")
            return default
        return value

    version = str(raw.get("version", "1.0"))

    # ── Defaults ──
    d_raw = _section("defaults")
    defaults = DefaultsConfig(
        cycle_length_days=_int(d_raw, "cycle_length_days", "defaults", 28, minimum=1),
        period_length_days=_int(d_raw, "period_length_days", "defaults", 5, minimum=1),
        luteal_phase_days=_int(d_raw, "luteal_phase_days", "defaults", 13, minimum=1),
        show_fertile_days=_bool(d_raw, "show_fertile_days", "defaults", True),
    )

    # ── Variability thresholds ──
    v_raw = _section("variability")
    variability = VariabilityConfig(
        regular_max_days=_int(v_raw, "regular_max_days", "variability", 3),
        slightly_variable_max_days=_int(
            v_raw, "slightly_variable_max_days", "variability", 7
        ),
    )
    if variability.slightly_variable_max_days < variability.regular_max_days:
        errors.append(
            "variability.slightly_variable_max_days must be >= variability.regular_max_days"
        )

    # ── Sufficiency ──
    s_raw = _section("sufficiency")
    sufficiency = SufficiencyConfig(
        limited_min_cycles=_int(s_raw, "limited_min_cycles", "sufficiency", 1, minimum=1),
        adequate_min_cycles=_int(s_raw, "adequate_min_cycles", "sufficiency", 3, minimum=1),
    )
    if sufficiency.adequate_min_cycles < sufficiency.limited_min_cycles:
        errors.append(
            "sufficiency.adequate_min_cycles must be >= sufficiency.limited_min_cycles"
        )

    # ── Ovulation / fertile window ──
    o_raw = _section("ovulation")
    ovulation = OvulationConfig(
        min_offset_days=_int(o_raw, "min_offset_days", "ovulation", 1, minimum=1),
        estimate_band_days=_int(o_raw, "estimate_band_days", "ovulation", 1),
        phase_half_width_days=_int(o_raw, "phase_half_width_days", "ovulation", 1),
    )
    fw_raw = _section("fertile_window")
    fertile_window = FertileWindowConfig(
        days_before_ovulation=_int(fw_raw, "days_before_ovulation", "fertile_window", 5),
        days_after_ovulation=_int(fw_raw, "days_after_ovulation", "fertile_window", 1),
    )

    # ── Forecast bands ──
    f_raw = _section("forecast")
    bands_raw = f_raw.get("band_days") or {}
    band_days = dict(ForecastConfig().band_days)
    if not isinstance(bands_raw, dict):
        errors.append("forecast.band_days must be a mapping of category→days")
        bands_raw = {}
    for key, value in bands_raw.items():
        try:
            category = VariabilityCategory(key)
        except ValueError:
            errors.append(f"forecast.band_days.{key} is not a variability category")
            continue
        band_days[category] = _int(bands_raw, key, "forecast.band_days", 5)
    ordered = [band_days[c] for c in _VARIABILITY_ORDER]
    if ordered != sorted(ordered):
        errors.append(
            "forecast.band_days must not narrow as variability worsens "
            f"(regular={ordered[0]}, slightly-variable={ordered[1]}, variable={ordered[2]})"
        )
    forecast = ForecastConfig(band_days=band_days)

    # ── Calendar window ──
    c_raw = _section("calendar")
    calendar = CalendarConfig(
        days_before=_int(c_raw, "days_before", "calendar", 7),
        days_after=_int(c_raw, "days_after", "calendar", 27),
    )

    # ── Watchouts / summary / reminders ──
    w_raw = _section("watchouts")
    watchouts = WatchoutConfig(
        long_cycle_days=_int(w_raw, "long_cycle_days", "watchouts", 45, minimum=1),
        trend_threshold_days=_int(w_raw, "trend_threshold_days", "watchouts", 3),
    )

    sm_raw = _section("summary")
    summary = SummaryConfig(
        short_cycle_below_days=_int(sm_raw, "short_cycle_below_days", "summary", 25),
        long_cycle_above_days=_int(sm_raw, "long_cycle_above_days", "summary", 35),
        bleeding_days_few_max=_int(sm_raw, "bleeding_days_few_max", "summary", 3),
        bleeding_days_average_max=_int(sm_raw, "bleeding_days_average_max", "summary", 7),
    )
    if summary.long_cycle_above_days < summary.short_cycle_below_days:
        errors.append("summary.long_cycle_above_days must be >= summary.short_cycle_below_days")

    r_raw = _section("reminders")
    reminders = ReminderConfig(
        bleeding_prompt_days=_int(r_raw, "bleeding_prompt_days", "reminders", 5),
    )

    if errors:
        raise ConfigValidationError(
            f"engine_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return EngineConfig(
        version=version,
        defaults=defaults,
        variability=variability,
        sufficiency=sufficiency,
        ovulation=ovulation,
        fertile_window=fertile_window,
        forecast=forecast,
        calendar=calendar,
        watchouts=watchouts,
        summary=summary,
        reminders=reminders,
        _raw=raw,
    )


def load_engine_config(path: Path | None = None) -> EngineConfig:
    """Load and validate the engine config from disk.

    Args:
        path: Override path to YAML. Uses the bundled engine_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded engine config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: EngineConfig | None = None
_config_lock = threading.Lock()


def get_engine_config() -> EngineConfig:
    """Return the global EngineConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_engine_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_engine_config()
    return _config


def reload_engine_config(path: Path | None = None) -> EngineConfig:
    """Reload the engine config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_engine_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded engine config: %s → %s", old_version, new_config.version)
    return new_config

