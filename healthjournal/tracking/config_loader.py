"""Load, validate, and hot-reload the HealthJournal tracking configuration.

The config lives in ``tracking_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_tracking_config()`` to re-read from
disk after an edit — no restart required.

Usage::

    from healthjournal.tracking.config_loader import get_tracking_config

    config = get_tracking_config()
    config.cycle.default_length_days            # 28
    config.bmi.category_for(23.4)               # "Normal"
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger("healthjournal.tracking.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "tracking_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class CycleConfig:
    """Menstrual cycle prediction settings."""

    default_length_days: int = 28
    prediction_window: int = 3
    min_cycle_days: int = 21
    max_cycle_days: int = 45


@dataclass
class AppointmentConfig:
    """Appointment entry limits."""

    max_description_length: int = 100


@dataclass
class BmiCategory:
    """One BMI band: values strictly below ``below`` fall into ``name``."""

    name: str
    below: float


@dataclass
class BmiConfig:
    """BMI classification bands, ascending by upper bound."""

    categories: list[BmiCategory]
    overflow_category: str

    def category_for(self, bmi_value: float) -> str:
        """Return the category name for a BMI value.

        Args:
            bmi_value: Computed BMI (kg/m²).

        Returns:
            Name of the first band whose upper bound exceeds the value, or
            the overflow category when none does.
        """
        for band in self.categories:
            if bmi_value < band.below:
                return band.name
        return self.overflow_category


@dataclass
class TrackingConfig:
    """Complete, validated tracking configuration.

    This is the single in-memory representation of tracking_config.yaml.

    Attributes:
        version:     Config schema version string.
        cycle:       Cycle prediction settings.
        appointment: Appointment limits.
        bmi:         BMI classification bands.
    """

    version: str
    cycle: CycleConfig
    appointment: AppointmentConfig
    bmi: BmiConfig
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when tracking_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Tracking config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> TrackingConfig:
    """Validate the raw YAML dict and construct a TrackingConfig.

    Every problem found is collected and reported together.

    Raises:
        ConfigValidationError: If any value is missing or out of range.
    """
    errors: list[str] = []

    def _positive_int(section: dict, key: str, default: int, prefix: str) -> int:
        value = section.get(key, default)
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"{prefix}.{key} must be an integer, got {value!r}")
            return default
        if number <= 0:
            errors.append(f"{prefix}.{key} must be positive, got {number}")
        return number

    version = str(raw.get("version", "1.0"))

    # ── Cycle ──
    cycle_raw = raw.get("cycle") or {}
    cycle = CycleConfig(
        default_length_days=_positive_int(cycle_raw, "default_length_days", 28, "cycle"),
        prediction_window=_positive_int(cycle_raw, "prediction_window", 3, "cycle"),
        min_cycle_days=_positive_int(cycle_raw, "min_cycle_days", 21, "cycle"),
        max_cycle_days=_positive_int(cycle_raw, "max_cycle_days", 45, "cycle"),
    )
    if cycle.min_cycle_days > cycle.max_cycle_days:
        errors.append(
            f"cycle.min_cycle_days ({cycle.min_cycle_days}) exceeds "
            f"cycle.max_cycle_days ({cycle.max_cycle_days})"
        )

    # ── Appointment ──
    appt_raw = raw.get("appointment") or {}
    appointment = AppointmentConfig(
        max_description_length=_positive_int(
            appt_raw, "max_description_length", 100, "appointment"
        ),
    )

    # ── BMI ──
    bmi_raw = raw.get("bmi") or {}
    categories: list[BmiCategory] = []
    for i, band in enumerate(bmi_raw.get("categories") or []):
        if not isinstance(band, dict) or "name" not in band or "below" not in band:
            errors.append(f"bmi.categories[{i}] must be a mapping with 'name' and 'below'")
            continue
        try:
            below = float(band["below"])
        except (TypeError, ValueError):
            errors.append(f"bmi.categories[{i}].below must be a number, got {band['below']!r}")
            continue
        categories.append(BmiCategory(name=str(band["name"]), below=below))
    if not categories:
        errors.append("'bmi.categories' section is missing or empty")
    bounds = [c.below for c in categories]
    if bounds != sorted(bounds):
        errors.append("bmi.categories must be sorted by ascending 'below'")
    bmi = BmiConfig(
        categories=categories,
        overflow_category=str(bmi_raw.get("overflow_category", "Severely Obese")),
    )

    if errors:
        raise ConfigValidationError(
            f"tracking_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return TrackingConfig(
        version=version,
        cycle=cycle,
        appointment=appointment,
        bmi=bmi,
        _raw=raw,
    )


def load_tracking_config(path: Path | None = None) -> TrackingConfig:
    """Load and validate the tracking config from disk.

    Args:
        path: Override path to YAML. Uses the bundled tracking_config.yaml by default.

    Returns:
        Validated TrackingConfig instance.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded tracking config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: TrackingConfig | None = None
_config_lock = threading.Lock()


def get_tracking_config() -> TrackingConfig:
    """Return the global TrackingConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_tracking_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_tracking_config()
    return _config


def reload_tracking_config(path: Path | None = None) -> TrackingConfig:
    """Reload the tracking config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_tracking_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info(
        "Reloaded tracking config: %s → %s",
        old_version,
        new_config.version,
    )
    return new_config
