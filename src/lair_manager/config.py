"""
Lair settings.

Every tunable number and label the rules consume lives here. Settings are
an immutable value passed into each system at construction; nothing reads
them from module globals.

Files may be YAML or JSON. Keys missing from the file fall back to defaults.
"""

import json
import logging
from decimal import Decimal
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from .errors import ConfigError
from .state.schema import SchemeStatus

logger = logging.getLogger(__name__)


DEFAULT_SETTINGS_FILE = "lair_settings.yaml"


class LairSettings(BaseModel):
    """Thresholds, rates and labels for the lair rules."""

    model_config = ConfigDict(frozen=True)

    # Mood labels
    mood_happy: str = "Happy"
    mood_grumpy: str = "Grumpy"
    mood_betrayal: str = "Plotting Betrayal"

    # Loyalty (0-100 scale)
    low_loyalty_threshold: int = 40
    high_loyalty_threshold: int = 70
    loyalty_decay_rate: int = 5
    loyalty_growth_rate: int = 3

    # Equipment condition (0-100 scale)
    min_equipment_condition: int = 50
    broken_equipment_condition: int = 20
    condition_degradation_rate: int = 5  # Per month of active use
    maintenance_cost_percentage: Decimal = Decimal("0.15")
    doomsday_maintenance_cost_percentage: Decimal = Decimal("0.30")
    doomsday_category: str = "Doomsday Device"

    # Scheme scoring
    base_success_likelihood: int = 50
    status_active: str = "Active"

    # Recruitment defaults
    default_minion_salary: Decimal = Decimal("5000.00")
    default_minion_loyalty: int = 50

    valid_specialties: frozenset[str] = frozenset({
        "Hacking", "Explosives", "Disguise", "Combat", "Engineering", "Piloting",
    })
    valid_categories: frozenset[str] = frozenset({
        "Weapon", "Vehicle", "Gadget", "Doomsday Device",
    })

    @model_validator(mode="after")
    def _check_ranges(self) -> "LairSettings":
        if self.low_loyalty_threshold > self.high_loyalty_threshold:
            raise ValueError(
                f"low_loyalty_threshold ({self.low_loyalty_threshold}) exceeds "
                f"high_loyalty_threshold ({self.high_loyalty_threshold})"
            )
        for name in (
            "low_loyalty_threshold",
            "high_loyalty_threshold",
            "min_equipment_condition",
            "broken_equipment_condition",
            "base_success_likelihood",
            "default_minion_loyalty",
        ):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within 0-100, got {value}")
        if self.loyalty_decay_rate < 0 or self.loyalty_growth_rate < 0:
            raise ValueError("loyalty rates cannot be negative")
        if self.condition_degradation_rate < 0:
            raise ValueError("condition_degradation_rate cannot be negative")
        if self.status_active not in {s.value for s in SchemeStatus}:
            raise ValueError(
                f"status_active must be a scheme status, got {self.status_active!r}"
            )
        return self

    @property
    def mood_labels(self) -> tuple[str, str, str]:
        """(happy, grumpy, betrayal) in that order."""
        return (self.mood_happy, self.mood_grumpy, self.mood_betrayal)


def build_settings(overrides: dict | None = None) -> LairSettings:
    """
    Build settings from defaults plus overrides.

    Raises:
        ConfigError: If an override is of the wrong type or breaks a range
    """
    try:
        return LairSettings(**(overrides or {}))
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def _read_settings_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping at top level, got {type(data).__name__}")
    return data


def load_settings(path: Path | str | None = None) -> LairSettings:
    """
    Load settings from a YAML or JSON file, or return defaults if not found.

    A file that cannot be read or parsed is logged and ignored. A file that
    parses but holds bad values raises ConfigError, since silently running
    with different thresholds than the operator wrote would be worse.
    """
    path = Path(path or DEFAULT_SETTINGS_FILE)

    if not path.exists():
        return LairSettings()

    try:
        overrides = _read_settings_file(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Could not read settings from {path}: {e}. Using defaults.")
        return LairSettings()

    settings = build_settings(overrides)
    logger.info(f"Loaded lair settings from {path}")
    return settings
