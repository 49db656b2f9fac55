"""Villain lair manager: minion, scheme and equipment rules."""

from .config import LairSettings, build_settings, load_settings
from .errors import (
    LairError,
    MissingEntityError,
    InvalidValueError,
    EntityNotFoundError,
    ConfigError,
    StaleEntityError,
)
from .manager import LairManager

__version__ = "0.1.0"

__all__ = [
    "LairSettings",
    "build_settings",
    "load_settings",
    "LairError",
    "MissingEntityError",
    "InvalidValueError",
    "EntityNotFoundError",
    "ConfigError",
    "StaleEntityError",
    "LairManager",
]
