"""
Pytest fixtures for lair manager tests.

Provides in-memory stores, a frozen clock and sample entities.
"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lair_manager import LairManager, LairSettings
from lair_manager.state import (
    EventBus,
    LairStores,
    Minion,
    Scheme,
    SchemeStatus,
    Equipment,
    SecretBase,
)


NOW = datetime(2026, 3, 1, 9, 0, 0)
NEXT_MONTH = NOW + timedelta(days=30)
LAST_MONTH = NOW - timedelta(days=30)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def settings():
    """Default settings (thresholds 40/70, growth 3, decay 5)."""
    return LairSettings()


@pytest.fixture
def stores():
    """In-memory entity stores."""
    return LairStores.in_memory()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def lair(settings, stores, bus):
    """Lair manager with in-memory stores and a frozen clock."""
    return LairManager(settings=settings, stores=stores, bus=bus, clock=lambda: NOW)


@pytest.fixture
def make_minion():
    """Factory for unsaved minions."""
    def _make(**overrides):
        fields = {
            "name": "Kevin",
            "specialty": "Hacking",
            "skill_level": 5,
            "loyalty_score": 50,
            "salary_demand": Decimal("5000"),
        }
        fields.update(overrides)
        return Minion(**fields)
    return _make


@pytest.fixture
def make_scheme():
    """Factory for unsaved schemes, under budget with a future deadline."""
    def _make(**overrides):
        fields = {
            "name": "Steal the Moon",
            "description": "Shrink ray, then the moon",
            "budget": Decimal("100000"),
            "current_spending": Decimal("50000"),
            "required_skill_level": 5,
            "required_specialty": "Hacking",
            "status": SchemeStatus.ACTIVE,
            "target_completion_date": NEXT_MONTH,
            "diabolical_rating": 8,
        }
        fields.update(overrides)
        return Scheme(**fields)
    return _make


@pytest.fixture
def make_equipment():
    """Factory for unsaved equipment."""
    def _make(**overrides):
        fields = {
            "name": "Freeze Ray",
            "category": "Weapon",
            "condition": 80,
            "purchase_price": Decimal("10000"),
        }
        fields.update(overrides)
        return Equipment(**fields)
    return _make


@pytest.fixture
def make_base():
    def _make(**overrides):
        fields = {
            "name": "Volcano Lair",
            "location": "Pacific Ocean",
            "capacity": 3,
            "security_level": 8,
            "monthly_maintenance_cost": Decimal("25000"),
        }
        fields.update(overrides)
        return SecretBase(**fields)
    return _make


@pytest.fixture
def active_scheme(lair, make_scheme):
    """An active, saved scheme requiring Hacking."""
    return lair.schemes.create(make_scheme())
