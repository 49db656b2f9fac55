"""
Equipment rules as pure functions.

Condition wears down while a scheme is running and maintenance brings it
back to 100 for a fraction of the purchase price.
"""

from decimal import Decimal

from ..config import LairSettings
from .bounds import clamp, is_blank

FULL_CONDITION = 100


def degraded_condition(condition: int, months: int, settings: LairSettings) -> int:
    """Condition after `months` of active use, clamped to 0-100."""
    return clamp(condition - months * settings.condition_degradation_rate)


def maintenance_cost(
    purchase_price: Decimal,
    category: str,
    settings: LairSettings,
) -> Decimal:
    """Doomsday devices cost the higher percentage to service."""
    if category == settings.doomsday_category:
        rate = settings.doomsday_maintenance_cost_percentage
    else:
        rate = settings.maintenance_cost_percentage
    return purchase_price * rate


def is_operational(condition: int, settings: LairSettings) -> bool:
    return condition >= settings.min_equipment_condition


def is_broken(condition: int, settings: LairSettings) -> bool:
    # Independent of is_operational: 20-49 is neither with the defaults
    return condition < settings.broken_equipment_condition


def is_valid_category(category: str | None, settings: LairSettings) -> bool:
    if is_blank(category):
        return False
    return category in settings.valid_categories


def is_valid_condition(condition: int) -> bool:
    return 0 <= condition <= FULL_CONDITION
