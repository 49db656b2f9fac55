"""
Minion rules as pure functions.

Mood is a projection of loyalty. Loyalty moves with payday: paying the
full demand earns growth, short-changing costs decay.
"""

from decimal import Decimal

from ..config import LairSettings
from .bounds import clamp, is_blank


def classify_mood(loyalty: int, settings: LairSettings) -> str:
    """
    Map a loyalty score to a mood label.

    Both thresholds are strict, so a score sitting exactly on either
    threshold is grumpy.
    """
    if loyalty > settings.high_loyalty_threshold:
        return settings.mood_happy
    if loyalty < settings.low_loyalty_threshold:
        return settings.mood_betrayal
    return settings.mood_grumpy


def apply_payment(
    loyalty: int,
    paid: Decimal,
    demand: Decimal,
    settings: LairSettings,
) -> int:
    """
    Loyalty after a salary payment.

    Args:
        loyalty: Current loyalty score
        paid: Amount actually paid
        demand: What the minion asked for

    Returns:
        New loyalty, clamped to 0-100
    """
    if paid >= demand:
        loyalty += settings.loyalty_growth_rate
    else:
        loyalty -= settings.loyalty_decay_rate
    return clamp(loyalty)


def is_low_loyalty(loyalty: int, settings: LairSettings) -> bool:
    """True for minions in the betrayal band."""
    return loyalty < settings.low_loyalty_threshold


def is_valid_specialty(specialty: str | None, settings: LairSettings) -> bool:
    if is_blank(specialty):
        return False
    return specialty in settings.valid_specialties
