"""
Scheme scoring rules as pure functions.

This is the one place success likelihood is computed. Callers gather the
minions and equipment, pass them in with the current time, and decide
themselves whether to store the result.

Score = base
      + 10 per assigned minion with the required specialty
      +  5 per assigned piece of working equipment
      - 20 if over budget
      - 15 unless at least two minions are assigned and one of them matches
      - 25 if the target date has passed
clamped to 0-100.
"""

from datetime import datetime
from typing import Iterable

from ..config import LairSettings
from ..errors import MissingEntityError
from ..state.schema import Equipment, Minion, Scheme, SchemeStatus, SuccessBreakdown
from .bounds import clamp
from .equipment import is_operational

MINION_MATCH_BONUS = 10
WORKING_EQUIPMENT_BONUS = 5
OVER_BUDGET_PENALTY = -20
UNDERSTAFFED_PENALTY = -15
OVERDUE_PENALTY = -25

# A scheme is properly resourced with this many minions, one of them matching
MIN_TEAM_SIZE = 2

MIN_SKILL_LEVEL = 1
MAX_SKILL_LEVEL = 10


def is_over_budget(scheme: Scheme) -> bool:
    if scheme is None:
        raise MissingEntityError("scheme")
    return scheme.current_spending > scheme.budget


def is_overdue(scheme: Scheme, now: datetime) -> bool:
    """
    True once now is strictly past the target date.

    Naive datetimes are taken as local time, so a naive clock can be
    compared with a timezone-aware target date and vice versa.
    """
    target = scheme.target_completion_date
    if (now.tzinfo is None) != (target.tzinfo is None):
        now, target = now.astimezone(), target.astimezone()
    return now > target


def explain_success_likelihood(
    scheme: Scheme,
    minions: Iterable[Minion],
    equipment: Iterable[Equipment],
    settings: LairSettings,
    now: datetime,
) -> SuccessBreakdown:
    """
    Compute success likelihood and keep every term.

    Only minions and equipment whose scheme_id matches the scheme count, so
    callers may pass a whole roster.

    Raises:
        MissingEntityError: If scheme is None
    """
    if scheme is None:
        raise MissingEntityError("scheme")

    total_assigned = 0
    matching = 0
    for minion in minions:
        if minion.scheme_id != scheme.id:
            continue
        total_assigned += 1
        if minion.specialty == scheme.required_specialty:
            matching += 1

    working = sum(
        1 for item in equipment
        if item.scheme_id == scheme.id and is_operational(item.condition, settings)
    )

    breakdown = SuccessBreakdown(
        base=settings.base_success_likelihood,
        total_assigned=total_assigned,
        matching=matching,
        working_equipment=working,
        minion_bonus=matching * MINION_MATCH_BONUS,
        equipment_bonus=working * WORKING_EQUIPMENT_BONUS,
    )

    if is_over_budget(scheme):
        breakdown.budget_penalty = OVER_BUDGET_PENALTY
        breakdown.factors.append("over budget")

    # A lone specialist still counts as understaffed
    if not (total_assigned >= MIN_TEAM_SIZE and matching >= 1):
        breakdown.resource_penalty = UNDERSTAFFED_PENALTY
        breakdown.factors.append("understaffed")

    if is_overdue(scheme, now):
        breakdown.timeline_penalty = OVERDUE_PENALTY
        breakdown.factors.append("past target date")

    breakdown.raw_score = (
        breakdown.base
        + breakdown.minion_bonus
        + breakdown.equipment_bonus
        + breakdown.budget_penalty
        + breakdown.resource_penalty
        + breakdown.timeline_penalty
    )
    breakdown.score = clamp(breakdown.raw_score)
    return breakdown


def score_success_likelihood(
    scheme: Scheme,
    minions: Iterable[Minion],
    equipment: Iterable[Equipment],
    settings: LairSettings,
    now: datetime,
) -> int:
    """Success likelihood (0-100) for a scheme. See explain_success_likelihood."""
    return explain_success_likelihood(scheme, minions, equipment, settings, now).score


def is_valid_skill_level(skill_level: int) -> bool:
    return MIN_SKILL_LEVEL <= skill_level <= MAX_SKILL_LEVEL


def is_valid_status(status: SchemeStatus | str | None) -> bool:
    if status is None:
        return False
    return status in {s.value for s in SchemeStatus}
