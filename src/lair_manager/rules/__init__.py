"""
Lair rules as pure functions.

Separates decision logic from storage for easier testing. Nothing in this
package touches a store or reads the clock.
"""

from .minions import (
    classify_mood,
    apply_payment,
    is_low_loyalty,
    is_valid_specialty,
)
from .equipment import (
    degraded_condition,
    maintenance_cost,
    is_operational,
    is_broken,
    is_valid_category,
    is_valid_condition,
)
from .schemes import (
    explain_success_likelihood,
    score_success_likelihood,
    is_over_budget,
    is_overdue,
    is_valid_skill_level,
    is_valid_status,
)

__all__ = [
    "classify_mood",
    "apply_payment",
    "is_low_loyalty",
    "is_valid_specialty",
    "degraded_condition",
    "maintenance_cost",
    "is_operational",
    "is_broken",
    "is_valid_category",
    "is_valid_condition",
    "explain_success_likelihood",
    "score_success_likelihood",
    "is_over_budget",
    "is_overdue",
    "is_valid_skill_level",
    "is_valid_status",
]
