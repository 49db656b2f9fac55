"""
Pydantic models for lair state.

Entities are plain data. Relationships are integer ids resolved through the
stores, never embedded objects. Behavior lives in lair_manager.rules and
lair_manager.systems.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class SchemeStatus(str, Enum):
    PLANNING = "Planning"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    FAILED = "Failed"
    ON_HOLD = "On Hold"


# Statuses that no longer count against the deadline
CLOSED_STATUSES: frozenset[SchemeStatus] = frozenset({
    SchemeStatus.COMPLETED,
    SchemeStatus.FAILED,
})


# -----------------------------------------------------------------------------
# Entities
# -----------------------------------------------------------------------------

class Minion(BaseModel):
    """A member of the payroll."""
    id: int | None = None  # Assigned by the store on insert
    name: str
    skill_level: int = 1  # 1-10
    specialty: str
    loyalty_score: int = 50  # 0-100, clamped by the rules
    salary_demand: Decimal = Decimal("0")

    base_id: int | None = None
    scheme_id: int | None = None

    # Stored projection of loyalty_score, refreshed by MinionSystem.update_mood
    mood_status: str = "Grumpy"
    last_mood_update: datetime | None = None

    version: int = 0  # Bumped by the store on every update

    def __str__(self) -> str:
        return f"{self.name} ({self.specialty}, Skill: {self.skill_level})"


class Scheme(BaseModel):
    """An evil scheme and its resourcing state."""
    id: int | None = None
    name: str
    description: str = ""
    budget: Decimal = Decimal("0")
    current_spending: Decimal = Decimal("0")  # May exceed budget
    required_skill_level: int = 1  # 1-10
    required_specialty: str
    status: SchemeStatus = SchemeStatus.PLANNING
    start_date: datetime | None = None
    target_completion_date: datetime
    diabolical_rating: int = 1  # 1-10, flavor only
    success_likelihood: int = 0  # 0-100, refreshed on demand

    def __str__(self) -> str:
        return f"{self.name} ({self.status.value}, {self.success_likelihood}%)"


class Equipment(BaseModel):
    """A piece of kit, from stun guns to doomsday devices."""
    id: int | None = None
    name: str
    category: str
    condition: int = 100  # 0-100
    purchase_price: Decimal = Decimal("0")
    maintenance_cost: Decimal = Decimal("0")  # Cost of the last maintenance
    scheme_id: int | None = None
    base_id: int | None = None
    requires_specialist: bool = False
    last_maintenance_date: datetime | None = None
    version: int = 0  # Bumped by the store on every update

    def __str__(self) -> str:
        return f"{self.name} ({self.category}, Condition: {self.condition}%)"


class SecretBase(BaseModel):
    """A lair."""
    id: int | None = None
    name: str
    location: str
    capacity: int = 10  # > 0
    security_level: int = 5  # 1-10
    monthly_maintenance_cost: Decimal = Decimal("0")
    has_doomsday_device: bool = False
    is_discovered: bool = False
    last_inspection_date: datetime | None = None

    def __str__(self) -> str:
        return f"{self.name} ({self.location})"


class MoodCounts(BaseModel):
    """Minion headcount per mood band."""
    happy: int = 0
    grumpy: int = 0
    betrayal: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"Happy": self.happy, "Grumpy": self.grumpy, "Betrayal": self.betrayal}


class SuccessBreakdown(BaseModel):
    """Every term of a success-likelihood calculation."""
    base: int
    total_assigned: int = 0
    matching: int = 0
    working_equipment: int = 0
    minion_bonus: int = 0
    equipment_bonus: int = 0
    budget_penalty: int = 0
    resource_penalty: int = 0
    timeline_penalty: int = 0
    raw_score: int = 0  # Before clamping
    score: int = 0  # Clamped to 0-100
    factors: list[str] = Field(default_factory=list)
