"""
Scheme system.

Gathers a scheme's crew and kit from the stores and hands them to the
scoring rule. The score is only written back when a caller asks for it
with refresh_success_likelihood.
"""

import logging
from datetime import datetime
from typing import Callable

from ..config import LairSettings
from ..errors import InvalidValueError, MissingEntityError
from ..rules.minions import is_valid_specialty
from ..rules.schemes import (
    explain_success_likelihood,
    is_over_budget,
    is_overdue,
    is_valid_skill_level,
)
from ..state.event_bus import EventBus, EventType
from ..state.schema import CLOSED_STATUSES, Scheme, SchemeStatus, SuccessBreakdown
from ..state.store import LairStores

logger = logging.getLogger(__name__)


class SchemeSystem:
    """Scores schemes and answers portfolio questions about them."""

    def __init__(
        self,
        stores: LairStores,
        settings: LairSettings,
        bus: EventBus | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.stores = stores
        self.settings = settings
        self.bus = bus or EventBus()
        self._clock = clock

    @property
    def _schemes(self):
        return self.stores.schemes

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    def get_all(self) -> list[Scheme]:
        return self._schemes.get_all()

    def get(self, scheme_id: int) -> Scheme | None:
        return self._schemes.get(scheme_id)

    def validate(self, scheme: Scheme) -> None:
        if scheme is None:
            raise MissingEntityError("scheme")
        if not is_valid_specialty(scheme.required_specialty, self.settings):
            raise InvalidValueError(
                "required_specialty",
                scheme.required_specialty,
                ", ".join(sorted(self.settings.valid_specialties)),
            )
        if not is_valid_skill_level(scheme.required_skill_level):
            raise InvalidValueError("required_skill_level", scheme.required_skill_level, "1-10")
        if not 1 <= scheme.diabolical_rating <= 10:
            raise InvalidValueError("diabolical_rating", scheme.diabolical_rating, "1-10")
        if not 0 <= scheme.success_likelihood <= 100:
            raise InvalidValueError("success_likelihood", scheme.success_likelihood, "0-100")
        if scheme.budget < 0:
            raise InvalidValueError("budget", scheme.budget, "non-negative")
        if scheme.current_spending < 0:
            raise InvalidValueError("current_spending", scheme.current_spending, "non-negative")

    def create(self, scheme: Scheme) -> Scheme:
        self.validate(scheme)
        self._schemes.insert(scheme)
        self.bus.emit(EventType.ENTITY_CREATED, kind="scheme", entity_id=scheme.id)
        return scheme

    def update(self, scheme: Scheme) -> None:
        self.validate(scheme)
        self._schemes.update(scheme)

    def delete(self, scheme_id: int) -> bool:
        deleted = self._schemes.delete(scheme_id)
        if deleted:
            self.bus.emit(EventType.ENTITY_DELETED, kind="scheme", entity_id=scheme_id)
        return deleted

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def explain_success_likelihood(self, scheme: Scheme) -> SuccessBreakdown:
        """
        Score a scheme against a snapshot of its assigned minions and equipment.

        Each relation is read once before scoring starts, so a reassignment
        landing mid-calculation can't produce a half-updated score.
        """
        if scheme is None:
            raise MissingEntityError("scheme")

        minions = self.stores.minions.by_scheme(scheme.id) if scheme.id is not None else []
        equipment = self.stores.equipment.by_scheme(scheme.id) if scheme.id is not None else []

        breakdown = explain_success_likelihood(
            scheme, minions, equipment, self.settings, self._clock()
        )
        logger.debug(f"Scored {scheme.name}: {breakdown.model_dump()}")
        return breakdown

    def calculate_success_likelihood(self, scheme: Scheme) -> int:
        """Current success likelihood (0-100). Does not persist."""
        return self.explain_success_likelihood(scheme).score

    def refresh_success_likelihood(self, scheme: Scheme) -> int:
        """Recalculate, store on the scheme and persist."""
        score = self.calculate_success_likelihood(scheme)
        before = scheme.success_likelihood
        scheme.success_likelihood = score
        self._schemes.update(scheme)

        if score != before:
            logger.info(f"{scheme.name} success likelihood: {before}% -> {score}%")
        self.bus.emit(
            EventType.SCHEME_SUCCESS_UPDATED,
            scheme_id=scheme.id,
            before=before,
            after=score,
        )
        return score

    def is_over_budget(self, scheme: Scheme) -> bool:
        return is_over_budget(scheme)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def by_status(self, status: SchemeStatus | str) -> list[Scheme]:
        return self._schemes.by_status(status)

    def active_schemes(self) -> list[Scheme]:
        return self.by_status(self.settings.status_active)

    def over_budget_schemes(self) -> list[Scheme]:
        return [s for s in self.get_all() if is_over_budget(s)]

    def overdue_schemes(self) -> list[Scheme]:
        """Past their target date and neither completed nor failed."""
        now = self._clock()
        return [
            s for s in self.get_all()
            if is_overdue(s, now) and s.status not in CLOSED_STATUSES
        ]

    def average_success_likelihood(self) -> float:
        """Mean score over active schemes; 0.0 when none are active."""
        active = self.active_schemes()
        if not active:
            return 0.0
        total = sum(self.calculate_success_likelihood(s) for s in active)
        return total / len(active)
