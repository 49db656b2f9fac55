"""
Minion system.

Owns the persistence side of the minion rules: mood refreshes, payday
loyalty changes, recruitment and roster queries.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable

from ..config import LairSettings
from ..errors import InvalidValueError, MissingEntityError
from ..rules.minions import apply_payment, classify_mood, is_low_loyalty, is_valid_specialty
from ..rules.schemes import is_valid_skill_level
from ..rules.bounds import clamp
from ..state.event_bus import EventBus, EventType
from ..state.schema import Minion, MoodCounts
from ..state.store import LairStores, copy_fields
from .locks import EntityLocks

logger = logging.getLogger(__name__)


class MinionSystem:
    """
    Manages minion mood and loyalty.

    Mood is only ever written here, and always right after loyalty changes,
    so the stored label never lags the score it was derived from.
    """

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
        self._locks = EntityLocks()

    @property
    def _minions(self):
        return self.stores.minions

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    def get_all(self) -> list[Minion]:
        return self._minions.get_all()

    def get(self, minion_id: int) -> Minion | None:
        return self._minions.get(minion_id)

    def validate(self, minion: Minion) -> None:
        """
        Reject minions with an unknown specialty or impossible numbers.

        Raises:
            InvalidValueError: Naming the first bad field
        """
        if minion is None:
            raise MissingEntityError("minion")
        if not is_valid_specialty(minion.specialty, self.settings):
            raise InvalidValueError(
                "specialty", minion.specialty, ", ".join(sorted(self.settings.valid_specialties))
            )
        if not is_valid_skill_level(minion.skill_level):
            raise InvalidValueError("skill_level", minion.skill_level, "1-10")
        if not 0 <= minion.loyalty_score <= 100:
            raise InvalidValueError("loyalty_score", minion.loyalty_score, "0-100")
        if minion.salary_demand < 0:
            raise InvalidValueError("salary_demand", minion.salary_demand, "non-negative")

    def create(self, minion: Minion) -> Minion:
        """Validate and insert. Loyalty is clamped and mood derived from it."""
        if minion is None:
            raise MissingEntityError("minion")
        minion.loyalty_score = clamp(minion.loyalty_score)
        self.validate(minion)
        minion.mood_status = classify_mood(minion.loyalty_score, self.settings)
        minion.last_mood_update = self._clock()
        self._minions.insert(minion)
        self.bus.emit(EventType.ENTITY_CREATED, kind="minion", entity_id=minion.id)
        return minion

    def update(self, minion: Minion) -> None:
        """
        Validate and persist an edited minion, re-deriving its mood.

        Raises:
            InvalidValueError: If loyalty or another field is out of range
            StaleEntityError: If the minion changed since this copy was read
        """
        self.validate(minion)
        self.update_mood(minion)

    def delete(self, minion_id: int) -> bool:
        deleted = self._minions.delete(minion_id)
        if deleted:
            self._locks.discard(minion_id)
            self.bus.emit(EventType.ENTITY_DELETED, kind="minion", entity_id=minion_id)
        return deleted

    def recruit(
        self,
        name: str,
        specialty: str,
        skill_level: int = 1,
        salary_demand: Decimal | None = None,
        base_id: int | None = None,
    ) -> Minion:
        """
        Hire a new minion on the default terms.

        Salary and starting loyalty come from settings unless given.
        """
        minion = Minion(
            name=name,
            specialty=specialty,
            skill_level=skill_level,
            salary_demand=(
                self.settings.default_minion_salary if salary_demand is None else salary_demand
            ),
            loyalty_score=self.settings.default_minion_loyalty,
            base_id=base_id,
        )
        self.create(minion)
        logger.info(f"Recruited {minion}")
        self.bus.emit(
            EventType.MINION_RECRUITED,
            minion_id=minion.id,
            name=minion.name,
            specialty=minion.specialty,
        )
        return minion

    # -------------------------------------------------------------------------
    # Mood and loyalty
    # -------------------------------------------------------------------------

    def update_mood(self, minion: Minion) -> str:
        """
        Re-derive the mood label from loyalty, stamp it and persist.

        Returns:
            The new mood label

        Raises:
            StaleEntityError: If the minion changed since this copy was read
        """
        if minion is None:
            raise MissingEntityError("minion")

        with self._locks.hold(minion.id):
            before = minion.mood_status
            minion.mood_status = classify_mood(minion.loyalty_score, self.settings)
            minion.last_mood_update = self._clock()
            self._minions.update(minion)

        if minion.mood_status != before:
            logger.info(f"{minion.name} mood: {before} -> {minion.mood_status}")
            self.bus.emit(
                EventType.MINION_MOOD_CHANGED,
                minion_id=minion.id,
                before=before,
                after=minion.mood_status,
            )
        return minion.mood_status

    def update_loyalty(self, minion: Minion, paid: Decimal | int | str) -> int:
        """
        Apply a salary payment to loyalty, then refresh mood.

        The payment is applied to the stored record under the minion's lock,
        so two paydays processed at once both count. The caller's copy is
        brought up to date afterwards.

        Args:
            minion: The minion being paid
            paid: Amount actually paid this period

        Returns:
            New loyalty score
        """
        if minion is None:
            raise MissingEntityError("minion")

        paid = Decimal(str(paid))
        with self._locks.hold(minion.id):
            stored = self._minions.get(minion.id) if minion.id is not None else None
            target = stored if stored is not None else minion
            before = target.loyalty_score

            target.loyalty_score = apply_payment(
                before, paid, target.salary_demand, self.settings
            )
            self.update_mood(target)
            if target is not minion:
                copy_fields(minion, target)

        if minion.loyalty_score != before:
            self.bus.emit(
                EventType.MINION_LOYALTY_CHANGED,
                minion_id=minion.id,
                before=before,
                after=minion.loyalty_score,
                paid=str(paid),
            )
        return minion.loyalty_score

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def mood_counts(self) -> MoodCounts:
        """Headcount per mood band, classified from current loyalty."""
        counts = MoodCounts()
        for minion in self.get_all():
            mood = classify_mood(minion.loyalty_score, self.settings)
            if mood == self.settings.mood_happy:
                counts.happy += 1
            elif mood == self.settings.mood_betrayal:
                counts.betrayal += 1
            else:
                counts.grumpy += 1
        return counts

    def low_loyalty_minions(self) -> list[Minion]:
        return [m for m in self.get_all() if is_low_loyalty(m.loyalty_score, self.settings)]

    def total_salary_costs(self) -> Decimal:
        return sum((m.salary_demand for m in self.get_all()), Decimal("0"))

    def by_specialty(self, specialty: str) -> list[Minion]:
        return self._minions.by_specialty(specialty)

    def for_scheme(self, scheme_id: int) -> list[Minion]:
        return self._minions.by_scheme(scheme_id)

    def at_base(self, base_id: int) -> list[Minion]:
        return self._minions.by_base(base_id)

    def is_valid_specialty(self, specialty: str | None) -> bool:
        return is_valid_specialty(specialty, self.settings)
