"""
Equipment system.

Wear and tear while schemes run, maintenance and its bill, and the
inventory queries the dashboard needs.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable

from ..config import LairSettings
from ..errors import InvalidValueError, MissingEntityError
from ..rules.equipment import (
    FULL_CONDITION,
    degraded_condition,
    is_broken,
    is_operational,
    is_valid_category,
    is_valid_condition,
    maintenance_cost,
)
from ..state.event_bus import EventBus, EventType
from ..state.schema import Equipment
from ..state.store import LairStores, copy_fields
from .locks import EntityLocks

logger = logging.getLogger(__name__)

# Months of wear applied per degrade_condition call
MONTHS_PER_DEGRADATION = 1


class EquipmentSystem:
    """Manages equipment condition and maintenance."""

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
    def _equipment(self):
        return self.stores.equipment

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    def get_all(self) -> list[Equipment]:
        return self._equipment.get_all()

    def get(self, equipment_id: int) -> Equipment | None:
        return self._equipment.get(equipment_id)

    def validate(self, equipment: Equipment) -> None:
        if equipment is None:
            raise MissingEntityError("equipment")
        if not is_valid_category(equipment.category, self.settings):
            raise InvalidValueError(
                "category", equipment.category, ", ".join(sorted(self.settings.valid_categories))
            )
        if not is_valid_condition(equipment.condition):
            raise InvalidValueError("condition", equipment.condition, "0-100")
        if equipment.purchase_price < 0:
            raise InvalidValueError("purchase_price", equipment.purchase_price, "non-negative")

    def create(self, equipment: Equipment) -> Equipment:
        self.validate(equipment)
        self._equipment.insert(equipment)
        self.bus.emit(EventType.ENTITY_CREATED, kind="equipment", entity_id=equipment.id)
        return equipment

    def update(self, equipment: Equipment) -> None:
        self.validate(equipment)
        with self._locks.hold(equipment.id):
            self._equipment.update(equipment)

    def delete(self, equipment_id: int) -> bool:
        deleted = self._equipment.delete(equipment_id)
        if deleted:
            self._locks.discard(equipment_id)
            self.bus.emit(EventType.ENTITY_DELETED, kind="equipment", entity_id=equipment_id)
        return deleted

    # -------------------------------------------------------------------------
    # Condition
    # -------------------------------------------------------------------------

    def degrade_condition(self, equipment: Equipment) -> bool:
        """
        Apply one month of wear if the equipment is on an active scheme.

        Equipment sitting in storage, or assigned to a scheme that is missing
        or not active, is left alone and nothing is persisted.

        Returns:
            True if condition was degraded and saved
        """
        if equipment is None:
            raise MissingEntityError("equipment")
        if equipment.scheme_id is None:
            return False

        scheme = self.stores.schemes.get(equipment.scheme_id)
        if scheme is None or scheme.status.value != self.settings.status_active:
            return False

        with self._locks.hold(equipment.id):
            stored = self._equipment.get(equipment.id) if equipment.id is not None else None
            target = stored if stored is not None else equipment
            before = target.condition

            target.condition = degraded_condition(
                before, MONTHS_PER_DEGRADATION, self.settings
            )
            self._equipment.update(target)
            if target is not equipment:
                copy_fields(equipment, target)

        logger.info(f"{equipment.name} degraded: {before} -> {equipment.condition}")
        self.bus.emit(
            EventType.EQUIPMENT_DEGRADED,
            equipment_id=equipment.id,
            scheme_id=scheme.id,
            before=before,
            after=equipment.condition,
        )
        return True

    def perform_maintenance(self, equipment: Equipment) -> Decimal:
        """
        Restore equipment to full condition and return the bill.

        The cost is also recorded on the equipment as its maintenance_cost.
        """
        if equipment is None:
            raise MissingEntityError("equipment")

        with self._locks.hold(equipment.id):
            stored = self._equipment.get(equipment.id) if equipment.id is not None else None
            target = stored if stored is not None else equipment
            before = target.condition

            cost = maintenance_cost(target.purchase_price, target.category, self.settings)
            target.condition = FULL_CONDITION
            target.maintenance_cost = cost
            target.last_maintenance_date = self._clock()
            self._equipment.update(target)
            if target is not equipment:
                copy_fields(equipment, target)

        logger.info(f"Maintained {equipment.name} ({before} -> {FULL_CONDITION}) for {cost}")
        self.bus.emit(
            EventType.EQUIPMENT_MAINTAINED,
            equipment_id=equipment.id,
            before=before,
            cost=str(cost),
        )
        return cost

    def is_operational(self, equipment: Equipment) -> bool:
        if equipment is None:
            raise MissingEntityError("equipment")
        return is_operational(equipment.condition, self.settings)

    def is_broken(self, equipment: Equipment) -> bool:
        if equipment is None:
            raise MissingEntityError("equipment")
        return is_broken(equipment.condition, self.settings)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def broken_equipment(self) -> list[Equipment]:
        return [e for e in self.get_all() if is_broken(e.condition, self.settings)]

    def total_maintenance_costs(self) -> Decimal:
        return sum((e.maintenance_cost for e in self.get_all()), Decimal("0"))

    def by_category(self, category: str) -> list[Equipment]:
        return self._equipment.by_category(category)

    def for_scheme(self, scheme_id: int) -> list[Equipment]:
        return self._equipment.by_scheme(scheme_id)

    def operational_for_scheme(self, scheme_id: int) -> list[Equipment]:
        return [
            e for e in self.for_scheme(scheme_id)
            if is_operational(e.condition, self.settings)
        ]

    def at_base(self, base_id: int) -> list[Equipment]:
        return self._equipment.by_base(base_id)

    def is_valid_category(self, category: str | None) -> bool:
        return is_valid_category(category, self.settings)
