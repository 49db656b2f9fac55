"""
Secret base system.

Thin: occupancy against capacity and upkeep totals.
"""

from decimal import Decimal

from ..errors import InvalidValueError, MissingEntityError
from ..state.event_bus import EventBus, EventType
from ..state.schema import SecretBase
from ..state.store import LairStores


class BaseSystem:
    """Manages secret bases."""

    def __init__(self, stores: LairStores, bus: EventBus | None = None):
        self.stores = stores
        self.bus = bus or EventBus()

    @property
    def _bases(self):
        return self.stores.bases

    def get_all(self) -> list[SecretBase]:
        return self._bases.get_all()

    def get(self, base_id: int) -> SecretBase | None:
        return self._bases.get(base_id)

    def validate(self, base: SecretBase) -> None:
        if base is None:
            raise MissingEntityError("base")
        if not self.is_valid_capacity(base.capacity):
            raise InvalidValueError("capacity", base.capacity, "greater than 0")
        if not self.is_valid_security_level(base.security_level):
            raise InvalidValueError("security_level", base.security_level, "1-10")

    def create(self, base: SecretBase) -> SecretBase:
        self.validate(base)
        self._bases.insert(base)
        self.bus.emit(EventType.ENTITY_CREATED, kind="base", entity_id=base.id)
        return base

    def update(self, base: SecretBase) -> None:
        self.validate(base)
        self._bases.update(base)

    def delete(self, base_id: int) -> bool:
        deleted = self._bases.delete(base_id)
        if deleted:
            self.bus.emit(EventType.ENTITY_DELETED, kind="base", entity_id=base_id)
        return deleted

    def occupancy(self, base_id: int) -> int:
        """Number of minions stationed at the base."""
        return len(self.stores.minions.by_base(base_id))

    def is_at_capacity(self, base_id: int) -> bool:
        """False for an unknown base."""
        base = self.get(base_id)
        if base is None:
            return False
        return self.occupancy(base_id) >= base.capacity

    def total_maintenance_costs(self) -> Decimal:
        return sum((b.monthly_maintenance_cost for b in self.get_all()), Decimal("0"))

    def with_doomsday_devices(self) -> list[SecretBase]:
        return [b for b in self.get_all() if b.has_doomsday_device]

    def discovered_bases(self) -> list[SecretBase]:
        return [b for b in self.get_all() if b.is_discovered]

    def by_location(self, location: str) -> list[SecretBase]:
        return self._bases.by_location(location)

    @staticmethod
    def is_valid_security_level(security_level: int) -> bool:
        return 1 <= security_level <= 10

    @staticmethod
    def is_valid_capacity(capacity: int) -> bool:
        return capacity > 0
