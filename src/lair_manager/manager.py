"""
Lair wiring.

Builds the stores, event bus and systems from one settings object, the way
a host application would at startup.
"""

from datetime import datetime
from pathlib import Path
from typing import Callable

from .config import LairSettings, load_settings
from .state.event_bus import EventBus
from .state.store import LairStores
from .systems import BaseSystem, DashboardSystem, EquipmentSystem, MinionSystem, SchemeSystem


class LairManager:
    """
    Entry point for a lair.

    Storage is delegated to a LairStores bundle:
    - LairStores.in_memory() by default
    - any set of objects matching the store Protocols otherwise

    Systems share the settings, the event bus and the clock.
    """

    def __init__(
        self,
        settings: LairSettings | Path | str | None = None,
        stores: LairStores | None = None,
        bus: EventBus | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            settings: LairSettings instance, or path to a settings file
            stores: Entity stores (in-memory if omitted)
            bus: Event bus shared by every system
            clock: Source of "now" for timestamps and deadlines
        """
        if settings is None or isinstance(settings, (Path, str)):
            settings = load_settings(settings)
        self.settings = settings
        self.stores = stores or LairStores.in_memory()
        self.bus = bus or EventBus()

        self.minions = MinionSystem(self.stores, self.settings, self.bus, clock)
        self.equipment = EquipmentSystem(self.stores, self.settings, self.bus, clock)
        self.schemes = SchemeSystem(self.stores, self.settings, self.bus, clock)
        self.bases = BaseSystem(self.stores, self.bus)
        self.dashboard = DashboardSystem(self.minions, self.schemes, self.bases, self.equipment)
