"""State for the lair: entity models, stores and the event bus."""

from .schema import (
    Minion,
    Scheme,
    Equipment,
    SecretBase,
    SchemeStatus,
    CLOSED_STATUSES,
    MoodCounts,
    SuccessBreakdown,
)
from .store import (
    Repository,
    MinionStore,
    SchemeStore,
    EquipmentStore,
    BaseStore,
    MemoryMinionStore,
    MemorySchemeStore,
    MemoryEquipmentStore,
    MemoryBaseStore,
    LairStores,
    copy_fields,
)
from .event_bus import EventBus, EventType, LairEvent

__all__ = [
    # Schema
    "Minion",
    "Scheme",
    "Equipment",
    "SecretBase",
    "SchemeStatus",
    "CLOSED_STATUSES",
    "MoodCounts",
    "SuccessBreakdown",
    # Store
    "Repository",
    "MinionStore",
    "SchemeStore",
    "EquipmentStore",
    "BaseStore",
    "MemoryMinionStore",
    "MemorySchemeStore",
    "MemoryEquipmentStore",
    "MemoryBaseStore",
    "LairStores",
    "copy_fields",
    # Event Bus
    "EventBus",
    "EventType",
    "LairEvent",
]
