"""
Lair systems.

Each system applies the pure rules to stored entities and writes the
results back through the stores.
"""

from .minions import MinionSystem
from .equipment import EquipmentSystem
from .schemes import SchemeSystem
from .bases import BaseSystem
from .dashboard import (
    DashboardSystem,
    Alert,
    AlertSeverity,
    MinionStatistics,
    SchemeStatistics,
    CostStatistics,
)
from .locks import EntityLocks

__all__ = [
    "MinionSystem",
    "EquipmentSystem",
    "SchemeSystem",
    "BaseSystem",
    "DashboardSystem",
    "Alert",
    "AlertSeverity",
    "MinionStatistics",
    "SchemeStatistics",
    "CostStatistics",
    "EntityLocks",
]
