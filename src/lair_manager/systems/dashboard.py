"""
Dashboard aggregation.

Fleet-wide numbers built by composing the other systems. Nothing here
decides anything on its own: if a figure disagrees with the per-entity
rules, the bug is here.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import Enum

from .bases import BaseSystem
from .equipment import EquipmentSystem
from .minions import MinionSystem
from .schemes import SchemeSystem


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class Alert:
    """A dashboard warning with the headcount that triggered it."""
    severity: AlertSeverity
    message: str
    count: int = 0

    def model_dump(self) -> dict:
        """Serialize for JSON (matches Pydantic convention)."""
        return {"severity": self.severity.value, "message": self.message, "count": self.count}


@dataclass
class MinionStatistics:
    total: int = 0
    happy: int = 0
    grumpy: int = 0
    betrayal: int = 0


@dataclass
class SchemeStatistics:
    total: int = 0
    active: int = 0
    average_success_likelihood: float = 0.0


@dataclass
class CostStatistics:
    minion_salaries: Decimal = Decimal("0")
    base_maintenance: Decimal = Decimal("0")
    equipment_maintenance: Decimal = Decimal("0")
    total_monthly_cost: Decimal = Decimal("0")


class DashboardSystem:
    """Read-only summaries across minions, schemes, bases and equipment."""

    def __init__(
        self,
        minions: MinionSystem,
        schemes: SchemeSystem,
        bases: BaseSystem,
        equipment: EquipmentSystem,
    ):
        self.minions = minions
        self.schemes = schemes
        self.bases = bases
        self.equipment = equipment

    def minion_statistics(self) -> MinionStatistics:
        counts = self.minions.mood_counts()
        return MinionStatistics(
            total=counts.happy + counts.grumpy + counts.betrayal,
            happy=counts.happy,
            grumpy=counts.grumpy,
            betrayal=counts.betrayal,
        )

    def scheme_statistics(self) -> SchemeStatistics:
        return SchemeStatistics(
            total=len(self.schemes.get_all()),
            active=len(self.schemes.active_schemes()),
            average_success_likelihood=self.schemes.average_success_likelihood(),
        )

    def cost_statistics(self) -> CostStatistics:
        salaries = self.minions.total_salary_costs()
        bases = self.bases.total_maintenance_costs()
        equipment = self.equipment.total_maintenance_costs()
        return CostStatistics(
            minion_salaries=salaries,
            base_maintenance=bases,
            equipment_maintenance=equipment,
            total_monthly_cost=salaries + bases + equipment,
        )

    def alerts(self) -> list[Alert]:
        alerts = []

        low_loyalty = len(self.minions.low_loyalty_minions())
        if low_loyalty:
            alerts.append(Alert(
                severity=AlertSeverity.WARNING,
                message=f"{low_loyalty} minions have low loyalty and may betray you!",
                count=low_loyalty,
            ))

        broken = len(self.equipment.broken_equipment())
        if broken:
            alerts.append(Alert(
                severity=AlertSeverity.WARNING,
                message=f"{broken} equipment items are broken!",
                count=broken,
            ))

        over_budget = len(self.schemes.over_budget_schemes())
        if over_budget:
            alerts.append(Alert(
                severity=AlertSeverity.WARNING,
                message=f"{over_budget} schemes are over budget!",
                count=over_budget,
            ))

        return alerts

    def summary(self) -> dict:
        """Everything above in one JSON-friendly dict."""
        costs = {k: str(v) for k, v in asdict(self.cost_statistics()).items()}
        return {
            "minions": asdict(self.minion_statistics()),
            "schemes": asdict(self.scheme_statistics()),
            "costs": costs,
            "alerts": [a.model_dump() for a in self.alerts()],
        }
