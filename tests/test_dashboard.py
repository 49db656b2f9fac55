"""
Tests for DashboardSystem.

Every figure here must agree with the per-entity systems.
"""

from decimal import Decimal

from lair_manager.state import SchemeStatus
from lair_manager.systems import AlertSeverity


class TestMinionStatistics:
    def test_counts_match_mood_bands(self, lair, make_minion):
        for loyalty in (95, 60, 40, 10):
            lair.minions.create(make_minion(loyalty_score=loyalty))

        stats = lair.dashboard.minion_statistics()

        assert stats.total == 4
        assert (stats.happy, stats.grumpy, stats.betrayal) == (1, 2, 1)
        assert lair.minions.mood_counts().as_dict() == {
            "Happy": stats.happy, "Grumpy": stats.grumpy, "Betrayal": stats.betrayal,
        }

    def test_empty_roster(self, lair):
        stats = lair.dashboard.minion_statistics()

        assert stats.total == 0


class TestSchemeStatistics:
    def test_no_active_schemes_average_zero(self, lair, make_scheme):
        lair.schemes.create(make_scheme(status=SchemeStatus.COMPLETED))

        stats = lair.dashboard.scheme_statistics()

        assert stats.total == 1
        assert stats.active == 0
        assert stats.average_success_likelihood == 0

    def test_average_matches_scheme_system(self, lair, make_scheme, make_minion):
        a = lair.schemes.create(make_scheme())
        lair.schemes.create(make_scheme())
        lair.minions.create(make_minion(scheme_id=a.id))

        stats = lair.dashboard.scheme_statistics()

        assert stats.active == 2
        assert stats.average_success_likelihood == lair.schemes.average_success_likelihood()
        assert stats.average_success_likelihood == 40.0  # (45 + 35) / 2


class TestCostStatistics:
    def test_sums_all_three_sources(self, lair, make_minion, make_base, make_equipment):
        lair.minions.create(make_minion(salary_demand=Decimal("5000")))
        lair.minions.create(make_minion(salary_demand=Decimal("3000")))
        lair.bases.create(make_base(monthly_maintenance_cost=Decimal("20000")))
        item = lair.equipment.create(make_equipment(purchase_price=Decimal("10000")))
        lair.equipment.perform_maintenance(item)

        costs = lair.dashboard.cost_statistics()

        assert costs.minion_salaries == Decimal("8000")
        assert costs.base_maintenance == Decimal("20000")
        assert costs.equipment_maintenance == Decimal("1500")
        assert costs.total_monthly_cost == Decimal("29500")


class TestAlerts:
    def test_no_alerts_when_all_is_well(self, lair, make_minion, make_equipment, make_scheme):
        lair.minions.create(make_minion(loyalty_score=80))
        lair.equipment.create(make_equipment(condition=90))
        lair.schemes.create(make_scheme())

        assert lair.dashboard.alerts() == []

    def test_alerts_carry_counts(self, lair, make_minion, make_equipment, make_scheme):
        lair.minions.create(make_minion(loyalty_score=10))
        lair.minions.create(make_minion(loyalty_score=39))
        lair.minions.create(make_minion(loyalty_score=40))
        lair.equipment.create(make_equipment(condition=5))
        lair.schemes.create(make_scheme(current_spending=Decimal("999999")))

        alerts = lair.dashboard.alerts()

        assert [a.count for a in alerts] == [2, 1, 1]
        assert all(a.severity == AlertSeverity.WARNING for a in alerts)
        assert alerts[0].message == "2 minions have low loyalty and may betray you!"
        assert alerts[1].message == "1 equipment items are broken!"
        assert alerts[2].message == "1 schemes are over budget!"

    def test_alert_counts_match_systems(self, lair, make_minion, make_equipment):
        lair.minions.create(make_minion(loyalty_score=0))
        lair.equipment.create(make_equipment(condition=19))
        lair.equipment.create(make_equipment(condition=20))

        alerts = {a.message.split(" ", 1)[1]: a.count for a in lair.dashboard.alerts()}

        assert alerts["minions have low loyalty and may betray you!"] == len(
            lair.minions.low_loyalty_minions()
        )
        assert alerts["equipment items are broken!"] == len(lair.equipment.broken_equipment())


class TestSummary:
    def test_summary_is_json_friendly(self, lair, make_minion):
        lair.minions.create(make_minion(loyalty_score=5, salary_demand=Decimal("10")))

        summary = lair.dashboard.summary()

        assert summary["minions"]["betrayal"] == 1
        assert summary["costs"]["minion_salaries"] == "10"
        assert summary["alerts"][0]["severity"] == "warning"
