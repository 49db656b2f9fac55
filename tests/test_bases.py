"""
Tests for BaseSystem.
"""

import pytest
from decimal import Decimal

from lair_manager import InvalidValueError


class TestBaseValidation:
    @pytest.mark.parametrize("capacity", [0, -5])
    def test_rejects_non_positive_capacity(self, lair, make_base, capacity):
        with pytest.raises(InvalidValueError):
            lair.bases.create(make_base(capacity=capacity))

    @pytest.mark.parametrize("level", [0, 11])
    def test_rejects_bad_security_level(self, lair, make_base, level):
        with pytest.raises(InvalidValueError):
            lair.bases.create(make_base(security_level=level))


class TestOccupancy:
    def test_counts_minions_at_base(self, lair, make_base, make_minion):
        base = lair.bases.create(make_base(capacity=3))
        lair.minions.create(make_minion(base_id=base.id))
        lair.minions.create(make_minion(base_id=base.id))
        lair.minions.create(make_minion(base_id=None))

        assert lair.bases.occupancy(base.id) == 2
        assert not lair.bases.is_at_capacity(base.id)

    def test_full_base(self, lair, make_base, make_minion):
        base = lair.bases.create(make_base(capacity=1))
        lair.minions.create(make_minion(base_id=base.id))

        assert lair.bases.is_at_capacity(base.id)

    def test_unknown_base_not_at_capacity(self, lair):
        assert lair.bases.is_at_capacity(404) is False


class TestBaseQueries:
    def test_total_maintenance_costs(self, lair, make_base):
        lair.bases.create(make_base(monthly_maintenance_cost=Decimal("1000")))
        lair.bases.create(make_base(monthly_maintenance_cost=Decimal("2500.25")))

        assert lair.bases.total_maintenance_costs() == Decimal("3500.25")

    def test_flags_and_location(self, lair, make_base):
        lair.bases.create(make_base(name="Volcano", has_doomsday_device=True))
        lair.bases.create(make_base(name="Glacier", location="Antarctica", is_discovered=True))

        assert [b.name for b in lair.bases.with_doomsday_devices()] == ["Volcano"]
        assert [b.name for b in lair.bases.discovered_bases()] == ["Glacier"]
        assert [b.name for b in lair.bases.by_location("Antarctica")] == ["Glacier"]
