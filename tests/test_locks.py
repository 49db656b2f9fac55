"""
Tests for the per-entity lock registry.
"""

import threading

from lair_manager.systems import EntityLocks


class TestEntityLocks:
    def test_same_key_same_lock(self):
        locks = EntityLocks()

        assert locks.lock_for(1) is locks.lock_for(1)
        assert locks.lock_for(1) is not locks.lock_for(2)

    def test_hold_is_reentrant(self):
        """Nested holds on one key from one thread don't deadlock."""
        locks = EntityLocks()
        entered = []

        def nested():
            with locks.hold(7):
                with locks.hold(7):
                    entered.append(True)

        t = threading.Thread(target=nested)
        t.start()
        t.join(timeout=2)

        assert entered == [True]

    def test_none_key_takes_no_lock(self):
        locks = EntityLocks()

        with locks.hold(None):
            pass

        assert len(locks) == 0

    def test_discard(self):
        locks = EntityLocks()
        locks.lock_for(3)

        locks.discard(3)
        locks.discard(3)

        assert 3 not in locks
        assert len(locks) == 0
