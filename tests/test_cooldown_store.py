import unittest

from skillwatch.models import ItemDescriptor, Skill, SkillKey, Tier
from skillwatch.tracking.cooldown_store import CooldownStore
from skillwatch.tracking.notifications import NotificationQueue


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


FORESTRY_WOOD = SkillKey(Skill.FORESTRY, Tier.WOOD)


class CooldownStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.store = CooldownStore(60.0, clock=self.clock)

    def test_first_trigger_creates_entry(self) -> None:
        self.assertTrue(self.store.start_or_refresh(FORESTRY_WOOD, ItemDescriptor("minecraft:wooden_axe")))
        entry = self.store.entry(FORESTRY_WOOD)
        self.assertEqual(entry.ready_at, 1060.0)
        self.assertFalse(entry.notified)
        self.assertTrue(self.store.is_active(FORESTRY_WOOD))

    def test_repeat_within_window_keeps_deadline_but_updates_icon(self) -> None:
        self.store.start_or_refresh(FORESTRY_WOOD, ItemDescriptor("minecraft:wooden_axe", count=1))
        self.clock.advance(20)
        started = self.store.start_or_refresh(
            FORESTRY_WOOD, ItemDescriptor("minecraft:wooden_axe", count=2)
        )
        self.assertFalse(started)
        entry = self.store.entry(FORESTRY_WOOD)
        self.assertEqual(entry.ready_at, 1060.0)
        self.assertEqual(entry.icon.count, 2)

    def test_trigger_after_expiry_restarts_and_clears_notified(self) -> None:
        self.store.start_or_refresh(FORESTRY_WOOD, None)
        self.clock.advance(61)
        self.assertEqual(self.store.collect_newly_ready(), [FORESTRY_WOOD])
        self.assertTrue(self.store.entry(FORESTRY_WOOD).notified)

        self.assertTrue(self.store.start_or_refresh(FORESTRY_WOOD, None))
        entry = self.store.entry(FORESTRY_WOOD)
        self.assertEqual(entry.ready_at, self.clock.now + 60.0)
        self.assertFalse(entry.notified)
        self.assertEqual(len(self.store), 1)

    def test_ready_transition_is_one_shot(self) -> None:
        self.store.start_or_refresh(FORESTRY_WOOD, None)
        self.clock.advance(30)
        self.assertEqual(self.store.collect_newly_ready(), [])
        self.clock.advance(30)
        self.assertEqual(self.store.collect_newly_ready(), [FORESTRY_WOOD])
        self.clock.advance(5)
        self.assertEqual(self.store.collect_newly_ready(), [])

    def test_icon_is_a_copy(self) -> None:
        icon = {"identifier": "minecraft:iron_axe", "damage": 3}
        self.store.start_or_refresh(FORESTRY_WOOD, icon)
        icon["damage"] = 99
        self.assertEqual(self.store.icon_for(FORESTRY_WOOD)["damage"], 3)

    def test_active_cooldowns_hide_expired_entries(self) -> None:
        mining = SkillKey(Skill.MINING, Tier.STONE)
        self.store.start_or_refresh(FORESTRY_WOOD, None)
        self.clock.advance(30.5)
        self.store.start_or_refresh(mining, None)
        rows = self.store.active_cooldowns()
        self.assertEqual([r.key for r in rows], [FORESTRY_WOOD, mining])
        self.assertEqual(rows[0].remaining_seconds, 30)
        self.assertEqual(rows[1].remaining_seconds, 60)

        self.clock.advance(30)
        self.assertEqual([r.key for r in self.store.active_cooldowns()], [mining])
        self.assertIn(FORESTRY_WOOD, self.store)

    def test_smithing_tiers_share_one_entry(self) -> None:
        self.store.start_or_refresh(SkillKey(Skill.TOOLSMITHING, Tier.DIAMOND), None)
        self.store.start_or_refresh(SkillKey(Skill.TOOLSMITHING, Tier.WOOD), None)
        self.assertEqual(len(self.store), 1)


class NotificationQueueTests(unittest.TestCase):
    def test_toast_expires_after_display_duration(self) -> None:
        clock = FakeClock(100.0)
        queue = NotificationQueue(2.5, clock=clock)
        queue.push(FORESTRY_WOOD)

        clock.now = 102.0
        self.assertEqual([t.key for t in queue.live_toasts()], [FORESTRY_WOOD])

        clock.now = 102.6
        self.assertEqual(queue.live_toasts(), [])
        self.assertEqual(len(queue), 0)

    def test_toasts_keep_insertion_order(self) -> None:
        clock = FakeClock(0.0)
        queue = NotificationQueue(2.5, clock=clock)
        mining = SkillKey(Skill.MINING, Tier.IRON)
        queue.push(mining)
        clock.advance(1.0)
        queue.push(FORESTRY_WOOD)
        toasts = queue.live_toasts()
        self.assertEqual([t.key for t in toasts], [mining, FORESTRY_WOOD])
        self.assertAlmostEqual(toasts[0].age_seconds, 1.0)

        clock.advance(2.0)
        self.assertEqual([t.key for t in queue.live_toasts()], [FORESTRY_WOOD])


if __name__ == "__main__":
    unittest.main()
