import math
import unittest

from skillwatch.detection.aim_cone import select_target
from skillwatch.detection.block_break import BlockBreakDetector
from skillwatch.detection.melee import MeleeDetector
from skillwatch.detection.ranged import BowDetector, CrossbowDetector, RangedDetector
from skillwatch.models import (
    AppConfig,
    BlockDescriptor,
    EntityDescriptor,
    ItemDescriptor,
    Skill,
    SkillKey,
    TickObservation,
    Tier,
)
from skillwatch.tracking.cooldown_store import CooldownStore

EYE = (0.0, 0.0, 0.0)
LOOK = (0.0, 0.0, 1.0)


def entity_at(entity_id: int, distance: float, angle_deg: float, **kwargs) -> EntityDescriptor:
    angle = math.radians(angle_deg)
    return EntityDescriptor(
        entity_id,
        (math.sin(angle) * distance, 0.0, math.cos(angle) * distance),
        **kwargs,
    )


ZOMBIE = EntityDescriptor(1, (0.0, 0.0, 6.0))


class AimConeTests(unittest.TestCase):
    def test_picks_nearest_inside_cone(self) -> None:
        near = entity_at(1, 5.0, 6.0)
        far = entity_at(2, 8.0, 0.0)
        self.assertIs(select_target(EYE, LOOK, [far, near], 48.0, 12.0), near)

    def test_outside_cone_selects_nothing(self) -> None:
        entities = [entity_at(1, 5.0, 15.0), entity_at(2, 8.0, -15.0)]
        self.assertIsNone(select_target(EYE, LOOK, entities, 48.0, 12.0))

    def test_out_of_range_and_degenerate_are_skipped(self) -> None:
        entities = [entity_at(1, 60.0, 0.0), EntityDescriptor(2, EYE)]
        self.assertIsNone(select_target(EYE, LOOK, entities, 48.0, 12.0))

    def test_dead_and_non_living_are_skipped(self) -> None:
        entities = [
            entity_at(1, 4.0, 0.0, is_alive=False),
            entity_at(2, 5.0, 0.0, is_living=False),
            entity_at(3, 9.0, 0.0),
        ]
        self.assertEqual(select_target(EYE, LOOK, entities, 48.0, 12.0).entity_id, 3)

    def test_unnormalized_look_direction(self) -> None:
        target = entity_at(1, 10.0, 0.0)
        self.assertIs(select_target(EYE, (0.0, 0.0, 5.0), [target], 48.0, 12.0), target)


class BlockBreakTests(unittest.TestCase):
    def test_log_with_wooden_axe_starts_forestry(self) -> None:
        store = CooldownStore(60.0, clock=lambda: 0.0)
        detector = BlockBreakDetector(store)
        key = detector.on_block_broken(
            ItemDescriptor("minecraft:wooden_axe"), BlockDescriptor("minecraft:birch_log")
        )
        self.assertEqual(key, SkillKey(Skill.FORESTRY, Tier.WOOD))
        self.assertTrue(store.is_active(key))

    def test_unclassified_break_is_ignored(self) -> None:
        store = CooldownStore(60.0, clock=lambda: 0.0)
        detector = BlockBreakDetector(store)
        self.assertIsNone(detector.on_block_broken(None, BlockDescriptor("minecraft:oak_log")))
        self.assertIsNone(
            detector.on_block_broken(
                ItemDescriptor("minecraft:stick"), BlockDescriptor("minecraft:oak_log")
            )
        )
        self.assertEqual(len(store), 0)


class MeleeDetectorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = CooldownStore(60.0, clock=lambda: 0.0)
        self.detector = MeleeDetector(self.store)
        self.sword = ItemDescriptor("minecraft:iron_sword")

    def test_held_attack_fires_once(self) -> None:
        fired = [self.detector.update(True, self.sword, ZOMBIE) for _ in range(10)]
        hits = [k for k in fired if k is not None]
        self.assertEqual(hits, [SkillKey(Skill.MELEE_COMBAT, Tier.IRON)])

    def test_release_and_press_fires_again(self) -> None:
        self.assertIsNotNone(self.detector.update(True, self.sword, ZOMBIE))
        self.assertIsNone(self.detector.update(False, self.sword, ZOMBIE))
        self.assertIsNotNone(self.detector.update(True, self.sword, ZOMBIE))

    def test_axe_counts_as_melee_weapon(self) -> None:
        key = self.detector.update(True, ItemDescriptor("minecraft:stone_axe"), ZOMBIE)
        self.assertEqual(key, SkillKey(Skill.MELEE_COMBAT, Tier.STONE))

    def test_requires_living_target_and_weapon(self) -> None:
        armor_stand = EntityDescriptor(2, (0.0, 0.0, 2.0), is_living=False)
        self.assertIsNone(self.detector.update(True, self.sword, None))
        self.detector.update(False, self.sword, None)
        self.assertIsNone(self.detector.update(True, self.sword, armor_stand))
        self.detector.update(False, self.sword, None)
        self.assertIsNone(self.detector.update(True, ItemDescriptor("minecraft:stick"), ZOMBIE))
        self.assertEqual(len(self.store), 0)

    def test_edge_is_consumed_even_without_a_target(self) -> None:
        self.assertIsNone(self.detector.update(True, self.sword, None))
        # Target moves under the crosshair while the button stays down
        self.assertIsNone(self.detector.update(True, self.sword, ZOMBIE))


class BowDetectorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = CooldownStore(60.0, clock=lambda: 0.0)
        self.detector = BowDetector(self.store, min_draw_ticks=5)
        self.bow = ItemDescriptor("minecraft:bow")

    def _draw(self, start: int, release: int, entities) -> list:
        results = []
        for tick in range(start, release):
            results.append(self.detector.update(True, tick, self.bow, EYE, LOOK, entities))
        results.append(self.detector.update(False, release, None, EYE, LOOK, entities))
        return [k for k in results if k is not None]

    def test_full_draw_on_target_counts(self) -> None:
        self.assertEqual(
            self._draw(10, 30, [ZOMBIE]),
            [SkillKey(Skill.RANGED_COMBAT, Tier.WOOD, "bow")],
        )

    def test_quick_release_is_ignored(self) -> None:
        self.assertEqual(self._draw(10, 14, [ZOMBIE]), [])
        self.assertEqual(len(self.store), 0)

    def test_minimum_draw_is_inclusive(self) -> None:
        self.assertEqual(len(self._draw(10, 15, [ZOMBIE])), 1)

    def test_release_without_target_is_ignored(self) -> None:
        self.assertEqual(self._draw(0, 40, []), [])
        self.assertFalse(self.detector.drawing)


class CrossbowDetectorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = CooldownStore(60.0, clock=lambda: 0.0)
        self.detector = CrossbowDetector(self.store)
        self.crossbow = ItemDescriptor("minecraft:crossbow")

    def _click(self, entities, item=None):
        item = item or self.crossbow
        key = self.detector.update(True, item, EYE, LOOK, entities)
        self.detector.update(False, item, EYE, LOOK, entities)
        return key

    def test_two_click_primer(self) -> None:
        self.assertIsNone(self._click([ZOMBIE]))
        self.assertTrue(self.detector.primed)

        key = self._click([ZOMBIE])
        self.assertEqual(key, SkillKey(Skill.RANGED_COMBAT, Tier.WOOD, "crossbow"))
        self.assertFalse(self.detector.primed)

    def test_firing_at_nothing_clears_primed(self) -> None:
        self._click([])
        self.assertTrue(self.detector.primed)
        self.assertIsNone(self._click([]))
        self.assertFalse(self.detector.primed)
        self.assertEqual(len(self.store), 0)

    def test_held_use_does_not_fire(self) -> None:
        self.detector.update(True, self.crossbow, EYE, LOOK, [ZOMBIE])
        for _ in range(20):
            self.assertIsNone(self.detector.update(True, self.crossbow, EYE, LOOK, [ZOMBIE]))
        self.assertTrue(self.detector.primed)

    def test_switching_weapon_abandons_charge(self) -> None:
        self._click([ZOMBIE])
        self.detector.update(False, ItemDescriptor("minecraft:iron_sword"), EYE, LOOK, [ZOMBIE])
        self.assertFalse(self.detector.primed)
        self.assertIsNone(self._click([ZOMBIE]))
        self.assertTrue(self.detector.primed)


class RangedDetectorTests(unittest.TestCase):
    def test_bow_and_crossbow_cool_down_independently(self) -> None:
        store = CooldownStore(60.0, clock=lambda: 0.0)
        detector = RangedDetector(store, AppConfig())
        bow = ItemDescriptor("minecraft:bow")
        crossbow = ItemDescriptor("minecraft:crossbow")

        for tick in range(0, 10):
            detector.update(
                TickObservation(tick=tick, main_hand=bow, active_item=bow, nearby_entities=[ZOMBIE])
            )
        fired = detector.update(TickObservation(tick=10, main_hand=bow, nearby_entities=[ZOMBIE]))
        self.assertEqual(fired, [SkillKey(Skill.RANGED_COMBAT, Tier.WOOD, "bow")])

        for tick, pressed in ((11, True), (12, False), (13, True)):
            fired = detector.update(
                TickObservation(
                    tick=tick,
                    use_pressed=pressed,
                    main_hand=crossbow,
                    nearby_entities=[ZOMBIE],
                )
            )
        self.assertEqual(fired, [SkillKey(Skill.RANGED_COMBAT, Tier.WOOD, "crossbow")])
        self.assertEqual(len(store), 2)


if __name__ == "__main__":
    unittest.main()
