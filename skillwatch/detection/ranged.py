"""Ranged detector: bow draw/release timing and the crossbow two-click primer.

Both sub-detectors resolve their target with the aim-cone test instead of the
crosshair target, since projectiles are usually aimed above the entity.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from skillwatch.detection.aim_cone import select_target
from skillwatch.detection.classifier import is_bow, is_crossbow, tier_of
from skillwatch.models import (
    AppConfig,
    EntityDescriptor,
    ItemDescriptor,
    Skill,
    SkillKey,
    TickObservation,
    Tier,
    Vec3,
)
from skillwatch.tracking.cooldown_store import CooldownStore

logger = logging.getLogger(__name__)

BOW_GROUP = "bow"
CROSSBOW_GROUP = "crossbow"


class BowDetector:
    """Counts a shot when a bow draw of at least min_draw_ticks is released on target."""

    def __init__(
        self,
        store: CooldownStore,
        min_draw_ticks: int = 5,
        max_distance: float = 48.0,
        max_angle_deg: float = 12.0,
    ):
        self._store = store
        self._min_draw_ticks = min_draw_ticks
        self._max_distance = max_distance
        self._max_angle_deg = max_angle_deg
        self._drawing = False
        self._draw_start_tick = 0
        self._drawn_item: Optional[ItemDescriptor] = None

    @property
    def drawing(self) -> bool:
        return self._drawing

    def update(
        self,
        drawing: bool,
        tick: int,
        bow: Optional[ItemDescriptor],
        eye: Vec3,
        look: Vec3,
        entities: Iterable[EntityDescriptor],
    ) -> Optional[SkillKey]:
        if drawing:
            if not self._drawing:
                self._drawing = True
                self._draw_start_tick = tick
            if bow is not None:
                self._drawn_item = bow
            return None
        if not self._drawing:
            return None

        # Release
        self._drawing = False
        item = self._drawn_item or bow
        self._drawn_item = None
        elapsed = tick - self._draw_start_tick
        if elapsed < self._min_draw_ticks:
            logger.debug("Bow released after %s ticks; ignored", elapsed)
            return None
        target = select_target(eye, look, entities, self._max_distance, self._max_angle_deg)
        if target is None:
            logger.debug("Bow released after %s ticks with no target in cone", elapsed)
            return None
        if item is None:
            return None
        tier = tier_of(item.identifier)
        if tier is None:
            return None
        key = SkillKey(Skill.RANGED_COMBAT, tier, BOW_GROUP)
        self._store.start_or_refresh(key, item)
        return key


class CrossbowDetector:
    """Two-click primer: the first use click charges, the second fires.

    Re-priming right after a shot can occasionally be counted as part of the
    next charge; this is accepted.
    """

    def __init__(
        self,
        store: CooldownStore,
        max_distance: float = 48.0,
        max_angle_deg: float = 12.0,
    ):
        self._store = store
        self._max_distance = max_distance
        self._max_angle_deg = max_angle_deg
        self._use_was_pressed = False
        self._primed = False

    @property
    def primed(self) -> bool:
        return self._primed

    def update(
        self,
        use_pressed: bool,
        crossbow: Optional[ItemDescriptor],
        eye: Vec3,
        look: Vec3,
        entities: Iterable[EntityDescriptor],
    ) -> Optional[SkillKey]:
        pressed = bool(use_pressed)
        rising = pressed and not self._use_was_pressed
        self._use_was_pressed = pressed

        if crossbow is None or not is_crossbow(crossbow):
            # Switching weapons abandons any charge in progress
            self._primed = False
            return None
        if not rising:
            return None
        if not self._primed:
            self._primed = True
            logger.debug("Crossbow primed")
            return None

        self._primed = False
        target = select_target(eye, look, entities, self._max_distance, self._max_angle_deg)
        if target is None:
            logger.debug("Crossbow fired with no target in cone")
            return None
        tier = tier_of(crossbow.identifier) or Tier.WOOD
        key = SkillKey(Skill.RANGED_COMBAT, tier, CROSSBOW_GROUP)
        self._store.start_or_refresh(key, crossbow)
        return key


def _held(observation: TickObservation, predicate) -> Optional[ItemDescriptor]:
    for item in (observation.main_hand, observation.off_hand):
        if item is not None and predicate(item):
            return item
    return None


class RangedDetector:
    """Feeds both ranged sub-detectors from one tick observation."""

    def __init__(self, store: CooldownStore, config: Optional[AppConfig] = None):
        config = config or AppConfig()
        self.bow = BowDetector(
            store,
            min_draw_ticks=config.min_bow_draw_ticks,
            max_distance=config.bow_max_distance,
            max_angle_deg=config.bow_max_angle_deg,
        )
        self.crossbow = CrossbowDetector(
            store,
            max_distance=config.crossbow_max_distance,
            max_angle_deg=config.crossbow_max_angle_deg,
        )

    def update(self, observation: TickObservation) -> list[SkillKey]:
        fired: list[SkillKey] = []
        active = observation.active_item
        drawing = active is not None and is_bow(active)
        bow_key = self.bow.update(
            drawing,
            observation.tick,
            active if drawing else _held(observation, is_bow),
            observation.eye_position,
            observation.look_direction,
            observation.nearby_entities,
        )
        if bow_key is not None:
            fired.append(bow_key)
        crossbow_key = self.crossbow.update(
            observation.use_pressed,
            _held(observation, is_crossbow),
            observation.eye_position,
            observation.look_direction,
            observation.nearby_entities,
        )
        if crossbow_key is not None:
            fired.append(crossbow_key)
        return fired
