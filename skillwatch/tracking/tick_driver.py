"""Tick driver: the per-frame sequencer.

Each tick runs, in this fixed order:
1. expire and notify: stale toasts are dropped, then every cooldown that has
   passed and was not yet announced plays the ready cue, queues a toast and
   is marked notified
2. melee detector
3. ranged detectors (bow, crossbow)
4. inventory-gain detector

Block breaks arrive as events between ticks and are classified immediately.
The HUD reads a snapshot after the tick and never mutates tracker state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from skillwatch.detection.block_break import BlockBreakDetector
from skillwatch.detection.inventory import InventoryGainDetector
from skillwatch.detection.melee import MeleeDetector
from skillwatch.detection.ranged import RangedDetector
from skillwatch.models import (
    AppConfig,
    BlockDescriptor,
    ItemDescriptor,
    SkillKey,
    TickObservation,
)
from skillwatch.tracking.cooldown_store import CooldownStore
from skillwatch.tracking.hud import HudSnapshot, build_hud_snapshot
from skillwatch.tracking.notifications import NotificationQueue

logger = logging.getLogger(__name__)

ReadyCue = Callable[[SkillKey], None]


@dataclass
class TickResult:
    """What one tick produced: keys that became ready and keys detected."""
    ready: list[SkillKey] = field(default_factory=list)
    detected: list[SkillKey] = field(default_factory=list)


class TickDriver:
    def __init__(
        self,
        store: CooldownStore,
        notifications: NotificationQueue,
        config: Optional[AppConfig] = None,
        ready_cue: Optional[ReadyCue] = None,
    ):
        config = config or AppConfig()
        self._store = store
        self._notifications = notifications
        self._ready_cue = ready_cue
        self.block_break = BlockBreakDetector(store)
        self.melee = MeleeDetector(store)
        self.ranged = RangedDetector(store, config)
        self.inventory = InventoryGainDetector(store, config.crafting_screen_markers)

    @property
    def store(self) -> CooldownStore:
        return self._store

    @property
    def notifications(self) -> NotificationQueue:
        return self._notifications

    def set_ready_cue(self, ready_cue: Optional[ReadyCue]) -> None:
        self._ready_cue = ready_cue

    def _play_ready_cue(self, key: SkillKey) -> None:
        if self._ready_cue is None:
            return
        try:
            self._ready_cue(key)
        except Exception as e:
            logger.warning("Ready cue failed for %s: %s", key, e)

    def expire_and_notify(self) -> list[SkillKey]:
        self._notifications.prune()
        ready = self._store.collect_newly_ready()
        for key in ready:
            self._play_ready_cue(key)
            self._notifications.push(key)
            logger.info("Skill ready: %s/%s", key.skill.value, key.tier.value)
        return ready

    def tick(self, observation: TickObservation) -> TickResult:
        result = TickResult(ready=self.expire_and_notify())

        melee_key = self.melee.update(
            observation.attack_pressed,
            observation.main_hand,
            observation.aim_target,
        )
        if melee_key is not None:
            result.detected.append(melee_key)

        result.detected.extend(self.ranged.update(observation))

        inventory_key = self.inventory.update(
            observation.read_inventory,
            observation.open_screen,
            observation.main_hand,
            observation.off_hand,
        )
        if inventory_key is not None:
            result.detected.append(inventory_key)
        return result

    def on_block_broken(
        self,
        held_item: Optional[ItemDescriptor],
        block: Optional[BlockDescriptor],
    ) -> Optional[SkillKey]:
        return self.block_break.on_block_broken(held_item, block)

    def hud_snapshot(self, now: Optional[float] = None) -> HudSnapshot:
        return build_hud_snapshot(self._store, self._notifications, now)
