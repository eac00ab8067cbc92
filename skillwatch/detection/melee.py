from __future__ import annotations

import logging
from typing import Optional

from skillwatch.detection.classifier import is_axe, is_sword, tier_of
from skillwatch.models import EntityDescriptor, ItemDescriptor, Skill, SkillKey
from skillwatch.tracking.cooldown_store import CooldownStore

logger = logging.getLogger(__name__)


class MeleeDetector:
    """Fires on the attack input's rising edge only; a held key triggers once."""

    def __init__(self, store: CooldownStore):
        self._store = store
        self._was_pressed = False

    @property
    def was_pressed(self) -> bool:
        return self._was_pressed

    def update(
        self,
        attack_pressed: bool,
        held_item: Optional[ItemDescriptor],
        target: Optional[EntityDescriptor],
    ) -> Optional[SkillKey]:
        pressed = bool(attack_pressed)
        rising = pressed and not self._was_pressed
        self._was_pressed = pressed
        if not rising:
            return None
        if held_item is None or not (is_sword(held_item) or is_axe(held_item)):
            return None
        if target is None or not (target.is_living and target.is_alive):
            return None
        tier = tier_of(held_item.identifier)
        if tier is None:
            return None
        key = SkillKey(Skill.MELEE_COMBAT, tier)
        logger.debug("Melee hit on entity %s with %s", target.entity_id, held_item.identifier)
        self._store.start_or_refresh(key, held_item)
        return key
