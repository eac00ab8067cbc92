from __future__ import annotations

import logging
from typing import Optional

from skillwatch.detection.classifier import tier_of, tool_group_of
from skillwatch.models import BlockDescriptor, ItemDescriptor, SkillKey
from skillwatch.tracking.cooldown_store import CooldownStore

logger = logging.getLogger(__name__)


class BlockBreakDetector:
    """Classifies each block the local player destroys; no buffering."""

    def __init__(self, store: CooldownStore):
        self._store = store

    def on_block_broken(
        self,
        held_item: Optional[ItemDescriptor],
        block: Optional[BlockDescriptor],
    ) -> Optional[SkillKey]:
        skill = tool_group_of(held_item, block)
        if skill is None:
            return None
        tier = tier_of(held_item.identifier)
        if tier is None:
            return None
        key = SkillKey(skill, tier)
        logger.debug("Block break %s with %s -> %s", block.identifier, held_item.identifier, key)
        self._store.start_or_refresh(key, held_item)
        return key
