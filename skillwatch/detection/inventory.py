"""Inventory-gain detector: smithing and fishing from inventory deltas.

Keeps a per-slot (identifier, count) snapshot from the previous tick. The
first slot that gained items is classified: with a crafting surface open the
gain is a smithing product, otherwise it may be a fish caught with a rod.
Only one gain is processed per tick so a burst (e.g. a furnace dump) cannot
produce several classifications at once.

Host reads are fallible: an unreadable inventory or any malformed slot resets
the snapshot, and a malformed screen type counts as "no crafting surface".
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Sequence

from skillwatch.detection.classifier import is_fish, is_fishing_rod, smithing_skill_of
from skillwatch.models import ItemDescriptor, Skill, SkillKey, Tier
from skillwatch.tracking.cooldown_store import CooldownStore

logger = logging.getLogger(__name__)

# The 2x2 player inventory grid cannot make tools, weapons or armor
DEFAULT_CRAFTING_MARKERS = ("crafting", "smithing")

SlotState = tuple[str, int]
InventoryReader = Callable[[], Sequence[Optional[ItemDescriptor]]]


def _normalize_slot(item: Any) -> Optional[ItemDescriptor]:
    """Copy one host slot into an ItemDescriptor; None for an empty slot.

    Raises on malformed slots (missing identifier, non-numeric count).
    """
    if item is None:
        return None
    identifier = str(item.identifier or "")
    count = int(item.count)
    if not identifier or count <= 0:
        return None
    tags = frozenset(str(t) for t in (getattr(item, "tags", None) or ()))
    return ItemDescriptor(identifier, count, tags)


def read_inventory_snapshot(
    reader: Optional[InventoryReader],
) -> Optional[tuple[Optional[ItemDescriptor], ...]]:
    """Read and normalize all inventory slots, or None if any part of the read failed."""
    if reader is None:
        return None
    try:
        return tuple(_normalize_slot(item) for item in reader())
    except Exception as e:
        logger.debug("Inventory read failed: %s", e)
        return None


def is_crafting_surface(screen: Any, markers: Iterable[str] = DEFAULT_CRAFTING_MARKERS) -> bool:
    """True if the host screen type names a crafting-like surface."""
    if screen is None:
        return False
    try:
        text = str(screen).strip().lower()
    except Exception as e:
        logger.debug("Unreadable screen type %r: %s", type(screen), e)
        return False
    return any(m and m in text for m in markers)


def _slot_state(item: Optional[ItemDescriptor]) -> SlotState:
    if item is None or item.is_empty:
        return ("", 0)
    return (item.identifier, item.count)


def _first_gain(previous: Sequence[SlotState], current: Sequence[SlotState]) -> Optional[int]:
    for index, (before, after) in enumerate(zip(previous, current)):
        before_count = before[1] if before[0] == after[0] else 0
        if after[1] > before_count:
            return index
    return None


class InventoryGainDetector:
    def __init__(
        self,
        store: CooldownStore,
        crafting_markers: Iterable[str] = DEFAULT_CRAFTING_MARKERS,
    ):
        self._store = store
        self._crafting_markers = tuple(str(m).lower() for m in crafting_markers)
        self._snapshot: Optional[tuple[SlotState, ...]] = None

    @property
    def snapshot(self) -> Optional[tuple[SlotState, ...]]:
        return self._snapshot

    def reset(self) -> None:
        self._snapshot = None

    def update(
        self,
        read_inventory: Optional[InventoryReader],
        open_screen: Any = None,
        main_hand: Optional[ItemDescriptor] = None,
        off_hand: Optional[ItemDescriptor] = None,
    ) -> Optional[SkillKey]:
        items = read_inventory_snapshot(read_inventory)
        if items is None:
            self.reset()
            return None

        current = tuple(_slot_state(item) for item in items)
        previous = self._snapshot
        self._snapshot = current
        # First observation, or the inventory was resized: nothing to compare
        if previous is None or len(previous) != len(current):
            return None

        index = _first_gain(previous, current)
        if index is None:
            return None
        gained = items[index]

        if is_crafting_surface(open_screen, self._crafting_markers):
            skill = smithing_skill_of(gained)
            if skill is None:
                return None
            key = SkillKey(skill, Tier.WOOD)
            logger.debug("Crafted %s in slot %s -> %s", gained.identifier, index, key)
            self._store.start_or_refresh(key, gained)
            return key

        rod = next((h for h in (main_hand, off_hand) if is_fishing_rod(h)), None)
        if rod is None or not is_fish(gained):
            return None
        key = SkillKey(Skill.FISHING, Tier.WOOD)
        logger.debug("Caught %s in slot %s", gained.identifier, index)
        self._store.start_or_refresh(key, rod)
        return key
