"""Identifier classifier: maps item and block identifiers to tiers and skills.

Tier resolution is ordered substring matching on the lower-cased identifier.
Capability checks ("is this axe-like?") use host-supplied tags first and fall
back to identifier substrings when the host supplies none.
"""

from __future__ import annotations

from typing import Optional

from skillwatch.models import BlockDescriptor, ItemDescriptor, Skill, Tier

# Order is the tie-break contract: first matching predicate wins.
_TIER_MARKERS: tuple[tuple[tuple[str, ...], Tier], ...] = (
    (("wooden",), Tier.WOOD),
    (("stone",), Tier.STONE),
    (("golden", "copper"), Tier.COPPER),
    (("iron",), Tier.IRON),
    (("diamond",), Tier.DIAMOND),
    (("leather",), Tier.LEATHER),
    (("chainmail",), Tier.CHAINMAIL),
)

_ARMOR_PIECES = ("helmet", "chestplate", "leggings", "boots")
_FISH_NAMES = frozenset({"cod", "salmon", "tropical_fish", "pufferfish"})
# Nether "stems" are logs; melon and pumpkin stems are plants
_LOG_SUFFIXES = ("_log", "_wood", "_hyphae", "crimson_stem", "warped_stem")
_PICKAXE_MARKERS = (
    "stone",
    "_ore",
    "deepslate",
    "andesite",
    "diorite",
    "granite",
    "netherrack",
    "obsidian",
    "basalt",
    "terracotta",
    "bricks",
)
_SHOVEL_NAMES = frozenset(
    {
        "dirt",
        "coarse_dirt",
        "rooted_dirt",
        "grass_block",
        "dirt_path",
        "farmland",
        "podzol",
        "mycelium",
        "sand",
        "red_sand",
        "gravel",
        "clay",
        "mud",
        "snow",
        "snow_block",
        "soul_sand",
        "soul_soil",
    }
)
_CROP_NAMES = frozenset(
    {
        "wheat",
        "carrots",
        "potatoes",
        "beetroots",
        "nether_wart",
        "cocoa",
        "sweet_berry_bush",
    }
)


def _path(identifier: str) -> str:
    """'minecraft:Wooden_Axe' -> 'wooden_axe'."""
    text = str(identifier or "").strip().lower()
    return text.rsplit(":", 1)[-1]


def _has_tag(tags: frozenset[str], *names: str) -> bool:
    if not tags:
        return False
    normalized = {_path(t) for t in tags}
    return any(n in normalized for n in names)


def tier_of(identifier: str) -> Optional[Tier]:
    """Return the equipment tier named by an item identifier, or None."""
    text = str(identifier or "").lower()
    for markers, tier in _TIER_MARKERS:
        if any(m in text for m in markers):
            return tier
    # Ranged weapons carry no material prefix
    if "bow" in text or "crossbow" in text:
        return Tier.WOOD
    return None


# --- Item capabilities ---


def is_sword(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    name = _path(item.identifier)
    return _has_tag(item.tags, "sword", "swords") or name == "sword" or name.endswith("_sword")


def is_axe(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    name = _path(item.identifier)
    return _has_tag(item.tags, "axe", "axes") or name == "axe" or name.endswith("_axe")


def is_pickaxe(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    return _has_tag(item.tags, "pickaxe", "pickaxes") or "pickaxe" in _path(item.identifier)


def is_shovel(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    return _has_tag(item.tags, "shovel", "shovels") or "shovel" in _path(item.identifier)


def is_hoe(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    name = _path(item.identifier)
    return _has_tag(item.tags, "hoe", "hoes") or name == "hoe" or name.endswith("_hoe")


def is_armor(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    name = _path(item.identifier)
    return _has_tag(item.tags, "armor", "armour") or any(p in name for p in _ARMOR_PIECES)


def is_crossbow(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    return _has_tag(item.tags, "crossbow") or "crossbow" in _path(item.identifier)


def is_bow(item: Optional[ItemDescriptor]) -> bool:
    if item is None or is_crossbow(item):
        return False
    return _has_tag(item.tags, "bow") or _path(item.identifier).endswith("bow")


def is_fishing_rod(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    return _has_tag(item.tags, "fishing_rod") or "fishing_rod" in _path(item.identifier)


def is_fish(item: Optional[ItemDescriptor]) -> bool:
    if item is None:
        return False
    return _has_tag(item.tags, "fish", "fishes") or _path(item.identifier) in _FISH_NAMES


def is_weapon(item: Optional[ItemDescriptor]) -> bool:
    return is_sword(item) or is_bow(item) or is_crossbow(item)


def is_tool(item: Optional[ItemDescriptor]) -> bool:
    return is_pickaxe(item) or is_axe(item) or is_shovel(item) or is_hoe(item)


# --- Block capabilities ---


def is_log(block: Optional[BlockDescriptor]) -> bool:
    if block is None:
        return False
    name = _path(block.identifier)
    return _has_tag(block.tags, "log", "logs") or name.endswith(_LOG_SUFFIXES)


def is_pickaxe_mineable(block: Optional[BlockDescriptor]) -> bool:
    if block is None:
        return False
    name = _path(block.identifier)
    return _has_tag(block.tags, "mineable/pickaxe", "pickaxe") or any(m in name for m in _PICKAXE_MARKERS)


def is_shovel_mineable(block: Optional[BlockDescriptor]) -> bool:
    if block is None:
        return False
    return _has_tag(block.tags, "mineable/shovel", "shovel") or _path(block.identifier) in _SHOVEL_NAMES


def is_crop(block: Optional[BlockDescriptor]) -> bool:
    if block is None:
        return False
    return _has_tag(block.tags, "crop", "crops") or _path(block.identifier) in _CROP_NAMES


def tool_group_of(item: Optional[ItemDescriptor], block: Optional[BlockDescriptor]) -> Optional[Skill]:
    """Return the gathering skill for breaking block with item, or None.

    An item whose tier cannot be resolved classifies as nothing.
    """
    if item is None or block is None or tier_of(item.identifier) is None:
        return None
    if is_axe(item) and is_log(block):
        return Skill.FORESTRY
    if is_pickaxe(item) and is_pickaxe_mineable(block):
        return Skill.MINING
    if is_shovel(item) and is_shovel_mineable(block):
        return Skill.DIGGING
    if is_hoe(item) and is_crop(block):
        return Skill.HUSBANDRY
    return None


def smithing_skill_of(item: Optional[ItemDescriptor]) -> Optional[Skill]:
    """Return the smithing skill practiced by crafting item, or None."""
    if is_armor(item):
        return Skill.ARMOURING
    if is_weapon(item):
        return Skill.WEAPONSMITHING
    if is_tool(item):
        return Skill.TOOLSMITHING
    return None
