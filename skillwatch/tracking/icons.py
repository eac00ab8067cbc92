"""Fallback HUD icons for keys that have no recorded triggering item."""

from __future__ import annotations

from skillwatch.models import ItemDescriptor, Skill, SkillKey, Tier

CLOCK_ICON = ItemDescriptor("minecraft:clock")

# Vanilla material prefix per tier; copper is drawn with the golden items
_TOOL_PREFIX = {
    Tier.STONE: "stone",
    Tier.COPPER: "golden",
    Tier.IRON: "iron",
    Tier.DIAMOND: "diamond",
}

_TIERED_TOOL = {
    Skill.FORESTRY: "axe",
    Skill.MINING: "pickaxe",
    Skill.DIGGING: "shovel",
    Skill.HUSBANDRY: "hoe",
    Skill.MELEE_COMBAT: "sword",
}

_FIXED_ICON = {
    Skill.TOOLSMITHING: "minecraft:iron_pickaxe",
    Skill.WEAPONSMITHING: "minecraft:iron_sword",
    Skill.ARMOURING: "minecraft:iron_chestplate",
    Skill.FISHING: "minecraft:fishing_rod",
}


def default_icon_for(key: SkillKey) -> ItemDescriptor:
    tool = _TIERED_TOOL.get(key.skill)
    if tool is not None:
        prefix = _TOOL_PREFIX.get(key.tier, "wooden")
        return ItemDescriptor(f"minecraft:{prefix}_{tool}")
    if key.skill is Skill.RANGED_COMBAT:
        return ItemDescriptor(f"minecraft:{key.tool_group or 'bow'}")
    fixed = _FIXED_ICON.get(key.skill)
    if fixed is not None:
        return ItemDescriptor(fixed)
    return CLOCK_ICON
