from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence

Vec3 = tuple[float, float, float]


class Skill(Enum):
    MELEE_COMBAT = "melee_combat"
    DIGGING = "digging"
    FORESTRY = "forestry"
    HUSBANDRY = "husbandry"
    MINING = "mining"
    RANGED_COMBAT = "ranged_combat"
    TOOLSMITHING = "toolsmithing"
    WEAPONSMITHING = "weaponsmithing"
    ARMOURING = "armouring"
    FISHING = "fishing"

    @property
    def is_smithing(self) -> bool:
        return self in _SMITHING_SKILLS

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ")


_SMITHING_SKILLS = frozenset({Skill.TOOLSMITHING, Skill.WEAPONSMITHING, Skill.ARMOURING})


class Tier(Enum):
    WOOD = "wood"
    STONE = "stone"
    COPPER = "copper"  # re-skin of the vanilla golden tier
    IRON = "iron"
    DIAMOND = "diamond"
    LEATHER = "leather"
    CHAINMAIL = "chainmail"


_SKILL_ORDER = {s: i for i, s in enumerate(Skill)}
_TIER_ORDER = {t: i for i, t in enumerate(Tier)}


@dataclass(frozen=True)
class SkillKey:
    """Identifies one independent cooldown.

    tool_group separates input modalities that share (skill, tier), e.g. "bow"
    and "crossbow". Smithing skills always carry Tier.WOOD: there is one
    cooldown per smithing skill whatever the crafted item's tier.
    """
    skill: Skill
    tier: Tier
    tool_group: Optional[str] = None

    def __post_init__(self) -> None:
        if self.skill.is_smithing and self.tier is not Tier.WOOD:
            object.__setattr__(self, "tier", Tier.WOOD)

    def sort_key(self) -> tuple[int, int, str]:
        return (_SKILL_ORDER[self.skill], _TIER_ORDER[self.tier], self.tool_group or "")

    def __lt__(self, other: SkillKey) -> bool:
        if not isinstance(other, SkillKey):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass
class CooldownEntry:
    """Per-key cooldown state. Owned exclusively by the cooldown store."""
    ready_at: float
    notified: bool = False
    icon: Any = None  # immutable copy of the triggering item, display only


@dataclass(frozen=True)
class Toast:
    key: SkillKey
    created_at: float


@dataclass(frozen=True)
class ItemDescriptor:
    """Minimal description of an item stack supplied by the host.

    tags are host-provided capability flags ("axe", "sword", "fish", ...).
    When a host provides none, the classifier falls back to the identifier.
    """
    identifier: str
    count: int = 1
    tags: frozenset[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not self.identifier or self.count <= 0


@dataclass(frozen=True)
class BlockDescriptor:
    identifier: str
    tags: frozenset[str] = frozenset()


@dataclass(frozen=True)
class EntityDescriptor:
    entity_id: int
    center: Vec3
    is_living: bool = True
    is_alive: bool = True


def _empty_inventory() -> Sequence[Optional[ItemDescriptor]]:
    return ()


@dataclass
class TickObservation:
    """One frame of host state, sampled by the tick driver."""
    tick: int = 0
    attack_pressed: bool = False
    use_pressed: bool = False
    main_hand: Optional[ItemDescriptor] = None
    off_hand: Optional[ItemDescriptor] = None
    # Item currently being used (bow being drawn, food being eaten), if any
    active_item: Optional[ItemDescriptor] = None
    # Entity under the crosshair, None when aiming at terrain or nothing
    aim_target: Optional[EntityDescriptor] = None
    eye_position: Vec3 = (0.0, 0.0, 0.0)
    look_direction: Vec3 = (0.0, 0.0, 1.0)
    nearby_entities: Sequence[EntityDescriptor] = field(default_factory=tuple)
    # Host screen type (string or host object); None when no screen is open
    open_screen: Any = None
    # Returns the inventory slot list; may raise on inconsistent host state
    read_inventory: Callable[[], Sequence[Optional[ItemDescriptor]]] = _empty_inventory
