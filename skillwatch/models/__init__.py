from skillwatch.models.config import AppConfig
from skillwatch.models.skill import (
    BlockDescriptor,
    CooldownEntry,
    EntityDescriptor,
    ItemDescriptor,
    Skill,
    SkillKey,
    TickObservation,
    Tier,
    Toast,
    Vec3,
)

__all__ = [
    "AppConfig",
    "BlockDescriptor",
    "CooldownEntry",
    "EntityDescriptor",
    "ItemDescriptor",
    "Skill",
    "SkillKey",
    "TickObservation",
    "Tier",
    "Toast",
    "Vec3",
]
