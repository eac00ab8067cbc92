from skillwatch.detection.aim_cone import select_target
from skillwatch.detection.block_break import BlockBreakDetector
from skillwatch.detection.classifier import tier_of, tool_group_of
from skillwatch.detection.inventory import InventoryGainDetector
from skillwatch.detection.melee import MeleeDetector
from skillwatch.detection.ranged import BowDetector, CrossbowDetector, RangedDetector

__all__ = [
    "BlockBreakDetector",
    "BowDetector",
    "CrossbowDetector",
    "InventoryGainDetector",
    "MeleeDetector",
    "RangedDetector",
    "select_target",
    "tier_of",
    "tool_group_of",
]
