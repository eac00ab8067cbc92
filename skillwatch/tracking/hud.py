"""HUD view model: read-only rows built from the store and the toast queue.

Renderers only ever see these copies, so entries expiring between frames
cannot disturb a paint in progress.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from skillwatch.models import SkillKey
from skillwatch.tracking.cooldown_store import CooldownStore
from skillwatch.tracking.icons import default_icon_for
from skillwatch.tracking.notifications import NotificationQueue


@dataclass(frozen=True)
class CooldownRow:
    key: SkillKey
    icon: Any
    remaining_seconds: int
    is_smithing: bool

    @property
    def text(self) -> str:
        return f"{self.remaining_seconds}s"


@dataclass(frozen=True)
class ToastRow:
    key: SkillKey
    icon: Any
    age_seconds: float
    is_smithing: bool

    @property
    def title(self) -> str:
        return f"{self.key.skill.display_name} READY"

    @property
    def subtitle(self) -> str:
        return f"({self.key.tier.value})"


@dataclass(frozen=True)
class HudSnapshot:
    timestamp: float = 0.0
    cooldowns: tuple[CooldownRow, ...] = field(default_factory=tuple)
    toasts: tuple[ToastRow, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.cooldowns and not self.toasts


def build_hud_snapshot(
    store: CooldownStore,
    notifications: NotificationQueue,
    now: Optional[float] = None,
) -> HudSnapshot:
    if now is None:
        now = store.now()
    cooldowns = tuple(
        CooldownRow(
            key=c.key,
            icon=c.icon if c.icon is not None else default_icon_for(c.key),
            remaining_seconds=c.remaining_seconds,
            is_smithing=c.key.skill.is_smithing,
        )
        for c in store.active_cooldowns(now)
    )
    toasts = []
    for toast in notifications.live_toasts(now):
        icon = store.icon_for(toast.key)
        toasts.append(
            ToastRow(
                key=toast.key,
                icon=icon if icon is not None else default_icon_for(toast.key),
                age_seconds=toast.age_seconds,
                is_smithing=toast.key.skill.is_smithing,
            )
        )
    return HudSnapshot(timestamp=now, cooldowns=cooldowns, toasts=tuple(toasts))
