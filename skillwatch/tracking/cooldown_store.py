"""Cooldown store: one timed cooldown per SkillKey.

Detectors never touch entries directly; they submit keys through
start_or_refresh. A running cooldown is never extended or restarted by
repeated triggers, but the display icon always follows the latest trigger.
Entries are kept for the process lifetime; readers filter by deadline.
"""

from __future__ import annotations

import copy
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from skillwatch.models import CooldownEntry, SkillKey

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 60.0


@dataclass(frozen=True)
class ActiveCooldown:
    """Read-only view of a running cooldown for the HUD."""
    key: SkillKey
    remaining_seconds: int
    icon: Any = None


class CooldownStore:
    """Keyed cooldown state machine with an injected clock (seconds)."""

    def __init__(
        self,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._cooldown_seconds = float(cooldown_seconds)
        self._clock = clock
        self._entries: dict[SkillKey, CooldownEntry] = {}

    @property
    def cooldown_seconds(self) -> float:
        return self._cooldown_seconds

    def now(self) -> float:
        return self._clock()

    def start_or_refresh(self, key: SkillKey, icon_source: Any = None) -> bool:
        """Start a cooldown for key unless one is already running.

        Returns True when a new deadline was set. The icon snapshot is
        overwritten either way.
        """
        now = self._clock()
        entry = self._entries.get(key)
        started = False
        if entry is None:
            entry = CooldownEntry(ready_at=now + self._cooldown_seconds)
            self._entries[key] = entry
            started = True
        elif entry.ready_at <= now:
            entry.ready_at = now + self._cooldown_seconds
            entry.notified = False
            started = True
        # Live host items may be mutated or destroyed later
        entry.icon = copy.deepcopy(icon_source)
        if started:
            logger.info(
                "Cooldown started: %s/%s%s (%.0fs)",
                key.skill.value,
                key.tier.value,
                f"/{key.tool_group}" if key.tool_group else "",
                self._cooldown_seconds,
            )
        else:
            logger.debug("Cooldown already running for %s; icon refreshed", key)
        return started

    def collect_newly_ready(self, now: Optional[float] = None) -> list[SkillKey]:
        """Mark expired, unnotified entries as notified and return their keys.

        This is the one-shot active -> ready transition; a key is returned at
        most once per cooldown.
        """
        if now is None:
            now = self._clock()
        ready: list[SkillKey] = []
        for key, entry in self._entries.items():
            if entry.ready_at <= now and not entry.notified:
                entry.notified = True
                ready.append(key)
        return ready

    def entry(self, key: SkillKey) -> Optional[CooldownEntry]:
        """Return a copy of the entry for key, or None."""
        entry = self._entries.get(key)
        return copy.copy(entry) if entry is not None else None

    def icon_for(self, key: SkillKey) -> Any:
        entry = self._entries.get(key)
        return entry.icon if entry is not None else None

    def is_active(self, key: SkillKey, now: Optional[float] = None) -> bool:
        if now is None:
            now = self._clock()
        entry = self._entries.get(key)
        return entry is not None and entry.ready_at > now

    def active_cooldowns(self, now: Optional[float] = None) -> list[ActiveCooldown]:
        """Snapshot of running cooldowns in first-trigger order."""
        if now is None:
            now = self._clock()
        result: list[ActiveCooldown] = []
        for key, entry in list(self._entries.items()):
            remaining = entry.ready_at - now
            if remaining <= 0:
                continue
            result.append(
                ActiveCooldown(
                    key=key,
                    remaining_seconds=math.ceil(remaining),
                    icon=entry.icon,
                )
            )
        return result

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
