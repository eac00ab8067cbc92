"""Ready notifications ("toasts") with self-expiry."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from skillwatch.models import SkillKey, Toast

logger = logging.getLogger(__name__)

DEFAULT_TOAST_SECONDS = 2.5


@dataclass(frozen=True)
class LiveToast:
    key: SkillKey
    age_seconds: float


class NotificationQueue:
    """Append-only toast list; insertion order is display (stacking) order."""

    def __init__(
        self,
        display_seconds: float = DEFAULT_TOAST_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._display_seconds = float(display_seconds)
        self._clock = clock
        self._toasts: list[Toast] = []

    @property
    def display_seconds(self) -> float:
        return self._display_seconds

    def push(self, key: SkillKey) -> Toast:
        toast = Toast(key=key, created_at=self._clock())
        self._toasts.append(toast)
        logger.debug("Toast queued for %s", key)
        return toast

    def prune(self, now: Optional[float] = None) -> int:
        """Drop toasts older than the display duration. Returns how many were dropped."""
        if now is None:
            now = self._clock()
        before = len(self._toasts)
        self._toasts = [t for t in self._toasts if now - t.created_at <= self._display_seconds]
        return before - len(self._toasts)

    def live_toasts(self, now: Optional[float] = None) -> list[LiveToast]:
        if now is None:
            now = self._clock()
        self.prune(now)
        return [LiveToast(key=t.key, age_seconds=now - t.created_at) for t in self._toasts]

    def __len__(self) -> int:
        return len(self._toasts)

    def __iter__(self) -> Iterator[Toast]:
        return iter(list(self._toasts))
