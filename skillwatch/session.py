"""Skill session: wires config, cooldown store, toasts, detectors and HUD.

The host calls tick() once per client tick, on_block_broken() for each block
the local player destroys, and paints from hud_snapshot() (or attaches a
HudOverlay, which is refreshed after every tick and block break).
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from skillwatch.models import AppConfig, BlockDescriptor, ItemDescriptor, SkillKey, TickObservation
from skillwatch.tracking.cooldown_store import CooldownStore
from skillwatch.tracking.hud import HudSnapshot
from skillwatch.tracking.notifications import NotificationQueue
from skillwatch.tracking.tick_driver import ReadyCue, TickDriver, TickResult

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "config" / "default_config.json"


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load config from JSON, falling back to defaults."""
    path = Path(path) if path is not None else CONFIG_PATH
    if not path.exists():
        logger.warning(f"Config not found at {path}, using defaults")
        return AppConfig()
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read config {path}: {e}; using defaults")
        return AppConfig()
    if not isinstance(data, dict):
        logger.warning(f"Config {path} is not a JSON object; using defaults")
        return AppConfig()
    logger.info(f"Loaded config from {path}")
    return AppConfig.from_dict(data)


def qt_beep(key: SkillKey) -> None:
    """Default ready cue: the platform beep, when a Qt application is running."""
    from PyQt6.QtWidgets import QApplication

    if QApplication.instance() is not None:
        QApplication.beep()


class SkillSession:
    def __init__(
        self,
        config: Optional[AppConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        ready_cue: Optional[ReadyCue] = None,
    ):
        self._config = config or AppConfig()
        self._store = CooldownStore(self._config.cooldown_seconds, clock=clock)
        self._notifications = NotificationQueue(
            self._config.toast_duration_ms / 1000.0, clock=clock
        )
        if ready_cue is None and self._config.ready_sound_enabled:
            ready_cue = qt_beep
        self._driver = TickDriver(self._store, self._notifications, self._config, ready_cue)
        self._overlay = None
        self._hotkey_listener = None

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def store(self) -> CooldownStore:
        return self._store

    @property
    def notifications(self) -> NotificationQueue:
        return self._notifications

    @property
    def driver(self) -> TickDriver:
        return self._driver

    def tick(self, observation: TickObservation) -> TickResult:
        result = self._driver.tick(observation)
        self.refresh_hud()
        return result

    def on_block_broken(
        self,
        held_item: Optional[ItemDescriptor],
        block: Optional[BlockDescriptor],
    ) -> Optional[SkillKey]:
        key = self._driver.on_block_broken(held_item, block)
        if key is not None:
            self.refresh_hud()
        return key

    def hud_snapshot(self) -> HudSnapshot:
        return self._driver.hud_snapshot()

    def attach_overlay(self, overlay) -> None:
        """Attach a HudOverlay (or anything with update_snapshot) and start the toggle hotkey."""
        self._overlay = overlay
        if not self._config.hud_enabled:
            overlay.hide()
        if self._config.hud_toggle_bind and self._hotkey_listener is None:
            from skillwatch.automation.global_hotkey import HudToggleListener

            self._hotkey_listener = HudToggleListener(
                get_bind=lambda: self._config.hud_toggle_bind
            )
            self._hotkey_listener.triggered.connect(self.toggle_hud)
            self._hotkey_listener.start()
        self.refresh_hud()

    def create_overlay(self, screen_geometry):
        """Build a HudOverlay at the configured margins, show it if enabled and attach it.

        Needs a running QApplication.
        """
        from skillwatch.overlay.hud_overlay import HudOverlay

        overlay = HudOverlay(
            screen_geometry,
            left_margin=self._config.hud_left_margin,
            top_margin=self._config.hud_top_margin,
        )
        if self._config.hud_enabled:
            overlay.show()
        self.attach_overlay(overlay)
        return overlay

    def toggle_hud(self) -> None:
        if self._overlay is not None:
            self._overlay.toggle_visible()

    def close(self) -> None:
        if self._hotkey_listener is not None:
            self._hotkey_listener.stop()
            self._hotkey_listener = None
        self._overlay = None

    def refresh_hud(self) -> None:
        """Push a fresh snapshot to the attached overlay, if any."""
        if self._overlay is not None:
            self._overlay.update_snapshot(self.hud_snapshot())
