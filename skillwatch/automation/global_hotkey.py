"""Global hotkey that toggles the HUD while the game has focus.

Uses a low-level keyboard.hook rather than add_hotkey so the bind still
registers while movement keys are held. Fires once per press; holding the
key does not repeat.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from skillwatch.automation.binds import KeyBind, canonical_key, is_modifier, normalize_bind

logger = logging.getLogger(__name__)


class HotkeyMatcher:
    """Turns a stream of key down/up events into one trigger per press of bind."""

    def __init__(self, bind: str):
        self.bind = KeyBind.parse(bind)
        self._held_modifiers: set[str] = set()
        self._held_keys: set[str] = set()

    def key_down(self, name: str) -> bool:
        token = canonical_key(name)
        if not token or self.bind is None:
            return False
        if is_modifier(token):
            self._held_modifiers.add(token)
            return False
        if token in self._held_keys:
            return False
        self._held_keys.add(token)
        return self.bind.matches(self._held_modifiers, token)

    def key_up(self, name: str) -> None:
        token = canonical_key(name)
        if is_modifier(token):
            self._held_modifiers.discard(token)
        else:
            self._held_keys.discard(token)


class _HookThread(QThread):
    triggered = pyqtSignal()

    def __init__(self, get_bind: Callable[[], str], parent: Optional[QObject] = None):
        super().__init__(parent)
        self._get_bind = get_bind
        self._running = True

    def run(self) -> None:
        try:
            import keyboard
        except ImportError:
            logger.warning(
                "keyboard library not installed; HUD toggle hotkey disabled. "
                "Install with: pip install keyboard"
            )
            return

        hook = None
        while self._running:
            bind = normalize_bind(self._get_bind() or "")
            if not bind:
                self.msleep(500)
                continue
            matcher = HotkeyMatcher(bind)

            def on_event(event, matcher=matcher):
                if not self._running:
                    return
                name = str(getattr(event, "name", "") or "")
                if event.event_type == keyboard.KEY_DOWN:
                    if matcher.key_down(name):
                        self.triggered.emit()
                elif event.event_type == keyboard.KEY_UP:
                    matcher.key_up(name)

            try:
                hook = keyboard.hook(on_event)
            except Exception as e:
                logger.warning("keyboard hook failed for %r: %s", bind, e)
                return

            while self._running and normalize_bind(self._get_bind() or "") == bind:
                self.msleep(200)
            try:
                keyboard.unhook(hook)
            except Exception as e:
                logger.debug("keyboard unhook failed: %s", e)
            hook = None

    def stop(self) -> None:
        self._running = False


class HudToggleListener(QObject):
    """Emits triggered when the configured HUD toggle bind is pressed anywhere."""

    triggered = pyqtSignal()

    def __init__(self, get_bind: Callable[[], str], parent: Optional[QObject] = None):
        super().__init__(parent)
        self._get_bind = get_bind
        self._thread: Optional[_HookThread] = None

    def start(self) -> None:
        if self._thread is not None and self._thread.isRunning():
            return
        self._thread = _HookThread(self._get_bind, self)
        self._thread.triggered.connect(self.triggered.emit)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is not None:
            self._thread.stop()
            self._thread.wait(2000)
            self._thread = None
