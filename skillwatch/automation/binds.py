"""Key-bind parsing for the HUD toggle hotkey."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

MODIFIERS = ("ctrl", "shift", "alt")


def _sided(canonical: str, *names: str) -> dict[str, str]:
    aliases = {}
    for name in names:
        for variant in (name, f"left {name}", f"right {name}", f"{name} l", f"{name} r"):
            aliases[variant] = canonical
    return aliases


_ALIASES = {
    **_sided("ctrl", "ctrl", "control"),
    **_sided("shift", "shift"),
    **_sided("alt", "alt", "alt gr", "altgr"),
    "esc": "escape",
    "return": "enter",
    "pgup": "page up",
    "pgdn": "page down",
    "del": "delete",
    "spacebar": "space",
}


def canonical_key(name: str) -> str:
    """Lowercase, collapse separators and resolve aliases ('Left_Ctrl' -> 'ctrl')."""
    token = " ".join(str(name or "").strip().lower().replace("_", " ").split())
    return _ALIASES.get(token, token)


def is_modifier(name: str) -> bool:
    return canonical_key(name) in MODIFIERS


@dataclass(frozen=True)
class KeyBind:
    """One primary key plus zero or more modifiers."""

    key: str
    modifiers: frozenset[str] = frozenset()

    @classmethod
    def parse(cls, text: str) -> Optional["KeyBind"]:
        """Parse 'Control + F8' style text; None if empty or not exactly one primary key."""
        modifiers = set()
        key = ""
        for part in str(text or "").split("+"):
            token = canonical_key(part)
            if not token:
                continue
            if token in MODIFIERS:
                modifiers.add(token)
            elif key:
                return None
            else:
                key = token
        if not key:
            return None
        return cls(key, frozenset(modifiers))

    def matches(self, held_modifiers: Iterable[str], key: str) -> bool:
        held = frozenset(canonical_key(m) for m in held_modifiers)
        return canonical_key(key) == self.key and held == self.modifiers

    def __str__(self) -> str:
        return "+".join([m for m in MODIFIERS if m in self.modifiers] + [self.key])


def normalize_bind(text: str) -> str:
    """Canonical form of a bind string ('Shift+Control+F8' -> 'ctrl+shift+f8'); '' if invalid."""
    bind = KeyBind.parse(text)
    return str(bind) if bind is not None else ""
