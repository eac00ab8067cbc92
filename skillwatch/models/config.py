from __future__ import annotations

from dataclasses import dataclass, field


def _default_crafting_markers() -> list[str]:
    return ["crafting", "smithing"]


def _as_float(value: object, default: float) -> float:
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return result if result >= 0 else default


def _as_bool(value: object, default: bool) -> bool:
    # JSON true/false only; "false" or 0 keep the default
    return value if isinstance(value, bool) else default


def _as_int(value: object, default: int) -> int:
    try:
        result = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return result if result >= 0 else default


@dataclass
class AppConfig:
    """Runtime configuration for skill detection, cooldowns and the HUD."""
    cooldown_seconds: float = 60.0
    toast_duration_ms: int = 2500
    # Bow releases shorter than this many ticks are accidental, not shots
    min_bow_draw_ticks: int = 5
    bow_max_distance: float = 48.0
    bow_max_angle_deg: float = 12.0
    crossbow_max_distance: float = 48.0
    crossbow_max_angle_deg: float = 12.0
    # Substrings of the host screen type that count as a crafting surface
    crafting_screen_markers: list[str] = field(default_factory=_default_crafting_markers)
    hud_enabled: bool = True
    ready_sound_enabled: bool = True
    # Global hotkey to show/hide the HUD (e.g. "f8"); empty = not set
    hud_toggle_bind: str = ""
    hud_left_margin: int = 10
    hud_top_margin: int = 10

    @classmethod
    def from_dict(cls, data: dict) -> AppConfig:
        defaults = cls()
        cooldown = data.get("cooldown", {}) or {}
        ranged = data.get("ranged", {}) or {}
        inventory = data.get("inventory", {}) or {}
        hud = data.get("hud", {}) or {}
        markers = inventory.get("crafting_screen_markers")
        if isinstance(markers, list):
            markers = [str(m).strip().lower() for m in markers if str(m or "").strip()]
        else:
            markers = _default_crafting_markers()
        return cls(
            cooldown_seconds=_as_float(
                cooldown.get("duration_seconds"), defaults.cooldown_seconds
            ),
            toast_duration_ms=_as_int(
                cooldown.get("toast_duration_ms"), defaults.toast_duration_ms
            ),
            min_bow_draw_ticks=_as_int(
                ranged.get("min_bow_draw_ticks"), defaults.min_bow_draw_ticks
            ),
            bow_max_distance=_as_float(
                ranged.get("bow_max_distance"), defaults.bow_max_distance
            ),
            bow_max_angle_deg=_as_float(
                ranged.get("bow_max_angle_deg"), defaults.bow_max_angle_deg
            ),
            crossbow_max_distance=_as_float(
                ranged.get("crossbow_max_distance"), defaults.crossbow_max_distance
            ),
            crossbow_max_angle_deg=_as_float(
                ranged.get("crossbow_max_angle_deg"), defaults.crossbow_max_angle_deg
            ),
            crafting_screen_markers=markers,
            hud_enabled=_as_bool(hud.get("enabled"), defaults.hud_enabled),
            ready_sound_enabled=_as_bool(
                hud.get("ready_sound_enabled"), defaults.ready_sound_enabled
            ),
            hud_toggle_bind=str(hud.get("toggle_bind", "") or ""),
            hud_left_margin=_as_int(hud.get("left_margin"), defaults.hud_left_margin),
            hud_top_margin=_as_int(hud.get("top_margin"), defaults.hud_top_margin),
        )

    def to_dict(self) -> dict:
        """Serialize to dict for JSON config file (round-trip with from_dict)."""
        return {
            "cooldown": {
                "duration_seconds": self.cooldown_seconds,
                "toast_duration_ms": self.toast_duration_ms,
            },
            "ranged": {
                "min_bow_draw_ticks": self.min_bow_draw_ticks,
                "bow_max_distance": self.bow_max_distance,
                "bow_max_angle_deg": self.bow_max_angle_deg,
                "crossbow_max_distance": self.crossbow_max_distance,
                "crossbow_max_angle_deg": self.crossbow_max_angle_deg,
            },
            "inventory": {
                "crafting_screen_markers": list(self.crafting_screen_markers),
            },
            "hud": {
                "enabled": self.hud_enabled,
                "ready_sound_enabled": self.ready_sound_enabled,
                "toggle_bind": self.hud_toggle_bind,
                "left_margin": self.hud_left_margin,
                "top_margin": self.hud_top_margin,
            },
        }
