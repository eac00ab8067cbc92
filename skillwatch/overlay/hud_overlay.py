"""HUD overlay: a transparent, always-on-top window that draws running
cooldowns (top left) and ready toasts (top right).

The overlay is click-through and only ever paints the last HudSnapshot it
was given; it never reads tracker state directly.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from PyQt6.QtCore import QRect, Qt
from PyQt6.QtGui import QColor, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from skillwatch.tracking.hud import HudSnapshot

logger = logging.getLogger(__name__)

ICON_SIZE = 16
ROW_PADDING = 4
TOAST_WIDTH = 150
TOAST_HEIGHT = 24
TOAST_GAP = 4
SCREEN_MARGIN = 10

# Crafting-table backdrop behind smithing icons
_SMITHING_OUTER = QColor(0x3B, 0x20, 0x0A)
_SMITHING_INNER = QColor(0x8B, 0x5A, 0x2B)


def icon_label(icon: Any) -> str:
    """Short text stand-in for an item icon ('minecraft:iron_axe' -> 'IA')."""
    identifier = str(getattr(icon, "identifier", icon) or "")
    name = identifier.rsplit(":", 1)[-1]
    letters = [part[0] for part in name.split("_") if part]
    return "".join(letters[:2]).upper() or "?"


class HudOverlay(QWidget):
    def __init__(
        self,
        screen_geometry: QRect,
        left_margin: int = SCREEN_MARGIN,
        top_margin: int = SCREEN_MARGIN,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._screen_geometry = screen_geometry
        self._left_margin = left_margin
        self._top_margin = top_margin
        self._snapshot = HudSnapshot()
        self._setup_window()

    def _setup_window(self) -> None:
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
            | Qt.WindowType.Tool  # Hides from taskbar
            | Qt.WindowType.WindowTransparentForInput  # Click-through
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
        self.setGeometry(self._screen_geometry)

    @property
    def snapshot(self) -> HudSnapshot:
        return self._snapshot

    @property
    def margins(self) -> tuple[int, int]:
        return self._left_margin, self._top_margin

    def update_snapshot(self, snapshot: HudSnapshot) -> None:
        """Store the latest HUD snapshot and repaint."""
        self._snapshot = snapshot
        self.update()

    def update_screen_geometry(self, screen_geometry: QRect) -> None:
        self._screen_geometry = screen_geometry
        self.setGeometry(self._screen_geometry)
        self.update()

    def toggle_visible(self) -> None:
        self.setVisible(not self.isVisible())

    def _draw_icon(self, painter: QPainter, icon: Any, x: int, y: int, smithing: bool, pad: int) -> None:
        if smithing:
            outer = QRect(x - pad, y - pad, ICON_SIZE + 2 * pad, ICON_SIZE + 2 * pad)
            painter.fillRect(outer, _SMITHING_OUTER)
            painter.fillRect(outer.adjusted(2, 2, -2, -2), _SMITHING_INNER)
        painter.setPen(QPen(QColor("#FFFFFF"), 1))
        painter.drawRect(x, y, ICON_SIZE - 1, ICON_SIZE - 1)
        painter.drawText(
            QRect(x, y, ICON_SIZE, ICON_SIZE),
            Qt.AlignmentFlag.AlignCenter,
            icon_label(icon),
        )

    def paintEvent(self, event) -> None:
        snapshot = self._snapshot
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Left column: running cooldowns as icon + "Ns"
        x = self._left_margin
        y = self._top_margin
        for row in snapshot.cooldowns:
            self._draw_icon(painter, row.icon, x, y, row.is_smithing, 2)
            painter.setPen(QPen(QColor("#FFFFFF"), 1))
            painter.drawText(x + ICON_SIZE + 3, y + ICON_SIZE - 4, row.text)
            y += ICON_SIZE + ROW_PADDING

        # Top right: toast stack in queue order
        base_x = self.width() - TOAST_WIDTH - SCREEN_MARGIN
        for index, toast in enumerate(snapshot.toasts):
            ty = SCREEN_MARGIN + index * (TOAST_HEIGHT + TOAST_GAP)
            rect = QRect(base_x, ty, TOAST_WIDTH, TOAST_HEIGHT)
            painter.fillRect(rect, QColor(0, 0, 0, 0xCC))
            painter.setPen(QPen(QColor("#FFFFFF"), 1))
            painter.drawRect(rect.adjusted(0, 0, -1, -1))
            self._draw_icon(painter, toast.icon, base_x + 4, ty + 4, toast.is_smithing, 1)
            painter.setPen(QPen(QColor("#FFFFFF"), 1))
            painter.drawText(base_x + 24, ty + 12, toast.title)
            painter.setPen(QPen(QColor("#AAAAAA"), 1))
            painter.drawText(base_x + 24, ty + 21, toast.subtitle)

        painter.end()
