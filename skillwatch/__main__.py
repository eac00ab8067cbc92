"""skillwatch: main entry point.

Loads the config, opens the HUD overlay on the primary screen and keeps it
refreshed. The game host drives the session through SkillSession.tick and
SkillSession.on_block_broken; standalone, the HUD only counts down.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtCore import QRect, QTimer
from PyQt6.QtWidgets import QApplication

from skillwatch.session import SkillSession, load_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

HUD_REFRESH_MS = 250


def primary_screen_rect(app: QApplication) -> QRect:
    """Geometry of the primary screen, with a safe fallback."""
    screen = app.primaryScreen()
    if screen is not None:
        return screen.geometry()
    return QRect(0, 0, 1920, 1080)


def main() -> None:
    config = load_config()

    app = QApplication(sys.argv)

    session = SkillSession(config)
    session.create_overlay(primary_screen_rect(app))

    # Remaining seconds and toast ages advance between host ticks too
    timer = QTimer()
    timer.timeout.connect(session.refresh_hud)
    timer.start(HUD_REFRESH_MS)

    app.aboutToQuit.connect(timer.stop)
    app.aboutToQuit.connect(session.close)
    logger.info("skillwatch HUD running")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
