"""
main.py – SH Game Hub application entry point.
Bootstraps the PySide6 QApplication on a qasync event loop, builds the
controller and its collaborators, and launches the main window.

Environment
-----------
  GAMEHUB_API_BASE  : Backend base URL (default http://localhost:3000/api).
  GAMEHUB_LOG_LEVEL : Logging level name (default INFO).
"""

import asyncio
import logging
import os
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
import qasync

from controllers.interaction_controller import InteractionController
from main_window import MainWindow
from services.api_gateway import API_BASE_URL, ApiGateway
from services.catalog_store import CatalogStore
from services.cover_cache import CoverCache
from services.notifications import NotificationCenter
from services.tasks import spawn
from views.renderer import ViewRenderer


def _configure_logging() -> None:
    level_name = os.environ.get("GAMEHUB_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def main() -> None:
    _configure_logging()
    api_base = os.environ.get("GAMEHUB_API_BASE", API_BASE_URL)

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("GameHub")
    app.setApplicationDisplayName("SH Game Hub")
    app.setOrganizationName("SH Game Hub")

    # Qt and asyncio share this single thread.
    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    notifications = NotificationCenter()
    gateway = ApiGateway(api_base, notifications)
    window = MainWindow(notifications, CoverCache(gateway.fetch_image))
    controller = InteractionController(
        store=CatalogStore(gateway),
        gateway=gateway,
        renderer=ViewRenderer(),
        view=window,
        notifications=notifications,
    )
    window.bind(controller)
    window.show()
    logging.getLogger(__name__).info("Using backend at %s", api_base)

    app_close_event = asyncio.Event()
    app.aboutToQuit.connect(app_close_event.set)

    with loop:
        spawn(controller.start())
        loop.run_until_complete(app_close_event.wait())
        loop.run_until_complete(gateway.aclose())


if __name__ == "__main__":
    main()
