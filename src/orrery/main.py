"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the parameter store and the scene (Model).
2. Instantiates the scheduler and the animation timer (Controller).
3. Instantiates the Main Window (View) and passes everything in.
4. Prevents circular import errors by being the orchestrator.
"""
import logging
import os
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication

from orrery import config
from orrery.controller.animation import AnimationController
from orrery.controller.scheduler import FrameScheduler
from orrery.logging_config import setup_logging
from orrery.model.builder import build_solar_system
from orrery.model.clock import FrameClock
from orrery.model.state import SimulationParams
from orrery.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setApplicationName(config.APP_ID)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationDisplayName(config.VISIBLE_APP_NAME)
    return app


def main() -> int:
    # 1. Setup Logging (level from ORRERY_LOG_LEVEL, INFO by default)
    setup_logging()

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Data Model
    params = SimulationParams()
    world = build_solar_system(params)

    # 4. Initialize the frame loop
    scheduler = FrameScheduler(world, params)
    animation = AnimationController(scheduler, FrameClock())

    # 5. Initialize the Main Window, passing the model
    window = MainWindow(world, params, animation)
    window.show()

    # 6. Start Event Loop
    animation.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
