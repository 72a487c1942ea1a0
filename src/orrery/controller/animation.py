"""
Animation Driver (Frame Loop)
=============================
This module connects the Qt event loop to the frame scheduler.

Why is this file needed?
------------------------
1. Timing: A QTimer fires on the GUI thread roughly every FRAME_INTERVAL_MS;
   each timeout measures the elapsed time and advances the simulation once.
2. Signals: The view listens to `frame_advanced` to redraw, so the
   simulation never needs to know about widgets.

Classes:
    AnimationController: Owns the timer, the clock and the scheduler.
"""
import logging

from PySide6.QtCore import QObject, QTimer, Signal

from orrery import config
from orrery.controller.scheduler import FrameScheduler
from orrery.model.clock import FrameClock

logger = logging.getLogger(__name__)


class AnimationController(QObject):
    # Signals to update the UI after each simulated frame
    frame_advanced = Signal(float)  # dt of the frame just simulated
    paused_changed = Signal(bool)
    error_occurred = Signal(str)

    def __init__(self, scheduler: FrameScheduler, clock: FrameClock | None = None, parent: QObject | None = None):
        super().__init__(parent)
        self.scheduler = scheduler
        self.clock = clock or FrameClock()
        self._paused = False

        self._timer = QTimer(self)
        self._timer.setInterval(config.FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self.clock.reset()
        self._timer.start()
        logger.info("Animation started (%d ms interval).", config.FRAME_INTERVAL_MS)

    def stop(self) -> None:
        self._timer.stop()
        logger.info("Animation stopped after %d frames.", self.scheduler.frame_count)

    def set_paused(self, paused: bool) -> None:
        if paused == self._paused:
            return
        self._paused = paused
        if not paused:
            # Time spent paused is not simulated
            self.clock.reset()
        logger.info("Animation %s.", "paused" if paused else "resumed")
        self.paused_changed.emit(paused)

    def toggle_paused(self) -> None:
        self.set_paused(not self._paused)

    def step_once(self, dt: float) -> None:
        """Advance by a fixed `dt` regardless of the clock (used while paused)."""
        self.scheduler.step(dt)
        self.frame_advanced.emit(dt)

    def _on_timeout(self) -> None:
        dt = self.clock.tick()
        if self._paused:
            return
        try:
            self.scheduler.step(dt)
        except Exception as e:
            # A defect here would repeat every frame; stop and report once.
            logger.exception("Frame update failed; stopping animation.")
            self._timer.stop()
            self.error_occurred.emit(str(e))
            return
        self.frame_advanced.emit(dt)
