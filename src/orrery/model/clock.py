"""
Frame Clock
Supplies the elapsed time between two frames.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from orrery import config

logger = logging.getLogger(__name__)


class FrameClock:
    """
    Measures seconds between consecutive `tick()` calls.

    The returned step is never negative and never larger than `max_dt`, so a
    stalled event loop (window drag, breakpoint) resumes smoothly instead of
    jumping the animation forward.
    """

    def __init__(
        self,
        time_source: Callable[[], float] = time.perf_counter,
        max_dt: float = config.MAX_FRAME_DT,
        smoothing: float = config.FPS_SMOOTHING,
    ) -> None:
        self._time_source = time_source
        self.max_dt = max_dt
        self.smoothing = smoothing
        self._last: Optional[float] = None
        self._fps: float = 0.0

    def reset(self) -> None:
        """Forget the previous tick; the next tick returns 0."""
        self._last = None

    def tick(self) -> float:
        now = self._time_source()
        if self._last is None:
            self._last = now
            return 0.0

        raw = now - self._last
        self._last = now

        if raw < 0.0:
            logger.warning("Time source went backwards by %.6f s; using 0.", -raw)
            raw = 0.0

        if raw > 0.0:
            instant = 1.0 / raw
            if self._fps == 0.0:
                self._fps = instant
            else:
                self._fps += self.smoothing * (instant - self._fps)

        return min(raw, self.max_dt)

    @property
    def fps(self) -> float:
        """Exponentially smoothed frames per second (0 before the second tick)."""
        return self._fps
