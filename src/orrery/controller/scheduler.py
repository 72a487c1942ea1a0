"""
Frame Scheduler
Runs the update systems once per frame in a fixed order.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence, Tuple

from orrery.controller.systems import (
    animate_elliptical_orbits, animate_orbits, enforce_orbit_radii, spin_bodies
)
from orrery.model.components import World
from orrery.model.state import SimulationParams

logger = logging.getLogger(__name__)

UpdateSystem = Callable[[World, SimulationParams, float], None]

# Later systems observe this frame's already-updated transforms.
DEFAULT_SYSTEMS: Tuple[UpdateSystem, ...] = (
    animate_orbits,             # rotate pivots for circular orbits
    spin_bodies,                # spin Sun/Earth/Moon
    animate_elliptical_orbits,  # drive Earth along an ellipse if enabled
    enforce_orbit_radii,        # apply radii from the store in circular mode
)


class FrameScheduler:
    def __init__(
        self,
        world: World,
        params: SimulationParams,
        systems: Sequence[UpdateSystem] = DEFAULT_SYSTEMS,
    ) -> None:
        self.world = world
        self.params = params
        self.systems: Tuple[UpdateSystem, ...] = tuple(systems)
        self.frame_count: int = 0
        self.elapsed: float = 0.0

    def step(self, dt: float) -> None:
        """Advance the simulation by `dt` seconds (must be >= 0)."""
        if dt < 0.0:
            raise ValueError(f"Elapsed time must be non-negative, got {dt}.")
        for system in self.systems:
            system(self.world, self.params, dt)
        self.frame_count += 1
        self.elapsed += dt

    def run(self, steps: Iterable[float]) -> None:
        """Step once per value of `steps`."""
        for dt in steps:
            self.step(dt)
