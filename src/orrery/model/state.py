"""
Simulation Parameters (Data Model)
==================================
This module defines the orbit parameter store of the running application.

Why is this file needed?
------------------------
1. State Management: It holds every user-tunable quantity (speeds, distances,
   ellipse shape, elliptical toggle) in one place.
2. Decoupling: The control panel writes to this object; the update systems
   read from it every frame. It is passed explicitly, never imported as a global.

Classes:
    SimulationParams: The store.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
import logging
from typing import Dict, Union

from orrery import config
from orrery.model.components import OrbitMode

logger = logging.getLogger(__name__)

ParamValue = Union[float, bool]


@dataclass
class SimulationParams:
    """
    Simulation-wide tunables.
    Pass this instance to the scheduler and to the control panel.
    """
    orbit_speed_scale: float = config.DEFAULT_ORBIT_SPEED_SCALE    # scales all orbital angular speeds
    spin_speed_scale: float = config.DEFAULT_SPIN_SPEED_SCALE      # scales all self-rotation speeds
    earth_orbit_radius: float = config.DEFAULT_EARTH_ORBIT_RADIUS  # Sun–Earth distance
    moon_orbit_radius: float = config.DEFAULT_MOON_ORBIT_RADIUS    # Earth–Moon distance
    ellipse_a: float = config.DEFAULT_ELLIPSE_A
    ellipse_b: float = config.DEFAULT_ELLIPSE_B
    use_elliptical_orbit: bool = False  # Earth follows the parametric ellipse instead of its pivot

    @property
    def mode(self) -> OrbitMode:
        if self.use_elliptical_orbit:
            return OrbitMode.ELLIPTICAL_PARAMETRIC
        return OrbitMode.CIRCULAR_PIVOT_DRIVEN

    def set_value(self, name: str, value: ParamValue) -> ParamValue:
        """
        Write one field, clamping numeric fields to config.PARAM_RANGES.

        Returns:
            The value actually stored.

        Raises:
            KeyError: If `name` is not a field of the store.
        """
        if name not in self.field_names():
            raise KeyError(f"Unknown simulation parameter '{name}'")

        if name == "use_elliptical_orbit":
            stored: ParamValue = bool(value)
        else:
            stored = self.clamp(name, float(value))

        if getattr(self, name) != stored:
            logger.debug("Parameter %s: %r -> %r", name, getattr(self, name), stored)
        setattr(self, name, stored)
        return stored

    @staticmethod
    def clamp(name: str, value: float) -> float:
        lo, hi = config.PARAM_RANGES[name]
        return min(max(value, lo), hi)

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def as_dict(self) -> Dict[str, ParamValue]:
        return {name: getattr(self, name) for name in self.field_names()}

    def distance_for(self, body_kind: str) -> float:
        """Configured pivot-to-body distance for `body_kind` ("earth" / "moon")."""
        if body_kind == "earth":
            return self.earth_orbit_radius
        if body_kind == "moon":
            return self.moon_orbit_radius
        raise KeyError(f"No orbit distance configured for '{body_kind}'")

    def reset(self) -> None:
        """Restore the startup defaults."""
        defaults = SimulationParams()
        for name in self.field_names():
            setattr(self, name, getattr(defaults, name))
        logger.info("Simulation parameters have been reset.")
