"""
Configuration & Scene Constants
===============================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (speeds, radii, colours) scattered
   throughout the model and the view.
2. Ranges: The UI sliders and the parameter store share one table of
   allowed ranges, so clamping and widget limits never disagree.

Exports:
    PARAM_RANGES (dict): (min, max) per tunable field of SimulationParams.
    BODY_STYLES (dict): Render radius and colour per body.
"""
import math
from dataclasses import dataclass
from typing import Dict, Tuple


# Application
APP_ID: str = "orrery"
VISIBLE_APP_NAME: str = "Earth orbiting the Sun"

# Frame loop
FRAME_INTERVAL_MS: int = 16         # ~60 Hz
MAX_FRAME_DT: float = 0.25          # [s] longest step accepted from the clock
FPS_SMOOTHING: float = 0.1          # weight of the newest sample in the FPS average

# Base angular speeds [rad/s] (multiplied by the speed scales of the store)
SUN_SPIN_SPEED: float = 0.2
EARTH_ORBIT_SPEED: float = math.pi / 10.0   # ~1 revolution in ~20 s
EARTH_SPIN_SPEED: float = math.pi * 2.0     # ~1 self-rotation per second
EARTH_ELLIPSE_SPEED: float = math.pi / 10.0
MOON_ORBIT_SPEED: float = math.pi * 3.0
MOON_SPIN_SPEED: float = math.pi * 0.3

EARTH_AXIAL_TILT_DEG: float = 23.44

# Parameter store defaults
DEFAULT_ORBIT_SPEED_SCALE: float = 1.0
DEFAULT_SPIN_SPEED_SCALE: float = 1.0
DEFAULT_EARTH_ORBIT_RADIUS: float = 3.0
DEFAULT_MOON_ORBIT_RADIUS: float = 0.9
DEFAULT_ELLIPSE_A: float = 3.2
DEFAULT_ELLIPSE_B: float = 2.6

PARAM_RANGES: Dict[str, Tuple[float, float]] = {
    "orbit_speed_scale": (0.0, 5.0),
    "spin_speed_scale": (0.0, 5.0),
    "earth_orbit_radius": (1.0, 10.0),
    "moon_orbit_radius": (0.2, 3.0),
    "ellipse_a": (0.5, 10.0),
    "ellipse_b": (0.5, 10.0),
}


@dataclass(frozen=True)
class BodyStyle:
    radius: float
    color: Tuple[float, float, float]
    emissive: bool = False


BODY_STYLES: Dict[str, BodyStyle] = {
    "sun": BodyStyle(radius=1.0, color=(1.0, 0.647, 0.0), emissive=True),
    "earth": BodyStyle(radius=0.5, color=(0.2, 0.4, 1.0)),
    "moon": BodyStyle(radius=0.18, color=(0.8, 0.8, 0.8)),
}

# View
BACKGROUND_COLOR: str = "black"
CAMERA_POSITION: Tuple[float, float, float] = (-6.0, 4.0, 8.0)
CAMERA_FOCAL_POINT: Tuple[float, float, float] = (0.0, 0.0, 0.0)
CAMERA_UP: Tuple[float, float, float] = (0.0, 1.0, 0.0)
ORBIT_GUIDE_SEGMENTS: int = 180
ORBIT_GUIDE_COLOR: str = "#5A6B8C"
