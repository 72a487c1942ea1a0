"""
Scene Setup
===========
Spawns the Sun, Earth, Moon and their pivots once at startup.

Hierarchy:
    Sun
     └─ earth_pivot (rotates: carries Earth around)
         └─ Earth
             └─ moon_pivot (rotates: carries Moon around Earth)
                 └─ Moon
"""
from __future__ import annotations

import logging

from scipy.spatial.transform import Rotation

from orrery import config
from orrery.model.components import BodyKind, EllipticalOrbit, Orbit, Spin, World
from orrery.model.geometry_utils import deg2rad
from orrery.model.state import SimulationParams

logger = logging.getLogger(__name__)


def build_solar_system(params: SimulationParams) -> World:
    world = World()
    scene = world.scene

    # Sun: fixed at the origin, gentle spin (purely visual)
    sun = world.spawn("Sun", scene.create("sun"))
    world.bodies[sun] = BodyKind.SUN
    world.spins[sun] = Spin(angular_speed=config.SUN_SPIN_SPEED)

    # Earth pivot: rotates to carry the Earth around the Sun in a circle
    earth_pivot = world.spawn("Earth pivot", scene.create("earth_pivot", parent=world.node_of(sun)))
    world.orbits[earth_pivot] = Orbit(angular_speed=config.EARTH_ORBIT_SPEED)

    # Earth: tilted axis, initially placed along +X at orbit radius
    tilt = Rotation.from_euler("z", deg2rad(config.EARTH_AXIAL_TILT_DEG))
    earth = world.spawn("Earth", scene.create(
        "earth",
        translation=(params.earth_orbit_radius, 0.0, 0.0),
        rotation=tilt,
        parent=world.node_of(earth_pivot),
    ))
    world.bodies[earth] = BodyKind.EARTH
    world.spins[earth] = Spin(angular_speed=config.EARTH_SPIN_SPEED)
    world.ellipticals[earth] = EllipticalOrbit(
        a=params.ellipse_a,
        b=params.ellipse_b,
        angular_speed=config.EARTH_ELLIPSE_SPEED,
    )

    # Moon pivot: child of Earth, so it follows Earth around the Sun
    moon_pivot = world.spawn("Moon pivot", scene.create("moon_pivot", parent=world.node_of(earth)))
    world.orbits[moon_pivot] = Orbit(angular_speed=config.MOON_ORBIT_SPEED)

    # Moon: offset along +X in the Moon pivot's frame
    moon = world.spawn("Moon", scene.create(
        "moon",
        translation=(params.moon_orbit_radius, 0.0, 0.0),
        parent=world.node_of(moon_pivot),
    ))
    world.bodies[moon] = BodyKind.MOON
    world.spins[moon] = Spin(angular_speed=config.MOON_SPIN_SPEED)

    logger.info("Scene built:\n%s", "\n".join(world.describe()))
    return world
