import math

import numpy as np
import pytest

from orrery import config
from orrery.model.builder import build_solar_system
from orrery.model.components import BodyKind, OrbitMode


def test_hierarchy(solar_system):
    world = solar_system
    sun = world.body(BodyKind.SUN)
    earth = world.body(BodyKind.EARTH)
    moon = world.body(BodyKind.MOON)
    earth_pivot = world.pivot_of(earth)
    moon_pivot = world.pivot_of(moon)

    assert world.scene.parent_of(world.node_of(sun)) is None
    assert world.scene.parent_of(world.node_of(earth_pivot)) == world.node_of(sun)
    assert world.scene.parent_of(world.node_of(earth)) == world.node_of(earth_pivot)
    assert world.scene.parent_of(world.node_of(moon_pivot)) == world.node_of(earth)
    assert world.pivot_of(sun) is None
    assert len(world.scene) == 5


def test_components(solar_system):
    world = solar_system
    earth = world.body(BodyKind.EARTH)
    moon = world.body(BodyKind.MOON)

    assert set(world.spins) == {world.body(BodyKind.SUN), earth, moon}
    assert set(world.orbits) == {world.pivot_of(earth), world.pivot_of(moon)}
    assert set(world.ellipticals) == {earth}

    assert world.orbits[world.pivot_of(earth)].angular_speed == pytest.approx(math.pi / 10)
    assert world.orbits[world.pivot_of(moon)].angular_speed == pytest.approx(3 * math.pi)
    assert world.spins[earth].angular_speed == pytest.approx(2 * math.pi)
    assert world.ellipticals[earth].mode is OrbitMode.CIRCULAR_PIVOT_DRIVEN


def test_initial_placement_uses_params(params):
    params.set_value("earth_orbit_radius", 4.5)
    params.set_value("moon_orbit_radius", 1.1)
    world = build_solar_system(params)

    earth = world.node_of(world.body(BodyKind.EARTH))
    moon = world.node_of(world.body(BodyKind.MOON))
    np.testing.assert_allclose(world.scene.world_position(earth), [4.5, 0.0, 0.0])
    # The Moon's plane follows the Earth's tilt, so only the distance is fixed
    offset = world.scene.world_position(moon) - world.scene.world_position(earth)
    assert np.linalg.norm(offset) == pytest.approx(1.1)


def test_earth_axis_is_tilted(solar_system):
    earth = solar_system.scene.node(solar_system.node_of(solar_system.body(BodyKind.EARTH)))
    axis = earth.rotation.apply([0.0, 1.0, 0.0])
    angle = math.degrees(math.acos(axis[1]))
    assert angle == pytest.approx(config.EARTH_AXIAL_TILT_DEG)


def test_pairs(solar_system):
    pairs = set(solar_system.orbiting_pairs())
    earth = solar_system.body(BodyKind.EARTH)
    moon = solar_system.body(BodyKind.MOON)
    assert pairs == {
        (solar_system.pivot_of(earth), earth),
        (solar_system.pivot_of(moon), moon),
    }
