import numpy as np
import pytest

from orrery.model.builder import build_solar_system
from orrery.model.components import BodyKind, Orbit, World
from orrery.model.state import SimulationParams


@pytest.fixture
def params():
    return SimulationParams()


@pytest.fixture
def solar_system(params):
    return build_solar_system(params)


@pytest.fixture
def orbit_world():
    """Factory: a single pivot at the origin carrying one Earth-tagged body along +X."""
    def _make(orbit_speed=1.0, radius=3.0):
        world = World()
        pivot = world.spawn("pivot", world.scene.create("pivot"))
        world.orbits[pivot] = Orbit(angular_speed=orbit_speed)
        body = world.spawn(
            "Earth",
            world.scene.create("earth", translation=(radius, 0.0, 0.0), parent=world.node_of(pivot)),
        )
        world.bodies[body] = BodyKind.EARTH
        return world, pivot, body
    return _make


def offset_in_pivot_parent(world, pivot, body):
    """Body position expressed in the frame of the pivot's parent (the Sun frame for Earth)."""
    pivot_node = world.node_of(pivot)
    local = world.scene.node(world.node_of(body)).translation
    return (world.scene.local_matrix(pivot_node) @ np.r_[local, 1.0])[:3]


@pytest.fixture
def pivot_frame_offset():
    return offset_in_pivot_parent
