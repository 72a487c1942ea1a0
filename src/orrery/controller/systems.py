"""
Update Systems
==============
Stateless per-frame functions that turn orbital parameters into transforms.

Each system has the signature ``system(world, params, dt)`` and mutates only
the scene nodes and components it owns:

1. animate_orbits: pivot rotation angle (circular orbits).
2. spin_bodies: body rotation about its local up axis.
3. animate_elliptical_orbits: body position on a parametric ellipse.
4. enforce_orbit_radii: body distance from its pivot.

They must run in that order every frame (see FrameScheduler).
"""
from __future__ import annotations

import logging

from scipy.spatial.transform import Rotation

from orrery.model.components import EntityId, OrbitMode, World
from orrery.model.geometry_utils import (
    ellipse_parameter_towards, ellipse_point, rescale, wrap_angle
)
from orrery.model.state import SimulationParams

logger = logging.getLogger(__name__)


def _pivot_suspended(world: World, params: SimulationParams, pivot: EntityId) -> bool:
    """A pivot stops rotating while its child body follows an active ellipse."""
    if not params.use_elliptical_orbit:
        return False
    for child in world.scene.children(world.node_of(pivot)):
        if world.entity_of_node(child) in world.ellipticals:
            return True
    return False


def animate_orbits(world: World, params: SimulationParams, dt: float) -> None:
    """
    Advance every Orbit-carrying pivot about +Y by speed * scale * dt.

    The angle is accumulated in the component and wrapped to [0, 2π); the
    pivot's rotation is rebuilt from it, so the result does not depend on
    how the elapsed time was split into frames. Children follow through the
    hierarchy.
    """
    for pivot, orbit in world.orbits.items():
        if _pivot_suspended(world, params, pivot):
            continue
        orbit.angle = wrap_angle(orbit.angle + orbit.angular_speed * params.orbit_speed_scale * dt)
        world.scene.node(world.node_of(pivot)).rotation = Rotation.from_euler("y", orbit.angle)


def spin_bodies(world: World, params: SimulationParams, dt: float) -> None:
    """Rotate every Spin-carrying body about its own local +Y (tilt is kept)."""
    for body, spin in world.spins.items():
        world.scene.node(world.node_of(body)).rotate_local_y(
            spin.angular_speed * params.spin_speed_scale * dt
        )


def animate_elliptical_orbits(world: World, params: SimulationParams, dt: float) -> None:
    """
    Drive EllipticalOrbit bodies along x = a cos θ, z = b sin θ while the
    elliptical toggle is on. This overrides the pivot-derived position.

    On the first elliptical frame θ is chosen so the ellipse point lies in the
    body's current direction from its pivot (no sideways jump).
    With the toggle off, transforms are left alone.
    """
    if not params.use_elliptical_orbit:
        for body, ellipse in world.ellipticals.items():
            if ellipse.mode is OrbitMode.ELLIPTICAL_PARAMETRIC:
                ellipse.mode = OrbitMode.CIRCULAR_PIVOT_DRIVEN
                logger.info("%s: elliptical -> circular orbit.", world.names[body])
        return

    for body, ellipse in world.ellipticals.items():
        node = world.scene.node(world.node_of(body))
        ellipse.a = params.ellipse_a
        ellipse.b = params.ellipse_b

        if ellipse.mode is OrbitMode.CIRCULAR_PIVOT_DRIVEN:
            ellipse.theta = ellipse_parameter_towards(ellipse.a, ellipse.b, node.translation)
            ellipse.mode = OrbitMode.ELLIPTICAL_PARAMETRIC
            logger.info(
                "%s: circular -> elliptical orbit (a=%.3f, b=%.3f, theta=%.3f).",
                world.names[body], ellipse.a, ellipse.b, ellipse.theta,
            )

        ellipse.theta = wrap_angle(ellipse.theta + ellipse.angular_speed * params.orbit_speed_scale * dt)
        node.translation = ellipse_point(ellipse.a, ellipse.b, ellipse.theta)


def enforce_orbit_radii(world: World, params: SimulationParams, dt: float) -> None:
    """
    Rescale each circular body's offset from its pivot to the configured
    distance, keeping the direction (and therefore the orbital phase).

    Runs every frame, after animate_orbits, so a continuously dragged slider
    is followed without resetting the orbit.
    """
    for pivot, body in world.orbiting_pairs():
        if world.is_elliptical(body):
            continue
        node = world.scene.node(world.node_of(body))
        node.translation = rescale(node.translation, params.distance_for(world.bodies[body]))
