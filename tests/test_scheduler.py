import pytest

from orrery.controller.scheduler import DEFAULT_SYSTEMS, FrameScheduler
from orrery.controller.systems import (
    animate_elliptical_orbits, animate_orbits, enforce_orbit_radii, spin_bodies
)
from orrery.model.components import BodyKind


def test_default_system_order():
    assert DEFAULT_SYSTEMS == (
        animate_orbits, spin_bodies, animate_elliptical_orbits, enforce_orbit_radii
    )


def test_step_counts_frames_and_time(solar_system, params):
    scheduler = FrameScheduler(solar_system, params)
    scheduler.run([0.1, 0.2, 0.0])

    assert scheduler.frame_count == 3
    assert scheduler.elapsed == pytest.approx(0.3)


def test_negative_dt_is_rejected(solar_system, params):
    scheduler = FrameScheduler(solar_system, params)
    with pytest.raises(ValueError):
        scheduler.step(-0.01)
    assert scheduler.frame_count == 0


def test_custom_systems_run_in_order(solar_system, params):
    calls = []

    def first(world, p, dt):
        calls.append(("first", dt))

    def second(world, p, dt):
        assert p is params
        calls.append(("second", dt))

    scheduler = FrameScheduler(solar_system, params, systems=[first, second])
    scheduler.step(0.5)
    scheduler.step(0.25)

    assert calls == [("first", 0.5), ("second", 0.5), ("first", 0.25), ("second", 0.25)]


def test_zero_dt_frame_applies_new_distances(solar_system, params):
    scheduler = FrameScheduler(solar_system, params)
    params.set_value("moon_orbit_radius", 1.7)

    scheduler.step(0.0)

    moon = solar_system.node_of(solar_system.body(BodyKind.MOON))
    assert solar_system.scene.node(moon).translation[0] == pytest.approx(1.7)
