import logging

import pytest

from orrery import config
from orrery.model.components import BodyKind, OrbitMode
from orrery.model.state import SimulationParams


def test_defaults(params):
    assert params.as_dict() == {
        "orbit_speed_scale": 1.0,
        "spin_speed_scale": 1.0,
        "earth_orbit_radius": 3.0,
        "moon_orbit_radius": 0.9,
        "ellipse_a": 3.2,
        "ellipse_b": 2.6,
        "use_elliptical_orbit": False,
    }
    assert params.mode is OrbitMode.CIRCULAR_PIVOT_DRIVEN


def test_every_numeric_field_has_a_range():
    numeric = [n for n in SimulationParams.field_names() if n != "use_elliptical_orbit"]
    assert sorted(numeric) == sorted(config.PARAM_RANGES)


@pytest.mark.parametrize("name, value, stored", [
    ("orbit_speed_scale", 7.5, 5.0),
    ("spin_speed_scale", -1.0, 0.0),
    ("earth_orbit_radius", 0.1, 1.0),
    ("moon_orbit_radius", 1.25, 1.25),
    ("ellipse_a", 12.0, 10.0),
    ("ellipse_b", 0.0, 0.5),
])
def test_set_value_clamps(params, name, value, stored):
    assert params.set_value(name, value) == stored
    assert getattr(params, name) == stored


def test_ellipse_axes_never_reach_zero(params):
    params.set_value("ellipse_a", -3.0)
    params.set_value("ellipse_b", 0.0)
    assert params.ellipse_a > 0.0
    assert params.ellipse_b > 0.0


def test_toggle_switches_mode(params):
    assert params.set_value("use_elliptical_orbit", 1) is True
    assert params.mode is OrbitMode.ELLIPTICAL_PARAMETRIC
    params.set_value("use_elliptical_orbit", False)
    assert params.mode is OrbitMode.CIRCULAR_PIVOT_DRIVEN


def test_unknown_field_raises(params):
    with pytest.raises(KeyError):
        params.set_value("sun_radius", 2.0)


def test_distance_for(params):
    params.set_value("earth_orbit_radius", 4.0)
    params.set_value("moon_orbit_radius", 0.5)

    assert params.distance_for(BodyKind.EARTH) == 4.0
    assert params.distance_for("moon") == 0.5
    with pytest.raises(KeyError):
        params.distance_for(BodyKind.SUN)


def test_reset_restores_defaults(params, caplog):
    params.set_value("orbit_speed_scale", 3.0)
    params.set_value("use_elliptical_orbit", True)

    with caplog.at_level(logging.INFO, logger="orrery"):
        params.reset()

    assert params == SimulationParams()
    assert "reset" in caplog.text


def test_changes_are_logged_at_debug(params, caplog):
    with caplog.at_level(logging.DEBUG, logger="orrery.model.state"):
        params.set_value("moon_orbit_radius", 2.0)
        params.set_value("moon_orbit_radius", 2.0)

    assert len([r for r in caplog.records if "moon_orbit_radius" in r.getMessage()]) == 1
