import pytest

from orrery.model.components import BodyKind, EllipticalOrbit, OrbitMode, World


def test_spawn_assigns_distinct_ids():
    world = World()
    a = world.spawn("a", world.scene.create("a"))
    b = world.spawn("b", world.scene.create("b"))

    assert a != b
    assert world.names == {a: "a", b: "b"}
    assert world.entity_of_node(world.node_of(b)) == b


def test_node_cannot_belong_to_two_entities():
    world = World()
    node = world.scene.create("shared")
    world.spawn("first", node)
    with pytest.raises(ValueError):
        world.spawn("second", node)


def test_spawn_on_unknown_node():
    with pytest.raises(KeyError):
        World().spawn("ghost", 3)


def test_lookups_raise_for_unknown_entities():
    world = World()
    with pytest.raises(KeyError):
        world.node_of(42)
    with pytest.raises(KeyError):
        world.body(BodyKind.MOON)


@pytest.mark.parametrize("a, b", [(0.0, 1.0), (1.0, -2.0)])
def test_ellipse_needs_positive_axes(a, b):
    with pytest.raises(ValueError):
        EllipticalOrbit(a=a, b=b, angular_speed=1.0)


def test_is_elliptical_follows_mode(solar_system):
    earth = solar_system.body(BodyKind.EARTH)
    assert not solar_system.is_elliptical(earth)
    solar_system.ellipticals[earth].mode = OrbitMode.ELLIPTICAL_PARAMETRIC
    assert solar_system.is_elliptical(earth)
    assert not solar_system.is_elliptical(solar_system.body(BodyKind.MOON))


def test_describe_indents_by_depth(solar_system):
    lines = solar_system.describe()
    assert lines[0] == "Sun [body, spin]"
    assert lines[-1] == "        Moon [body, spin]"
