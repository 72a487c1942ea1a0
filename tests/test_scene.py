import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from orrery.model.scene import SceneGraph, TransformNode


@pytest.fixture
def scene():
    return SceneGraph()


def test_world_matrix_composes_parent_first(scene):
    parent = scene.create("parent", translation=(1.0, 0.0, 0.0), rotation=Rotation.from_euler("y", math.pi / 2))
    child = scene.create("child", translation=(2.0, 0.0, 0.0), parent=parent)

    np.testing.assert_allclose(scene.world_position(child), [1.0, 0.0, -2.0], atol=1e-12)


def test_world_matrix_of_root_is_local(scene):
    root = scene.create("root", translation=(0.5, -1.0, 2.0))
    np.testing.assert_array_equal(scene.world_matrix(root), scene.local_matrix(root))


def test_scale_applies_to_children(scene):
    parent = scene.create("parent", scale=(2.0, 2.0, 2.0))
    child = scene.create("child", translation=(1.0, 1.0, 0.0), parent=parent)

    np.testing.assert_allclose(scene.world_position(child), [2.0, 2.0, 0.0])


def test_three_level_chain(scene):
    a = scene.create("a", translation=(1.0, 0.0, 0.0))
    b = scene.create("b", translation=(0.0, 1.0, 0.0), parent=a)
    c = scene.create("c", translation=(0.0, 0.0, 1.0), parent=b)

    np.testing.assert_allclose(scene.world_position(c), [1.0, 1.0, 1.0])
    assert scene.ancestors(c) == [b, a]


def test_children_and_parent(scene):
    root = scene.create("root")
    a = scene.create("a", parent=root)
    b = scene.create("b", parent=root)
    scene.create("grandchild", parent=a)

    assert scene.children(root) == [a, b]
    assert scene.parent_of(a) == root
    assert scene.parent_of(root) is None


def test_attach_rejects_cycles(scene):
    a = scene.create("a")
    b = scene.create("b", parent=a)
    c = scene.create("c", parent=b)

    with pytest.raises(ValueError):
        scene.attach(a, c)
    with pytest.raises(ValueError):
        scene.attach(a, a)
    assert scene.parent_of(a) is None


def test_detach_makes_root(scene):
    a = scene.create("a", translation=(1.0, 0.0, 0.0))
    b = scene.create("b", translation=(1.0, 0.0, 0.0), parent=a)

    scene.detach(b)

    np.testing.assert_allclose(scene.world_position(b), [1.0, 0.0, 0.0])


def test_unknown_ids_raise_key_error(scene):
    scene.create("only")
    with pytest.raises(KeyError):
        scene.node(5)
    with pytest.raises(KeyError):
        scene.world_matrix(-1)
    with pytest.raises(KeyError):
        scene.attach(0, 3)


def test_rotate_y_versus_rotate_local_y():
    tilt = Rotation.from_euler("z", math.pi / 6)
    spin = math.pi / 3

    world_axis = TransformNode("w", rotation=tilt)
    world_axis.rotate_y(spin)
    local_axis = TransformNode("l", rotation=tilt)
    local_axis.rotate_local_y(spin)

    up = np.array([0.0, 1.0, 0.0])
    # Spinning about the node's own axis leaves that axis where the tilt put it
    np.testing.assert_allclose(local_axis.rotation.apply(up), tilt.apply(up), atol=1e-12)
    assert not np.allclose(world_axis.rotation.apply(up), tilt.apply(up))


def test_local_matrix_layout():
    node = TransformNode(
        "n",
        translation=np.array([1.0, 2.0, 3.0]),
        rotation=Rotation.from_euler("y", math.pi / 2),
        scale=np.array([2.0, 1.0, 1.0]),
    )
    m = node.local_matrix()

    np.testing.assert_allclose(m[:3, 3], [1.0, 2.0, 3.0])
    np.testing.assert_allclose(m[3], [0.0, 0.0, 0.0, 1.0])
    # Scaled +X then rotated about +Y lands on -Z
    np.testing.assert_allclose(m @ [1.0, 0.0, 0.0, 0.0], [0.0, 0.0, -2.0, 0.0], atol=1e-12)
