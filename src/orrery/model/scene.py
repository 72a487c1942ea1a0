"""
Scene Graph (Transform Hierarchy)
=================================
A minimal arena of transform nodes linked by parent indices.

Why is this file needed?
------------------------
1. Hierarchy: Pivots and bodies are nested (Sun -> Earth pivot -> Earth ->
   Moon pivot -> Moon). A child's world placement is its parent's world
   placement composed with its own local transform.
2. Ownership: Nodes live in one list and refer to their parent by index, so
   there are no back-pointers and no reference cycles.

Classes:
    TransformNode: Local translation / rotation / scale and a parent link.
    SceneGraph: The arena plus world-transform resolution.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterator, List, Optional, TYPE_CHECKING

import numpy as np
from scipy.spatial.transform import Rotation

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

NodeId = int


def _zeros() -> npt.NDArray[np.float64]:
    return np.zeros(3, dtype=np.float64)


def _ones() -> npt.NDArray[np.float64]:
    return np.ones(3, dtype=np.float64)


@dataclass
class TransformNode:
    """A spatial entity: local transform relative to the (optional) parent."""
    name: str
    translation: npt.NDArray[np.float64] = field(default_factory=_zeros)
    rotation: Rotation = field(default_factory=Rotation.identity)
    scale: npt.NDArray[np.float64] = field(default_factory=_ones)
    parent: Optional[NodeId] = None

    def local_matrix(self) -> npt.NDArray[np.float64]:
        """4x4 homogeneous matrix T @ R @ S."""
        m = np.eye(4, dtype=np.float64)
        m[:3, :3] = self.rotation.as_matrix() * self.scale[np.newaxis, :]
        m[:3, 3] = self.translation
        return m

    def rotate_y(self, angle_rad: float) -> None:
        """Rotate about the parent's +Y axis (pre-multiplied)."""
        self.rotation = Rotation.from_euler("y", angle_rad) * self.rotation

    def rotate_local_y(self, angle_rad: float) -> None:
        """Rotate about the node's own +Y axis (post-multiplied), keeping any existing tilt."""
        self.rotation = self.rotation * Rotation.from_euler("y", angle_rad)


class SceneGraph:
    """Arena of TransformNodes addressed by integer ids."""

    def __init__(self) -> None:
        self._nodes: List[TransformNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[NodeId]:
        return iter(range(len(self._nodes)))

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self._nodes)

    def create(
        self,
        name: str,
        translation: Optional[npt.ArrayLike] = None,
        rotation: Optional[Rotation] = None,
        scale: Optional[npt.ArrayLike] = None,
        parent: Optional[NodeId] = None,
    ) -> NodeId:
        """Add a node and return its id. The node is attached to `parent` if given."""
        node = TransformNode(name=name)
        if translation is not None:
            node.translation = np.asarray(translation, dtype=np.float64).reshape(3).copy()
        if rotation is not None:
            node.rotation = rotation
        if scale is not None:
            node.scale = np.asarray(scale, dtype=np.float64).reshape(3).copy()

        node_id = len(self._nodes)
        self._nodes.append(node)
        if parent is not None:
            self.attach(node_id, parent)
        return node_id

    def node(self, node_id: NodeId) -> TransformNode:
        if node_id not in self:
            raise KeyError(f"Unknown scene node id {node_id!r}")
        return self._nodes[node_id]

    def attach(self, child: NodeId, parent: NodeId) -> None:
        """Make `parent` the parent of `child`."""
        child_node = self.node(child)
        self.node(parent)

        # Walk up from the new parent; meeting the child means a cycle.
        current: Optional[NodeId] = parent
        while current is not None:
            if current == child:
                raise ValueError(
                    f"Attaching '{child_node.name}' under '{self._nodes[parent].name}' would create a cycle."
                )
            current = self._nodes[current].parent

        child_node.parent = parent
        logger.debug("Attached '%s' under '%s'.", child_node.name, self._nodes[parent].name)

    def detach(self, child: NodeId) -> None:
        self.node(child).parent = None

    def parent_of(self, node_id: NodeId) -> Optional[NodeId]:
        return self.node(node_id).parent

    def children(self, node_id: NodeId) -> List[NodeId]:
        self.node(node_id)
        return [i for i, n in enumerate(self._nodes) if n.parent == node_id]

    def ancestors(self, node_id: NodeId) -> List[NodeId]:
        """Parent chain from the direct parent up to the root."""
        chain: List[NodeId] = []
        current = self.node(node_id).parent
        while current is not None:
            chain.append(current)
            current = self._nodes[current].parent
        return chain

    def local_matrix(self, node_id: NodeId) -> npt.NDArray[np.float64]:
        return self.node(node_id).local_matrix()

    def world_matrix(self, node_id: NodeId) -> npt.NDArray[np.float64]:
        """Compose local matrices from the root down to `node_id`."""
        m = self.local_matrix(node_id)
        for ancestor in self.ancestors(node_id):
            m = self._nodes[ancestor].local_matrix() @ m
        return m

    def world_position(self, node_id: NodeId) -> npt.NDArray[np.float64]:
        return self.world_matrix(node_id)[:3, 3].copy()
