"""
Entities & Components
=====================
The World is a registry of opaque entity ids plus one table per component
kind (entity id -> component data). Update systems iterate those tables.

Classes:
    BodyKind: Tag of a visible body (Sun / Earth / Moon).
    OrbitMode: Which driver currently positions an orbiting body.
    Orbit: Pivot rotation speed and accumulated angle.
    Spin: Self-rotation speed of a body.
    EllipticalOrbit: Parametric ellipse driver of a body.
    World: Entity registry and component tables, bound to a SceneGraph.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from orrery.model.scene import NodeId, SceneGraph

logger = logging.getLogger(__name__)

EntityId = int


class BodyKind(str, Enum):
    SUN = "sun"
    EARTH = "earth"
    MOON = "moon"


class OrbitMode(Enum):
    CIRCULAR_PIVOT_DRIVEN = "circular"
    ELLIPTICAL_PARAMETRIC = "elliptical"


@dataclass
class Orbit:
    """Attached to a pivot. `angle` stays in [0, 2π)."""
    angular_speed: float  # rad/s, sign = direction
    angle: float = 0.0


@dataclass
class Spin:
    angular_speed: float  # rad/s about the body's local +Y


@dataclass
class EllipticalOrbit:
    """
    Parametric ellipse x = a cos θ, z = b sin θ in the frame of the body's pivot.
    `theta` is the parameter angle, not the true anomaly.
    """
    a: float
    b: float
    angular_speed: float
    theta: float = 0.0
    mode: OrbitMode = OrbitMode.CIRCULAR_PIVOT_DRIVEN

    def __post_init__(self) -> None:
        if self.a <= 0.0 or self.b <= 0.0:
            raise ValueError(f"Ellipse semi-axes must be positive, got a={self.a}, b={self.b}.")


@dataclass
class World:
    """
    Entity registry with typed component tables.
    Every entity owns exactly one scene node.
    """
    scene: SceneGraph = field(default_factory=SceneGraph)

    names: Dict[EntityId, str] = field(default_factory=dict)
    nodes: Dict[EntityId, NodeId] = field(default_factory=dict)
    bodies: Dict[EntityId, BodyKind] = field(default_factory=dict)
    orbits: Dict[EntityId, Orbit] = field(default_factory=dict)
    spins: Dict[EntityId, Spin] = field(default_factory=dict)
    ellipticals: Dict[EntityId, EllipticalOrbit] = field(default_factory=dict)

    _next_id: EntityId = 0

    def spawn(self, name: str, node: NodeId) -> EntityId:
        """Register a new entity bound to an existing scene node."""
        self.scene.node(node)
        if node in self.nodes.values():
            raise ValueError(f"Scene node {node} already belongs to an entity.")
        entity = self._next_id
        self._next_id += 1
        self.names[entity] = name
        self.nodes[entity] = node
        logger.debug("Spawned entity %d '%s' on node %d.", entity, name, node)
        return entity

    def node_of(self, entity: EntityId) -> NodeId:
        if entity not in self.nodes:
            raise KeyError(f"Unknown entity id {entity!r}")
        return self.nodes[entity]

    def entity_of_node(self, node: NodeId) -> Optional[EntityId]:
        for entity, n in self.nodes.items():
            if n == node:
                return entity
        return None

    def body(self, kind: BodyKind) -> EntityId:
        """The (unique) entity tagged with `kind`."""
        for entity, k in self.bodies.items():
            if k is kind:
                return entity
        raise KeyError(f"No body tagged {kind.value!r}")

    def pivot_of(self, body: EntityId) -> Optional[EntityId]:
        """The Orbit-carrying parent entity of `body`, if any."""
        parent = self.scene.parent_of(self.node_of(body))
        if parent is None:
            return None
        entity = self.entity_of_node(parent)
        return entity if entity in self.orbits else None

    def orbiting_pairs(self) -> Iterator[Tuple[EntityId, EntityId]]:
        """(pivot, body) for every pivot whose direct child is a body."""
        for pivot in self.orbits:
            for child in self.scene.children(self.node_of(pivot)):
                entity = self.entity_of_node(child)
                if entity is not None and entity in self.bodies:
                    yield pivot, entity

    def is_elliptical(self, body: EntityId) -> bool:
        e = self.ellipticals.get(body)
        return e is not None and e.mode is OrbitMode.ELLIPTICAL_PARAMETRIC

    def describe(self) -> List[str]:
        """One line per entity, indented by hierarchy depth (for logging)."""
        lines = []
        for entity in sorted(self.nodes):
            depth = len(self.scene.ancestors(self.nodes[entity]))
            tags = [t for t, table in (
                ("body", self.bodies), ("orbit", self.orbits),
                ("spin", self.spins), ("ellipse", self.ellipticals),
            ) if entity in table]
            lines.append(f"{'  ' * depth}{self.names[entity]} [{', '.join(tags)}]")
        return lines
