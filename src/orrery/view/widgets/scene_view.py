"""
3D Visualization Widget (PyVista Wrapper)
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import numpy as np
import numpy.typing as npt
import pyvista as pv
from pyvistaqt import QtInteractor
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QStyle
from PySide6.QtGui import QCloseEvent, QResizeEvent

from orrery import config
from orrery.model.components import BodyKind, EntityId, World
from orrery.model.geometry_utils import circle_to_polyline, ellipse_to_polyline
from orrery.model.state import SimulationParams

logger = logging.getLogger(__name__)


def polyline_to_polydata(ring: npt.NDArray[np.float64]) -> pv.PolyData:
    """Convert an (N, 3) array of points to a PolyData line."""
    ring = np.asarray(ring, dtype=np.float64).reshape(-1, 3)
    n = ring.shape[0]
    pd = pv.PolyData(ring.copy())
    pd.lines = np.hstack([[n], np.arange(n, dtype=np.int_)])
    return pd


class SceneView(QWidget):
    """
    Draws the bodies of a World and follows their world transforms.

    Meshes are built once; each frame only the actors' user matrices change.
    Orbit guides are rebuilt in place when distances or the ellipse change.
    """
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Actors state ---
        self._body_actors: Dict[EntityId, pv.Actor] = {}
        self._axis_actor: Optional[pv.Actor] = None
        self._axis_owner: Optional[EntityId] = None
        self._guide_actors: Dict[EntityId, pv.Actor] = {}
        self._guide_meshes: Dict[EntityId, pv.PolyData] = {}

        # Guide cache signature (distances + ellipse shape + mode)
        self._cached_guide_signature: Optional[Tuple] = None

        # --- Visibility state ---
        self._visible_guides: bool = True
        self._visible_axis: bool = True
        self._setup_overlay_controls()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def build_scene(self, world: World, params: SimulationParams) -> None:
        """Create one actor per body, the Earth axis and one orbit guide per pivot."""
        self.clear_scene()

        for entity, kind in world.bodies.items():
            style = config.BODY_STYLES[kind.value]
            sphere = pv.Sphere(radius=style.radius, theta_resolution=48, phi_resolution=48)
            if style.emissive:
                # No shading: the Sun is its own light source
                actor = self.plotter.add_mesh(sphere, color=style.color, lighting=False, pickable=False)
            else:
                actor = self.plotter.add_mesh(
                    sphere, color=style.color, smooth_shading=True, ambient=0.15, pickable=False
                )
            self._body_actors[entity] = actor

            if kind is BodyKind.EARTH:
                # Axis line makes tilt and spin visible
                half = 1.6 * style.radius
                axis = pv.Line((0.0, -half, 0.0), (0.0, half, 0.0))
                self._axis_actor = self.plotter.add_mesh(axis, color="white", line_width=2, pickable=False)
                self._axis_owner = entity

        for pivot in world.orbits:
            mesh = polyline_to_polydata(circle_to_polyline(1.0, config.ORBIT_GUIDE_SEGMENTS))
            self._guide_meshes[pivot] = mesh
            self._guide_actors[pivot] = self.plotter.add_mesh(
                mesh, color=config.ORBIT_GUIDE_COLOR, line_width=1, opacity=0.8, pickable=False
            )

        self._cached_guide_signature = None
        self.update_scene(world, params)
        self.reset_camera()
        logger.info("3D scene built with %d bodies and %d orbit guides.",
                    len(self._body_actors), len(self._guide_actors))

    def update_scene(self, world: World, params: SimulationParams) -> None:
        """Push the current world transforms into the actors and render."""
        self._update_guides(world, params)

        for entity, actor in self._body_actors.items():
            actor.user_matrix = world.scene.world_matrix(world.node_of(entity))

        if self._axis_actor is not None and self._axis_owner is not None:
            self._axis_actor.user_matrix = world.scene.world_matrix(world.node_of(self._axis_owner))

        for pivot, actor in self._guide_actors.items():
            actor.user_matrix = world.scene.world_matrix(world.node_of(pivot))

        self._apply_visibility()
        self.plotter.render()

    def reset_camera(self) -> None:
        cam = self.plotter.camera
        cam.position = config.CAMERA_POSITION
        cam.focal_point = config.CAMERA_FOCAL_POINT
        cam.up = config.CAMERA_UP
        self.plotter.reset_camera_clipping_range()

    def clear_scene(self) -> None:
        for actor in [*self._body_actors.values(), *self._guide_actors.values()]:
            self.plotter.remove_actor(actor)
        if self._axis_actor is not None:
            self.plotter.remove_actor(self._axis_actor)
        self._body_actors.clear()
        self._guide_actors.clear()
        self._guide_meshes.clear()
        self._axis_actor = None
        self._axis_owner = None

    def set_guides_visible(self, visible: bool, render: bool = True) -> None:
        """
        Public slot to toggle orbit guide visibility.
        Args:
            visible: True to show, False to hide.
            render: If True, triggers a re-render immediately. Set False for batch updates.
        """
        self._visible_guides = visible
        if self.btn_vis_guides.isChecked() != visible:
            self.btn_vis_guides.blockSignals(True)
            self.btn_vis_guides.setChecked(visible)
            self.btn_vis_guides.blockSignals(False)

        self._apply_visibility()
        if render:
            self.plotter.render()

    def set_axis_visible(self, visible: bool, render: bool = True) -> None:
        self._visible_axis = visible
        if self.btn_vis_axis.isChecked() != visible:
            self.btn_vis_axis.blockSignals(True)
            self.btn_vis_axis.setChecked(visible)
            self.btn_vis_axis.blockSignals(False)

        self._apply_visibility()
        if render:
            self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _update_guides(self, world: World, params: SimulationParams) -> None:
        """Rewrite guide points only if a distance or the ellipse changed."""
        signature = (
            params.earth_orbit_radius,
            params.moon_orbit_radius,
            params.ellipse_a,
            params.ellipse_b,
            tuple(world.is_elliptical(body) for body in world.ellipticals),
        )
        if signature == self._cached_guide_signature:
            return
        self._cached_guide_signature = signature

        for pivot, body in world.orbiting_pairs():
            mesh = self._guide_meshes.get(pivot)
            if mesh is None:
                continue
            if world.is_elliptical(body):
                pts = ellipse_to_polyline(params.ellipse_a, params.ellipse_b, config.ORBIT_GUIDE_SEGMENTS)
            else:
                pts = circle_to_polyline(params.distance_for(world.bodies[body]), config.ORBIT_GUIDE_SEGMENTS)
            # Same point count: update in place instead of re-adding the actor
            mesh.points = pts
        logger.debug("Orbit guides rebuilt for signature %s.", signature)

    def _apply_visibility(self) -> None:
        for actor in self._guide_actors.values():
            actor.SetVisibility(self._visible_guides)
        if self._axis_actor is not None:
            self._axis_actor.SetVisibility(self._visible_axis)

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(config.BACKGROUND_COLOR)
        self.plotter.remove_all_lights()
        # Directional light to mimic sunlight (parallel rays)
        sunlight = pv.Light(position=(1.0, 1.0, 1.0), focal_point=(0.0, 0.0, 0.0), intensity=1.0)
        sunlight.positional = False
        self.plotter.add_light(sunlight)

    def _setup_overlay_controls(self) -> None:
        """Floating toggle buttons."""
        self.overlay_widget = QFrame(self)
        self.overlay_widget.setStyleSheet("""
            QFrame { background-color: rgba(255, 255, 255, 200); border-radius: 6px; border: 1px solid #ccc; }
            QPushButton { background-color: transparent; border: none; padding: 4px; }
            QPushButton:checked { background-color: rgba(0, 120, 215, 50); border: 1px solid #0078D7; border-radius: 3px; }
            QPushButton:hover { background-color: rgba(0, 0, 0, 10); }
        """)

        layout = QHBoxLayout(self.overlay_widget)
        layout.setContentsMargins(4, 4, 4, 4)

        def make_btn(icon, slot, tooltip, default_state=True):
            btn = QPushButton()
            btn.setIcon(self.style().standardIcon(icon))
            btn.setCheckable(True)
            btn.setChecked(default_state)
            btn.setToolTip(tooltip)
            btn.toggled.connect(slot)
            layout.addWidget(btn)
            return btn

        self.btn_vis_guides = make_btn(QStyle.SP_BrowserReload, self.set_guides_visible, "Show orbit guides")
        self.btn_vis_axis = make_btn(QStyle.SP_ArrowUp, self.set_axis_visible, "Show Earth axis")

        self.btn_reset_cam = QPushButton()
        self.btn_reset_cam.setIcon(self.style().standardIcon(QStyle.SP_DialogResetButton))
        self.btn_reset_cam.setToolTip("Reset camera")
        self.btn_reset_cam.clicked.connect(self._on_reset_camera_clicked)
        layout.addWidget(self.btn_reset_cam)

        self._visible_guides = self.btn_vis_guides.isChecked()
        self._visible_axis = self.btn_vis_axis.isChecked()

        self.overlay_widget.adjustSize()

    def _on_reset_camera_clicked(self) -> None:
        self.reset_camera()
        self.plotter.render()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        # Keep the overlay in the top-right corner
        margin = 8
        self.overlay_widget.move(self.width() - self.overlay_widget.width() - margin, margin)
        self.overlay_widget.raise_()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
