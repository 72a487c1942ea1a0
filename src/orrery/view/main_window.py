"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the Control Panel, the 3D
view and the Status Bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the animation loop, the control panel and the 3D view.
"""
import logging

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QSplitter, QLabel, QMessageBox
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent

from orrery import config
from orrery.controller.animation import AnimationController
from orrery.model.components import World
from orrery.model.state import SimulationParams
from orrery.view.panels.control_panel import SimulationControlPanel
from orrery.view.widgets.scene_view import SceneView

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(
        self,
        world: World,
        params: SimulationParams,
        animation: AnimationController,
    ) -> None:
        super().__init__()
        self.world = world
        self.params = params
        self.animation = animation

        self.setWindowTitle(config.VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Control Panel ---
        self.control_panel = SimulationControlPanel(self.params)
        splitter.addWidget(self.control_panel)

        # --- RIGHT SIDE: 3D Visualization ---
        self.visualizer = SceneView()
        splitter.addWidget(self.visualizer)

        # Initial proportions (1 part sidebar : 4 parts 3D view)
        splitter.setSizes([320, 1080])

        # --- STATUS BAR ---
        self.lbl_mode = QLabel()
        self.lbl_time = QLabel()
        self.lbl_fps = QLabel()
        for lbl in (self.lbl_mode, self.lbl_time, self.lbl_fps):
            self.statusBar().addPermanentWidget(lbl)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # --- SIGNAL CONNECTIONS ---
        self.animation.frame_advanced.connect(self.on_frame_advanced)
        self.animation.paused_changed.connect(self.on_paused_changed)
        self.animation.error_occurred.connect(self.on_animation_error)
        self.control_panel.params_changed.connect(self.on_params_changed)

        # Initial Render
        self.visualizer.build_scene(self.world, self.params)
        self._update_status()

    def _create_actions(self) -> None:
        self.act_pause = QAction("Pause", self)
        self.act_pause.setShortcut("Space")
        self.act_pause.setCheckable(True)
        self.act_pause.toggled.connect(self.animation.set_paused)

        self.act_step = QAction("Step Frame", self)
        self.act_step.setShortcut("Right")
        self.act_step.setEnabled(False)  # Only while paused
        self.act_step.triggered.connect(self.on_step_frame)

        self.act_reset_params = QAction("Reset Parameters", self)
        self.act_reset_params.setShortcut("Ctrl+R")
        self.act_reset_params.triggered.connect(self.control_panel.on_reset_clicked)

        self.act_reset_camera = QAction("Reset Camera", self)
        self.act_reset_camera.triggered.connect(self.on_reset_camera)

        self.act_exit = QAction("Exit", self)
        self.act_exit.setShortcut("Ctrl+Q")
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_exit)

        sim_menu = menu_bar.addMenu("&Simulation")
        sim_menu.addAction(self.act_pause)
        sim_menu.addAction(self.act_step)
        sim_menu.addSeparator()
        sim_menu.addAction(self.act_reset_params)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_reset_camera)

    # --- SLOTS ---

    def on_frame_advanced(self, dt: float) -> None:
        self.visualizer.update_scene(self.world, self.params)
        self._update_status()

    def on_params_changed(self, name: str) -> None:
        # While paused nothing redraws on its own; show the new value immediately.
        if self.animation.is_paused:
            self.animation.step_once(0.0)
        self._update_status()

    def on_paused_changed(self, paused: bool) -> None:
        if self.act_pause.isChecked() != paused:
            self.act_pause.blockSignals(True)
            self.act_pause.setChecked(paused)
            self.act_pause.blockSignals(False)
        self.act_pause.setText("Resume" if paused else "Pause")
        self.act_step.setEnabled(paused)
        self._update_status()

    def on_step_frame(self) -> None:
        self.animation.step_once(config.FRAME_INTERVAL_MS / 1000.0)

    def on_reset_camera(self) -> None:
        self.visualizer.reset_camera()
        self.visualizer.plotter.render()

    def on_animation_error(self, message: str) -> None:
        QMessageBox.critical(self, "Animation Error", f"The animation was stopped:\n{message}")

    # --- HELPER METHODS ---

    def _update_status(self) -> None:
        mode = "Elliptical" if self.params.use_elliptical_orbit else "Circular"
        if self.animation.is_paused:
            mode += " (paused)"
        self.lbl_mode.setText(f"Mode: {mode}")
        self.lbl_time.setText(f"t = {self.animation.scheduler.elapsed:.1f} s")
        self.lbl_fps.setText(f"{self.animation.clock.fps:.0f} FPS")

    def closeEvent(self, event: QCloseEvent, /) -> None:
        self.animation.stop()
        # Close the PyVista plotter safely
        if self.visualizer and self.visualizer.plotter:
            self.visualizer.plotter.close()
        event.accept()
