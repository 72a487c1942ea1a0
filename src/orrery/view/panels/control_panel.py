"""
Simulation Control Panel
========================
Sliders and toggles bound to the SimulationParams store.

Why is this file needed?
------------------------
It is the only writer of the parameter store at runtime. Every widget writes
straight into the store (which clamps to config.PARAM_RANGES); the update
systems pick the new values up on the next frame.
"""
from __future__ import annotations

import logging
from typing import Dict

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QGridLayout, QLabel, QSlider, QCheckBox,
    QPushButton, QSizePolicy
)

from orrery import config
from orrery.model.state import SimulationParams

logger = logging.getLogger(__name__)

SLIDER_TICKS: int = 1000


class SimulationControlPanel(QWidget):
    """
    Left-side panel.

    Top: speed scales. Middle: orbit distances. Bottom: elliptical orbit toggle
    and ellipse semi-axes. Emits `params_changed(name)` after each write.
    """
    params_changed = Signal(str)
    reset_requested = Signal()

    def __init__(self, params: SimulationParams, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.params = params
        self._sliders: Dict[str, QSlider] = {}
        self._value_labels: Dict[str, QLabel] = {}
        self._decimals: Dict[str, int] = {}

        root = QVBoxLayout(self)

        # --- Speeds ---
        self.grp_speeds = QGroupBox("Speeds & scales", self)
        grid = QGridLayout(self.grp_speeds)
        grid.setVerticalSpacing(8)
        self._add_slider(grid, 0, "orbit_speed_scale", "Orbit speed ×")
        self._add_slider(grid, 1, "spin_speed_scale", "Spin speed ×")
        root.addWidget(self.grp_speeds)

        # --- Distances ---
        self.grp_distances = QGroupBox("Distances", self)
        grid = QGridLayout(self.grp_distances)
        grid.setVerticalSpacing(8)
        self._add_slider(grid, 0, "earth_orbit_radius", "Earth radius")
        self._add_slider(grid, 1, "moon_orbit_radius", "Moon radius")
        root.addWidget(self.grp_distances)

        # --- Elliptical orbit ---
        self.grp_ellipse = QGroupBox("Elliptical orbit", self)
        grid = QGridLayout(self.grp_ellipse)
        grid.setVerticalSpacing(8)
        self.chk_elliptical = QCheckBox("Use elliptical orbit for Earth", self.grp_ellipse)
        self.chk_elliptical.setChecked(self.params.use_elliptical_orbit)
        self.chk_elliptical.toggled.connect(self.on_elliptical_toggled)
        grid.addWidget(self.chk_elliptical, 0, 0, 1, 3)
        self._add_slider(grid, 1, "ellipse_a", "Semi-axis a")
        self._add_slider(grid, 2, "ellipse_b", "Semi-axis b")
        hint = QLabel("Ellipse uses x = a cos(θ), z = b sin(θ).\nFor simplicity, timing is parametric.", self.grp_ellipse)
        hint.setStyleSheet("color: gray;")
        hint.setWordWrap(True)
        grid.addWidget(hint, 3, 0, 1, 3)
        root.addWidget(self.grp_ellipse)

        # --- Actions ---
        self.btn_reset = QPushButton("Reset parameters", self)
        self.btn_reset.setMinimumHeight(32)
        self.btn_reset.clicked.connect(self.on_reset_clicked)
        root.addWidget(self.btn_reset)

        root.addStretch()

    # ---- utilities ----

    def _add_slider(self, grid: QGridLayout, row: int, key: str, label: str, decimals: int = 2) -> QSlider:
        grid.addWidget(QLabel(label, self), row, 0)

        slider = QSlider(Qt.Orientation.Horizontal, self)
        slider.setRange(0, SLIDER_TICKS)
        slider.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        slider.setValue(self._to_ticks(key, getattr(self.params, key)))
        slider.valueChanged.connect(lambda ticks, k=key: self._on_slider_moved(k, ticks))
        grid.addWidget(slider, row, 1)

        value_label = QLabel(self)
        value_label.setMinimumWidth(48)
        value_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        grid.addWidget(value_label, row, 2)

        self._sliders[key] = slider
        self._value_labels[key] = value_label
        self._decimals[key] = decimals
        self._update_value_label(key)
        return slider

    @staticmethod
    def _to_ticks(key: str, value: float) -> int:
        lo, hi = config.PARAM_RANGES[key]
        return int(round((value - lo) / (hi - lo) * SLIDER_TICKS))

    @staticmethod
    def _from_ticks(key: str, ticks: int) -> float:
        lo, hi = config.PARAM_RANGES[key]
        return lo + (hi - lo) * ticks / SLIDER_TICKS

    def _update_value_label(self, key: str) -> None:
        self._value_labels[key].setText(f"{getattr(self.params, key):.{self._decimals[key]}f}")

    # ---- slots ----

    def _on_slider_moved(self, key: str, ticks: int) -> None:
        self.params.set_value(key, self._from_ticks(key, ticks))
        self._update_value_label(key)
        self.params_changed.emit(key)

    @Slot(bool)
    def on_elliptical_toggled(self, checked: bool) -> None:
        self.params.set_value("use_elliptical_orbit", checked)
        logger.info("Elliptical orbit %s.", "enabled" if checked else "disabled")
        self.params_changed.emit("use_elliptical_orbit")

    @Slot()
    def on_reset_clicked(self) -> None:
        self.params.reset()
        self.load_from_state()
        self.reset_requested.emit()
        self.params_changed.emit("")

    def load_from_state(self) -> None:
        """Re-read every widget from the store without echoing writes back."""
        for key, slider in self._sliders.items():
            slider.blockSignals(True)
            try:
                slider.setValue(self._to_ticks(key, getattr(self.params, key)))
            finally:
                slider.blockSignals(False)
            self._update_value_label(key)

        self.chk_elliptical.blockSignals(True)
        try:
            self.chk_elliptical.setChecked(self.params.use_elliptical_orbit)
        finally:
            self.chk_elliptical.blockSignals(False)
