from __future__ import annotations

from typing import TYPE_CHECKING

from math import pi, tau
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

def deg2rad(degrees: float) -> float:
    return degrees * pi / 180

def wrap_angle(angle: float) -> float:
    """Wrap an angle in radians into [0, 2π). Negative angles wrap upwards."""
    wrapped = angle % tau
    # -1e-17 % tau rounds to tau itself
    return 0.0 if wrapped >= tau else wrapped

def angle_difference(a: float, b: float) -> float:
    """Signed smallest difference a - b, in (-π, π]."""
    d = (a - b) % tau
    return d - tau if d > pi else d

def ellipse_point(a: float, b: float, theta: float) -> npt.NDArray[np.float64]:
    """Point of the parametric ellipse x = a cos θ, z = b sin θ in the XZ plane (y = 0)."""
    return np.array([a * np.cos(theta), 0.0, b * np.sin(theta)], dtype=np.float64)

def ellipse_parameter_towards(a: float, b: float, direction: npt.ArrayLike) -> float:
    """
    Parametric angle θ whose ellipse point lies along `direction` (projected to XZ).

    Solves (a cos θ, b sin θ) ∥ (x, z), i.e. θ = atan2(a·z, b·x).
    A zero direction maps to θ = 0.

    Args:
        a: Semi-axis along X.
        b: Semi-axis along Z.
        direction: Any 3-vector; only its x and z components are used.

    Returns:
        θ in [0, 2π).
    """
    d = np.asarray(direction, dtype=np.float64).reshape(3)
    x, z = float(d[0]), float(d[2])
    if x == 0.0 and z == 0.0:
        return 0.0
    return wrap_angle(float(np.arctan2(a * z, b * x)))

def ellipse_to_polyline(
    a: float,
    b: float,
    n_segments: int
) -> np.ndarray:
    """
    Discretize an ellipse centred at the origin of the XZ plane into an (N, 3) polyline (closed).

    Args:
        a: Semi-axis along X.
        b: Semi-axis along Z.
        n_segments: Number of segments to use for discretization.

    Returns:
        An array of shape (n + 1, 3) with the first point repeated at the end.
    """
    theta = np.linspace(0.0, 2.0 * np.pi, n_segments, endpoint=False)
    pts = np.c_[a * np.cos(theta), np.zeros_like(theta), b * np.sin(theta)]

    # close the ring
    if not np.allclose(pts[0], pts[-1]):
        pts = np.vstack((pts, pts[0]))

    return pts

def circle_to_polyline(radius: float, n_segments: int) -> np.ndarray:
    """Discretize a circle of `radius` in the XZ plane into an (N, 3) closed polyline."""
    return ellipse_to_polyline(radius, radius, n_segments)

def rescale(vector: npt.ArrayLike, magnitude: float, fallback: npt.ArrayLike = (1.0, 0.0, 0.0)) -> npt.NDArray[np.float64]:
    """
    Keep the direction of `vector`, replace its length with `magnitude`.

    A (near) zero vector has no direction; `fallback` is used instead.
    """
    v = np.asarray(vector, dtype=np.float64).reshape(3)
    norm = float(np.linalg.norm(v))
    if norm <= 1e-12:
        v = np.asarray(fallback, dtype=np.float64).reshape(3)
        norm = float(np.linalg.norm(v))
    return v * (magnitude / norm)
