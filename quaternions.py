# Quaternions are float64 arrays in pyrr [x, y, z, w] layout
from typing import Sequence

import numpy as np
from pyrr import quaternion

from constants import EPSILON


def identity() -> np.ndarray:
    return quaternion.create(dtype=np.float64)


def from_components(w: float, x: float, y: float, z: float) -> np.ndarray:
    """Build a quaternion from scalar-first components."""
    return quaternion.create(x, y, z, w, dtype=np.float64)


def as_quaternion(q: Sequence[float]) -> np.ndarray:
    """Copy any 4-sequence in ``[x, y, z, w]`` order and normalise it."""
    arr = np.asarray(q, dtype=np.float64)
    if arr.shape != (4,):
        raise ValueError(f"quaternion must have 4 components, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("quaternion components must be finite")
    if norm(arr) < EPSILON:
        raise ValueError("quaternion must have non-zero length")
    return normalize(arr)


def multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return quaternion.cross(a, b)


def normalize(q: np.ndarray) -> np.ndarray:
    return quaternion.normalize(np.asarray(q, dtype=np.float64))


def norm(q: np.ndarray) -> float:
    return float(np.linalg.norm(q))


def from_scaled_axis(k: Sequence[float], theta: float) -> np.ndarray:
    """Rotation of ``2*theta`` about the direction of ``k``.

    ``k`` need not be unit length. A zero vector gives the identity.
    """
    k = np.asarray(k, dtype=np.float64)
    length = float(np.linalg.norm(k))
    if length < EPSILON:
        return identity()
    return quaternion.create_from_axis_rotation(k / length, 2.0 * theta, dtype=np.float64)


def from_vectors(u: Sequence[float], v: Sequence[float]) -> np.ndarray:
    """Shortest-arc rotation taking the direction of ``u`` onto ``v``."""
    u = np.asarray(u, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    u_len = np.linalg.norm(u)
    v_len = np.linalg.norm(v)
    if u_len > 0.0:
        u = u / u_len
    if v_len > 0.0:
        v = v / v_len

    dot = float(np.dot(u, v))
    if dot >= 1.0:
        return identity()

    if 1.0 + dot <= EPSILON:
        # antiparallel: half turn about any axis perpendicular to u
        if abs(u[0]) > abs(u[2]):
            return normalize(from_components(0.0, -u[1], u[0], 0.0))
        return normalize(from_components(0.0, 0.0, -u[2], u[1]))

    w = np.cross(u, v)
    return normalize(from_components(dot + 1.0, w[0], w[1], w[2]))


def from_euler(x: float, y: float, z: float, order: str = "XYZ") -> np.ndarray:
    """Euler angles (radians) composed as ``Rx(x) * Ry(y) * Rz(z)``.

    Only the ``XYZ`` order is needed by the rotation methods.
    """
    if order != "XYZ":
        raise ValueError(f"unsupported Euler order: {order!r}")
    qx = quaternion.create_from_x_rotation(x, dtype=np.float64)
    qy = quaternion.create_from_y_rotation(y, dtype=np.float64)
    qz = quaternion.create_from_z_rotation(z, dtype=np.float64)
    return multiply(multiply(qx, qy), qz)


def to_wxyz(q: np.ndarray) -> tuple:
    return (float(q[3]), float(q[0]), float(q[1]), float(q[2]))
