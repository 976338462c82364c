import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from constants import BELL_THRESHOLD, RotationMethod


@dataclass(frozen=True)
class BoundingBox:
    """Viewport rectangle, top-left origin, y pointing down."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_size(cls, width: float, height: float) -> "BoundingBox":
        return cls(0.0, 0.0, width, height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    @property
    def degenerate(self) -> bool:
        """Too small to normalise pointer positions against."""
        return min(self.width, self.height) <= 0 or max(self.width, self.height) - 1 <= 0


def normalize_pointer(x: float, y: float, box: BoundingBox, ballsize: float) -> Tuple[float, float]:
    """Map a pointer position to ball coordinates, y up, radius ``ballsize``."""
    max_dim = max(box.width, box.height) - 1
    if max_dim <= 0:
        raise ValueError(f"bounding box too small to project onto: {box}")
    px = (2.0 * (x - box.x) - box.width - 1) / max_dim / ballsize
    py = -(2.0 * (y - box.y) - box.height - 1) / max_dim / ballsize
    return px, py


def project(px: float, py: float, method: RotationMethod, ballsize: float, border: float) -> Optional[np.ndarray]:
    """Lift a normalised point onto the method's ball surface.

    Returns ``None`` for methods that do not project (azel and the two
    trackball variants).
    """
    ra = 1.0 + border
    a = border * (1.0 + border / 2.0)
    ri = 2.0 / (ra + 1.0 / ra)

    dist2 = (px * px + py * py) * (ra * ra)
    dist = math.sqrt(dist2)

    if method in (RotationMethod.SPHERE, RotationMethod.SHOEMAKE, RotationMethod.ROUNDED_ARCBALL):
        if dist < ri:
            # sphere cap
            return np.array([px, py, math.sqrt(1.0 - dist2)])
        if dist < ra:
            # rounded skirt between the cap and the rim
            dr = ra - dist
            return np.array([px, py, a - math.sqrt((a + dr) * (a - dr))])
        return np.array([px, py, 0.0])

    if method is RotationMethod.BELL:
        # branch order matters: dist == 0 must stay on the cap
        if dist < BELL_THRESHOLD:
            return np.array([px, py, math.sqrt(1.0 - dist2)])
        return np.array([px, py, 1.0 / (2.0 * dist)])

    return None


def project_pointer(x: float, y: float, box: BoundingBox, method: RotationMethod,
                    ballsize: float, border: float) -> Optional[np.ndarray]:
    px, py = normalize_pointer(x, y, box, ballsize)
    return project(px, py, method, ballsize, border)
