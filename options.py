import logging
from dataclasses import dataclass, field
from typing import Any, Union

import numpy as np

import quaternions
from constants import DEFAULT_BALLSIZE, DEFAULT_SPEED, ROUNDED_ARCBALL_BORDER, RotationMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TrackballOptions:
    """Read-only trackball configuration.

    ``rotation_method`` accepts the enum or its string value. The
    ``rounded_arcball`` method replaces ``border`` with its own constant
    once, here.
    """

    rotation_method: Union[RotationMethod, str] = RotationMethod.TRACKBALL
    ballsize: float = DEFAULT_BALLSIZE
    border: float = 0.0
    clamp_elevation: bool = False
    invert_x: bool = False
    invert_y: bool = False
    speed: float = DEFAULT_SPEED
    q: Any = field(default_factory=quaternions.identity)

    def __post_init__(self):
        method = RotationMethod.parse(self.rotation_method)
        object.__setattr__(self, "rotation_method", method)

        ballsize = float(self.ballsize)
        if not ballsize > 0.0:
            logger.error("Rejected ballsize %r", self.ballsize)
            raise ValueError(f"ballsize must be positive, got {self.ballsize!r}")
        object.__setattr__(self, "ballsize", ballsize)

        speed = float(self.speed)
        if not speed > 0.0:
            logger.error("Rejected speed %r", self.speed)
            raise ValueError(f"speed must be positive, got {self.speed!r}")
        object.__setattr__(self, "speed", speed)

        border = float(self.border)
        if not border >= 0.0:
            logger.error("Rejected border %r", self.border)
            raise ValueError(f"border must be non-negative, got {self.border!r}")
        if method is RotationMethod.ROUNDED_ARCBALL:
            if border not in (0.0, ROUNDED_ARCBALL_BORDER):
                logger.debug("rounded_arcball overrides border %s with %s",
                             border, ROUNDED_ARCBALL_BORDER)
            border = ROUNDED_ARCBALL_BORDER
        object.__setattr__(self, "border", border)

        object.__setattr__(self, "q", quaternions.as_quaternion(self.q))

    @property
    def initial_orientation(self) -> np.ndarray:
        return self.q.copy()
