import math
from enum import Enum

EPSILON = 1e-8

DEFAULT_BALLSIZE = 0.75
DEFAULT_SPEED = 1.0

# rounded_arcball always runs with this border, whatever the caller asked for
ROUNDED_ARCBALL_BORDER = 0.5

ELEVATION_MARGIN = 0.01
MAX_ELEVATION = math.pi / 2.0 - ELEVATION_MARGIN

BELL_THRESHOLD = 1.0 / math.sqrt(2.0)


class InvalidRotationMethodError(ValueError):
    pass


class RotationMethod(Enum):
    AZEL = 'azel'
    TRACKBALL = 'trackball'
    TRACKBALL_NO_PRECESSION = 'trackball_no_precession'
    SPHERE = 'sphere'
    SHOEMAKE = 'shoemake'
    ROUNDED_ARCBALL = 'rounded_arcball'
    BELL = 'bell'

    @classmethod
    def parse(cls, value) -> "RotationMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise InvalidRotationMethodError(
                f"unknown rotation method {value!r}, expected one of: {names}"
            ) from None

    @property
    def uses_projection(self) -> bool:
        return self in _PROJECTED


_PROJECTED = frozenset({
    RotationMethod.SPHERE,
    RotationMethod.SHOEMAKE,
    RotationMethod.ROUNDED_ARCBALL,
    RotationMethod.BELL,
})
