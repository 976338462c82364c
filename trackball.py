import math
from dataclasses import dataclass, replace
from functools import partial
from typing import Callable, Dict, Optional, Tuple

import numpy as np

import quaternions
from constants import MAX_ELEVATION, RotationMethod
from projection import BoundingBox, project_pointer

Point = Tuple[float, float]


@dataclass(frozen=True, eq=False)
class DragSession:
    """Anchor data for one drag; discarded on release.

    ``start_position`` is the raw pointer position of the anchor sample and
    ``start_point`` the same sample after speed/inversion, which is what
    gets projected onto the ball.
    """

    box: BoundingBox
    start_position: Point
    start_point: Point
    start_vector: Optional[np.ndarray]
    anchor: np.ndarray


@dataclass(frozen=True)
class AzimuthElevation:
    """Angles for the azel method. Survives between drags."""

    azimuth: float = 0.0
    elevation: float = 0.0
    azimuth_start: float = 0.0
    elevation_start: float = 0.0

    def snapshot(self) -> "AzimuthElevation":
        """Make the live angles the starting point of the next drag."""
        return replace(self, azimuth_start=self.azimuth, elevation_start=self.elevation)


@dataclass(frozen=True)
class Sample:
    """A pointer position plus its delta from the session anchor.

    The delta already has speed and axis inversion applied.
    """

    position: Point
    dx: float
    dy: float

    def point(self, session: DragSession) -> Point:
        return session.start_point[0] + self.dx, session.start_point[1] + self.dy


@dataclass(frozen=True, eq=False)
class Step:
    current: np.ndarray
    session: DragSession
    azel: AzimuthElevation


Handler = Callable[[DragSession, AzimuthElevation, Sample, object], Step]


def begin_drag(method: RotationMethod, box: BoundingBox, position: Point,
               anchor: np.ndarray, options) -> DragSession:
    position = (float(position[0]), float(position[1]))
    start_vector = None
    if method.uses_projection:
        start_vector = project_pointer(position[0], position[1], box, method,
                                       options.ballsize, options.border)
    return DragSession(
        box=box,
        start_position=position,
        start_point=position,
        start_vector=start_vector,
        anchor=anchor,
    )


def make_sample(session: DragSession, position: Point, options) -> Sample:
    dx = (position[0] - session.start_position[0]) * options.speed
    dy = (position[1] - session.start_position[1]) * options.speed
    if options.invert_x:
        dx = -dx
    if options.invert_y:
        dy = -dy
    return Sample((float(position[0]), float(position[1])), dx, dy)


def _trackball_dq(session: DragSession, sample: Sample) -> np.ndarray:
    min_dim = min(session.box.height, session.box.width)
    # screen y drives the x axis and screen x the y axis: the rotation axis
    # is perpendicular to the drag direction
    k = (sample.dy / min_dim, sample.dx / min_dim, 0.0)
    theta = math.sqrt(k[0] * k[0] + k[1] * k[1]) * math.pi / 2.0
    return quaternions.from_scaled_axis(k, theta)


def _advance_azel(session, azel, sample, options):
    scale = math.pi / min(session.box.width, session.box.height)

    azimuth = azel.azimuth_start + sample.dx * scale
    elevation = azel.elevation_start + sample.dy * scale
    if options.clamp_elevation:
        elevation = max(-MAX_ELEVATION, min(MAX_ELEVATION, elevation))

    azel = replace(azel, azimuth=azimuth, elevation=elevation)
    current = quaternions.from_euler(elevation, azimuth, 0.0, "XYZ")
    return Step(current, session, azel)


def _advance_trackball(session, azel, sample, options):
    current = quaternions.multiply(_trackball_dq(session, sample), session.anchor)
    session = replace(session, anchor=current, start_position=sample.position,
                      start_point=sample.point(session))
    return Step(current, session, azel)


def _advance_trackball_no_precession(session, azel, sample, options):
    current = quaternions.multiply(_trackball_dq(session, sample), session.anchor)
    return Step(current, session, azel)


def _ball_dq(method, session, point, options):
    vector = project_pointer(point[0], point[1], session.box, method,
                             options.ballsize, options.border)
    return quaternions.from_vectors(session.start_vector, vector), vector


def _advance_sphere(session, azel, sample, options):
    point = sample.point(session)
    dq, vector = _ball_dq(RotationMethod.SPHERE, session, point, options)
    current = quaternions.multiply(dq, session.anchor)
    session = replace(session, anchor=current, start_vector=vector,
                      start_position=sample.position, start_point=point)
    return Step(current, session, azel)


def _advance_arcball(method, session, azel, sample, options):
    dq, _ = _ball_dq(method, session, sample.point(session), options)
    # twice the arc between the two ball points (Shoemake 1992)
    current = quaternions.multiply(dq, quaternions.multiply(dq, session.anchor))
    return Step(current, session, azel)


HANDLERS: Dict[RotationMethod, Handler] = {
    RotationMethod.AZEL: _advance_azel,
    RotationMethod.TRACKBALL: _advance_trackball,
    RotationMethod.TRACKBALL_NO_PRECESSION: _advance_trackball_no_precession,
    RotationMethod.SPHERE: _advance_sphere,
    RotationMethod.SHOEMAKE: partial(_advance_arcball, RotationMethod.SHOEMAKE),
    RotationMethod.ROUNDED_ARCBALL: partial(_advance_arcball, RotationMethod.ROUNDED_ARCBALL),
    RotationMethod.BELL: partial(_advance_arcball, RotationMethod.BELL),
}


def advance(method: RotationMethod, session: DragSession, azel: AzimuthElevation,
            position: Point, options) -> Optional[Step]:
    """Apply one pointer sample. Returns ``None`` when the sample is a no-op."""
    sample = make_sample(session, position, options)
    if sample.dx == 0 and sample.dy == 0:
        return None
    return HANDLERS[method](session, azel, sample, options)
