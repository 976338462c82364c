"""Tests for projection - pointer normalisation and ball projection."""

from __future__ import annotations

import math

import numpy as np
import pytest

from constants import ROUNDED_ARCBALL_BORDER, RotationMethod
from projection import BoundingBox, normalize_pointer, project, project_pointer

SPHERE_FAMILY = [RotationMethod.SPHERE, RotationMethod.SHOEMAKE, RotationMethod.ROUNDED_ARCBALL]


# ---------------------------------------------------------------------------
# BoundingBox
# ---------------------------------------------------------------------------

class TestBoundingBox:

    def test_edges(self):
        b = BoundingBox(10, 20, 300, 200)
        assert (b.left, b.top, b.right, b.bottom) == (10, 20, 310, 220)

    def test_contains_is_inclusive(self):
        b = BoundingBox(10, 20, 300, 200)
        assert b.contains(10, 20)
        assert b.contains(310, 220)
        assert not b.contains(9.5, 100)
        assert not b.contains(100, 220.5)

    def test_from_size(self):
        assert BoundingBox.from_size(400, 300) == BoundingBox(0, 0, 400, 300)

    @pytest.mark.parametrize("size, degenerate", [
        ((1, 1), True),
        ((0, 300), True),
        ((300, 0), True),
        ((2, 1), False),
        ((400, 300), False),
    ])
    def test_degenerate(self, size, degenerate):
        assert BoundingBox.from_size(*size).degenerate is degenerate


# ---------------------------------------------------------------------------
# normalize_pointer
# ---------------------------------------------------------------------------

class TestNormalizePointer:

    def test_pixel_centre_maps_to_origin(self, box):
        px, py = normalize_pointer(200.5, 200.5, box, 0.75)
        assert px == pytest.approx(0.0)
        assert py == pytest.approx(0.0)

    def test_y_is_flipped(self, box):
        _, py_top = normalize_pointer(200, 0, box, 1.0)
        _, py_bottom = normalize_pointer(200, 400, box, 1.0)
        assert py_top > 0 > py_bottom

    def test_formula(self, box):
        px, py = normalize_pointer(0, 0, box, 1.0)
        assert px == pytest.approx(-401 / 399)
        assert py == pytest.approx(401 / 399)

    def test_ballsize_scales(self, box):
        px1, _ = normalize_pointer(300, 200, box, 1.0)
        px2, _ = normalize_pointer(300, 200, box, 0.5)
        assert px2 == pytest.approx(2 * px1)

    def test_offset_box(self):
        shifted = BoundingBox(100, 50, 400, 400)
        assert normalize_pointer(150, 80, shifted, 0.75) == pytest.approx(
            normalize_pointer(50, 30, BoundingBox.from_size(400, 400), 0.75)
        )

    def test_degenerate_box_rejected(self):
        with pytest.raises(ValueError):
            normalize_pointer(0, 0, BoundingBox.from_size(1, 1), 0.75)


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------

class TestProjectSphereFamily:

    @pytest.mark.parametrize("method", SPHERE_FAMILY[:2])
    @pytest.mark.parametrize("point", [(0.0, 0.0), (0.3, 0.4), (-0.5, 0.2), (0.0, -0.99)])
    def test_inside_unit_disk_lands_on_sphere(self, method, point):
        v = project(point[0], point[1], method, 0.75, 0.0)
        assert v[2] > 0
        assert float(np.dot(v, v)) == pytest.approx(1.0)

    @pytest.mark.parametrize("method", SPHERE_FAMILY[:2])
    def test_outside_unit_disk_clamps_to_equator(self, method):
        v = project(0.9, 0.9, method, 0.75, 0.0)
        np.testing.assert_array_equal(v, [0.9, 0.9, 0.0])

    def test_centre_is_pole(self):
        np.testing.assert_allclose(project(0.0, 0.0, RotationMethod.SHOEMAKE, 0.75, 0.0), [0, 0, 1])

    def test_rounded_skirt_is_continuous(self):
        border = ROUNDED_ARCBALL_BORDER
        ra = 1.0 + border
        ri = 2.0 / (ra + 1.0 / ra)
        r = ri / ra
        inside = project(r - 1e-9, 0.0, RotationMethod.ROUNDED_ARCBALL, 0.75, border)
        outside = project(r + 1e-9, 0.0, RotationMethod.ROUNDED_ARCBALL, 0.75, border)
        assert inside[2] == pytest.approx(outside[2], abs=1e-6)
        assert outside[2] == pytest.approx(5.0 / 13.0, abs=1e-6)

    def test_rounded_skirt_reaches_zero_at_rim(self):
        border = ROUNDED_ARCBALL_BORDER
        # dist is scaled by ra, so the rim sits at px == 1
        v = project(1.0 - 1e-9, 0.0, RotationMethod.ROUNDED_ARCBALL, 0.75, border)
        assert v[2] == pytest.approx(0.0, abs=1e-5)
        far = project(1.2, 0.0, RotationMethod.ROUNDED_ARCBALL, 0.75, border)
        assert far[2] == 0.0


class TestProjectBell:

    def test_cap_below_threshold(self):
        v = project(0.5, 0.0, RotationMethod.BELL, 0.75, 0.0)
        assert v[2] == pytest.approx(math.sqrt(0.75))

    def test_reciprocal_skirt(self):
        v = project(1.0, 0.0, RotationMethod.BELL, 0.75, 0.0)
        assert v[2] == pytest.approx(0.5)
        v = project(3.0, 4.0, RotationMethod.BELL, 0.75, 0.0)
        assert v[2] == pytest.approx(0.1)

    def test_origin_stays_on_cap(self):
        v = project(0.0, 0.0, RotationMethod.BELL, 0.75, 0.0)
        np.testing.assert_allclose(v, [0, 0, 1])
        assert np.all(np.isfinite(v))

    def test_continuous_at_threshold(self):
        t = 1.0 / math.sqrt(2.0)
        below = project(t - 1e-9, 0.0, RotationMethod.BELL, 0.75, 0.0)
        above = project(t + 1e-9, 0.0, RotationMethod.BELL, 0.75, 0.0)
        assert below[2] == pytest.approx(above[2], abs=1e-6)


class TestProjectNonBallMethods:

    @pytest.mark.parametrize("method", [
        RotationMethod.AZEL,
        RotationMethod.TRACKBALL,
        RotationMethod.TRACKBALL_NO_PRECESSION,
    ])
    def test_returns_none(self, method):
        assert project(0.1, 0.1, method, 0.75, 0.0) is None


class TestProjectPointer:

    def test_combines_normalisation_and_projection(self, box):
        v = project_pointer(200.5, 200.5, box, RotationMethod.SPHERE, 0.75, 0.0)
        np.testing.assert_allclose(v, [0, 0, 1], atol=1e-12)
