import math

import pytest

from gridslam.boundingbox import OrientedBoundingBox
from gridslam.point import Point


def _rectangle(scale=1.0):
    angle = math.pi / 6
    c, s = math.cos(angle), math.sin(angle)
    corners = [(2.0, 1.0), (-2.0, 1.0), (-2.0, -1.0), (2.0, -1.0)]
    return [
        Point(5.0 + scale * (c * x - s * y), 3.0 + scale * (s * x + c * y)) for x, y in corners
    ]


def test_rotated_rectangle_area():
    box = OrientedBoundingBox(_rectangle())
    assert box.area() == pytest.approx(8.0)


def test_corners_coincide_with_rectangle_corners():
    pts = _rectangle()
    box = OrientedBoundingBox(pts)
    for corner in (box.ul, box.ur, box.ll, box.lr):
        assert min(math.hypot(corner.x - p.x, corner.y - p.y) for p in pts) < 1e-9


def test_area_scales_quadratically():
    small = OrientedBoundingBox(_rectangle()).area()
    large = OrientedBoundingBox(_rectangle(3.0)).area()
    assert large == pytest.approx(9.0 * small)


def test_axis_aligned_points_raise():
    with pytest.raises(ValueError):
        OrientedBoundingBox([Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 2.0), Point(4.0, 2.0)])


def test_empty_points_raise():
    with pytest.raises(ValueError):
        OrientedBoundingBox([])