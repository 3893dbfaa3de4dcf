"""Closed-form rigid alignment steps for matched point pairs."""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from .point import OrientedPoint, Point

PointPair = Tuple[Point, Point]


def _means(pairs: List[PointPair]) -> Tuple[Point, Point]:
    if not pairs:
        raise ValueError("no point pairs to align")
    factor = 1.0 / len(pairs)
    first = Point(sum(a.x for a, _ in pairs), sum(a.y for a, _ in pairs)) * factor
    second = Point(sum(b.x for _, b in pairs), sum(b.y for _, b in pairs)) * factor
    return first, second


def _finish(theta: float, m1: Point, m2: Point, pairs: List[PointPair]) -> Tuple[OrientedPoint, float]:
    s, c = math.sin(theta), math.cos(theta)
    tx = m2.x - (c * m1.x - s * m1.y)
    ty = m2.y - (s * m1.x + c * m1.y)
    error = 0.0
    for a, b in pairs:
        delta = Point(c * a.x - s * a.y + tx - b.x, s * a.x + c * a.y + ty - b.y)
        error += delta.dot(delta)
    return OrientedPoint(tx, ty, theta), error


def icp_step(pairs: Iterable[PointPair]) -> Tuple[OrientedPoint, float]:
    """The transform taking the first points onto the second, and its squared error."""
    pairs = list(pairs)
    m1, m2 = _means(pairs)
    sxx = sxy = syx = 0.0
    for a, b in pairs:
        f, g = a - m1, b - m2
        sxx += f.x * g.x
        sxy += f.x * g.y
        syx += f.y * g.x
    theta = math.atan2(sxy - syx, sxx + sxy)
    return _finish(theta, m1, m2, pairs)


def icp_nonlinear_step(pairs: Iterable[PointPair]) -> Tuple[OrientedPoint, float]:
    """Like icp_step, with the rotation from averaged bearing differences."""
    pairs = list(pairs)
    m1, m2 = _means(pairs)
    gain = math.sqrt(m1.dot(m1))
    ms = mc = 0.0
    for a, b in pairs:
        f, g = a - m1, b - m2
        dalpha = math.atan2(g.y, g.x) - math.atan2(f.y, f.x)
        ms += gain * math.sin(dalpha)
        mc += gain * math.cos(dalpha)
    theta = math.atan2(ms, mc)
    return _finish(theta, m1, m2, pairs)