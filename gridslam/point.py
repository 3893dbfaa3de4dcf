"""Planar points and oriented poses with the usual pose algebra."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Union

Number = Union[int, float]


def normalize_angle(theta: float) -> float:
    """Bring an angle into the half-open range [-pi, pi)."""
    if -math.pi <= theta < math.pi:
        return theta
    multiplier = int(theta / (2 * math.pi))
    theta = theta - multiplier * 2 * math.pi
    if theta >= math.pi:
        theta -= 2 * math.pi
    if theta < -math.pi:
        theta += 2 * math.pi
    return theta


@dataclass(frozen=True, order=True, slots=True)
class Point:
    """A 2D point; ordering is lexicographic on (x, y)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, other):
        """Scale by a number, or take the dot product with another point."""
        if isinstance(other, Point):
            return self.dot(other)
        if isinstance(other, (int, float)):
            return Point(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float)):
            return Point(self.x * other, self.y * other)
        return NotImplemented

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y


@dataclass(frozen=True, slots=True)
class OrientedPoint:
    """A 2D pose: position plus heading theta in radians."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0

    @classmethod
    def from_point(cls, p: Point) -> OrientedPoint:
        return cls(p.x, p.y, 0.0)

    def position(self) -> Point:
        return Point(self.x, self.y)

    def __add__(self, other: OrientedPoint) -> OrientedPoint:
        if not isinstance(other, OrientedPoint):
            return NotImplemented
        return OrientedPoint(self.x + other.x, self.y + other.y, self.theta + other.theta)

    def __sub__(self, other: OrientedPoint) -> OrientedPoint:
        if not isinstance(other, OrientedPoint):
            return NotImplemented
        return OrientedPoint(self.x - other.x, self.y - other.y, self.theta - other.theta)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return OrientedPoint(self.x * other, self.y * other, self.theta * other)
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def normalize(self) -> OrientedPoint:
        """Return the same pose with its heading in [-pi, pi)."""
        return OrientedPoint(self.x, self.y, normalize_angle(self.theta))

    def rotate(self, alpha: float) -> OrientedPoint:
        """Rotate the pose about the origin by alpha."""
        s, c = math.sin(alpha), math.cos(alpha)
        a = alpha + self.theta
        a = math.atan2(math.sin(a), math.cos(a))
        return OrientedPoint(c * self.x - s * self.y, s * self.x + c * self.y, a)


def absolute_difference(p1: OrientedPoint, p2: OrientedPoint) -> OrientedPoint:
    """Express p1 in the frame of p2."""
    delta = p1 - p2
    dtheta = math.atan2(math.sin(delta.theta), math.cos(delta.theta))
    s, c = math.sin(p2.theta), math.cos(p2.theta)
    return OrientedPoint(c * delta.x + s * delta.y, -s * delta.x + c * delta.y, dtheta)


def absolute_sum(p1: OrientedPoint, p2):
    """Compose p2, given in the frame of p1, into the world frame."""
    s, c = math.sin(p1.theta), math.cos(p1.theta)
    if isinstance(p2, OrientedPoint):
        return OrientedPoint(c * p2.x - s * p2.y, s * p2.x + c * p2.y, p2.theta) + p1
    return Point(c * p2.x - s * p2.y, s * p2.x + c * p2.y) + p1.position()


def point_max(p1, p2):
    """Component-wise maximum of x and y; other fields come from p1."""
    return replace(p1, x=max(p1.x, p2.x), y=max(p1.y, p2.y))


def point_min(p1, p2):
    """Component-wise minimum of x and y; other fields come from p1."""
    return replace(p1, x=min(p1.x, p2.x), y=min(p1.y, p2.y))


def interpolate(p1, t1: float, p2, t2: float, t3: float):
    """Interpolate between p1 at time t1 and p2 at time t2 for time t3."""
    gain = (t3 - t1) / (t2 - t1)
    if isinstance(p1, OrientedPoint):
        x = p1.x + (p2.x - p1.x) * gain
        y = p1.y + (p2.y - p1.y) * gain
        s = math.sin(p1.theta) + math.sin(p2.theta) * gain
        c = math.cos(p1.theta) + math.cos(p2.theta) * gain
        return OrientedPoint(x, y, math.atan2(s, c))
    return p1 + (p2 - p1) * gain


def euclidian_dist(p1, p2) -> float:
    """Planar distance between two points or poses."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def radial_key(origin) -> Callable[[object], float]:
    """Sort key ordering points by their bearing as seen from origin."""

    def key(p) -> float:
        return math.atan2(p.y - origin.y, p.x - origin.x)

    return key