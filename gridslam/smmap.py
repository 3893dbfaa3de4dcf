"""Occupancy cells that accumulate beam endpoints, and the scan-matcher map."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .gridmap import GridMap
from .harray2d import HierarchicalArray2D
from .point import Point

SIGHT_INC = 1
PATCH_MAGNITUDE = 5


@dataclass
class PointAccumulator:
    """A map cell counting hits and visits and summing the hit positions."""

    acc: Point = field(default_factory=Point)
    n: int = 0
    visits: int = 0

    def update(self, value: bool, p: Point = Point(0.0, 0.0)) -> None:
        """Record a beam ending in this cell (value true) or passing through it."""
        if value:
            self.acc = Point(self.acc.x + p.x, self.acc.y + p.y)
            self.n += 1
            self.visits += SIGHT_INC
        else:
            self.visits += 1

    def mean(self) -> Point:
        """The mean hit position; NaN coordinates when there is no hit."""
        if self.n == 0:
            return Point(math.nan, math.nan)
        return (1.0 / self.n) * self.acc

    def __float__(self) -> float:
        """Occupancy probability, or -1 for a cell never visited."""
        if not self.visits:
            return -1.0
        return self.n * SIGHT_INC / self.visits

    def add(self, other: PointAccumulator) -> None:
        """Merge the counts of another cell into this one."""
        self.acc = self.acc + other.acc
        self.n += other.n
        self.visits += other.visits

    def entropy(self) -> float:
        if not self.visits:
            return -math.log(0.5)
        if self.n == self.visits or self.n == 0:
            return 0.0
        x = self.n * SIGHT_INC / self.visits
        return -(x * math.log(x) + (1 - x) * math.log(1 - x))


def _storage(xsize: int, ysize: int) -> HierarchicalArray2D:
    return HierarchicalArray2D(xsize, ysize, PATCH_MAGNITUDE, PointAccumulator)


def make_scan_matcher_map(
    center: Point, xmin: float, ymin: float, xmax: float, ymax: float, delta: float
) -> GridMap:
    """A map of PointAccumulator cells in lazily allocated patches."""
    return GridMap.with_bounds(
        center, xmin, ymin, xmax, ymax, delta, storage_factory=_storage, unknown=PointAccumulator()
    )