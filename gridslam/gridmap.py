"""Grid maps linking world coordinates to the cells of a storage grid."""

from __future__ import annotations

import math
from numbers import Integral
from typing import Any, Callable, Optional

from .array2d import AccessibilityState, Array2D
from .point import Point, point_max, point_min

StorageFactory = Callable[[int, int], Any]


def _cround(v: float) -> int:
    """Round half away from zero."""
    if v >= 0:
        return int(math.floor(v + 0.5))
    return -int(math.floor(-v + 0.5))


def _default_storage(xsize: int, ysize: int) -> Array2D:
    return Array2D(xsize, ysize, float)


class GridMap:
    """A map of cells of side ``delta`` held in an Array2D-like storage.

    Methods taking ``p`` read a Point with integer coordinates as a cell
    index and any other Point as world coordinates.
    """

    def __init__(
        self,
        storage: Any,
        center: Point,
        world_size_x: float,
        world_size_y: float,
        delta: float,
        size_x2: int,
        size_y2: int,
        unknown: Any = -1.0,
    ):
        self.storage = storage
        self.center = center
        self.world_size_x = world_size_x
        self.world_size_y = world_size_y
        self.delta = delta
        self._size_x2 = size_x2
        self._size_y2 = size_y2
        self.unknown = unknown
        self._update_map_size()

    def _update_map_size(self) -> None:
        self.map_size_x = self.storage.xsize << self.storage.patch_magnitude
        self.map_size_y = self.storage.ysize << self.storage.patch_magnitude

    @classmethod
    def with_map_size(
        cls,
        map_size_x: int,
        map_size_y: int,
        delta: float,
        storage_factory: Optional[StorageFactory] = None,
        unknown: Any = -1.0,
    ) -> GridMap:
        storage = (storage_factory or _default_storage)(map_size_x, map_size_y)
        wx, wy = map_size_x * delta, map_size_y * delta
        m = cls(storage, Point(0.5 * wx, 0.5 * wy), wx, wy, delta, 0, 0, unknown)
        m._size_x2, m._size_y2 = m.map_size_x >> 1, m.map_size_y >> 1
        return m

    @classmethod
    def centered(
        cls,
        center: Point,
        world_size_x: float,
        world_size_y: float,
        delta: float,
        storage_factory: Optional[StorageFactory] = None,
        unknown: Any = -1.0,
    ) -> GridMap:
        storage = (storage_factory or _default_storage)(
            int(math.ceil(world_size_x / delta)), int(math.ceil(world_size_y / delta))
        )
        m = cls(storage, center, world_size_x, world_size_y, delta, 0, 0, unknown)
        m._size_x2, m._size_y2 = m.map_size_x >> 1, m.map_size_y >> 1
        return m

    @classmethod
    def with_bounds(
        cls,
        center: Point,
        xmin: float,
        ymin: float,
        xmax: float,
        ymax: float,
        delta: float,
        storage_factory: Optional[StorageFactory] = None,
        unknown: Any = -1.0,
    ) -> GridMap:
        storage = (storage_factory or _default_storage)(
            int(math.ceil((xmax - xmin) / delta)), int(math.ceil((ymax - ymin) / delta))
        )
        return cls(
            storage,
            center,
            xmax - xmin,
            ymax - ymin,
            delta,
            _cround((center.x - xmin) / delta),
            _cround((center.y - ymin) / delta),
            unknown,
        )

    def _rescale(self, imin: Point, imax: Point, xmin, ymin, xmax, ymax) -> None:
        side = 1 << self.storage.patch_magnitude
        pxmin = math.floor(imin.x / side)
        pxmax = math.ceil(imax.x / side)
        pymin = math.floor(imin.y / side)
        pymax = math.ceil(imax.y / side)
        self.storage.resize(pxmin, pymin, pxmax, pymax)
        self._update_map_size()
        self.world_size_x = xmax - xmin
        self.world_size_y = ymax - ymin
        self._size_x2 -= pxmin * side
        self._size_y2 -= pymin * side

    def resize(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Make the map cover exactly the given world rectangle (patch-aligned)."""
        imin = self.world2map(Point(xmin, ymin))
        imax = self.world2map(Point(xmax, ymax))
        self._rescale(imin, imax, xmin, ymin, xmax, ymax)

    def grow(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Enlarge the map so that it also covers the given world rectangle."""
        imin = self.world2map(Point(xmin, ymin))
        imax = self.world2map(Point(xmax, ymax))
        if self.is_inside(imin) and self.is_inside(imax):
            return
        imin = point_min(imin, Point(0, 0))
        imax = point_max(imax, Point(self.map_size_x - 1, self.map_size_y - 1))
        self._rescale(imin, imax, xmin, ymin, xmax, ymax)

    def world2map(self, p: Point) -> Point:
        return Point(
            _cround((p.x - self.center.x) / self.delta) + self._size_x2,
            _cround((p.y - self.center.y) / self.delta) + self._size_y2,
        )

    def map2world(self, p: Point) -> Point:
        return Point(
            (p.x - self._size_x2) * self.delta, (p.y - self._size_y2) * self.delta
        ) + self.center

    def _index(self, p) -> Point:
        if not isinstance(p, Point):
            p = Point(*p)
        if isinstance(p.x, Integral) and isinstance(p.y, Integral):
            return p
        return self.world2map(p)

    def cell(self, p) -> Any:
        """The cell at p; it must lie inside the map."""
        i = self._index(p)
        if not self.storage.cell_state(i.x, i.y) & AccessibilityState.INSIDE:
            raise IndexError(f"cell ({i.x}, {i.y}) is outside the map")
        return self.storage.cell(i.x, i.y)

    def value(self, p) -> Any:
        """The cell at p, or the unknown value where nothing is allocated."""
        i = self._index(p)
        if self.storage.cell_state(i.x, i.y) & AccessibilityState.ALLOCATED:
            return self.storage.cell(i.x, i.y)
        return self.unknown

    def is_inside(self, p) -> bool:
        i = self._index(p)
        return bool(self.storage.cell_state(i.x, i.y) & AccessibilityState.INSIDE)

    def size(self) -> tuple:
        """World coordinates (xmin, ymin, xmax, ymax) of the corner cells."""
        lo = self.map2world(Point(0, 0))
        hi = self.map2world(Point(self.map_size_x - 1, self.map_size_y - 1))
        return lo.x, lo.y, hi.x, hi.y

    def to_double_array(self) -> Array2D:
        """The cell values as floats, without the last row and column."""
        xs, ys = self.map_size_x - 1, self.map_size_y - 1
        darr = Array2D(xs, ys, float)
        for x in range(xs):
            for y in range(ys):
                darr.set_cell(x, y, float(self.value(Point(x, y))))
        return darr

    def to_double_map(self) -> GridMap:
        """A plain float map holding the cell values of this map."""
        pmin = self.map2world(Point(0, 0))
        pmax = self.map2world(Point(self.map_size_x - 1, self.map_size_y - 1))
        center = (pmax + pmin) * 0.5
        extent = pmax - pmin
        plain = GridMap.centered(center, extent.x, extent.y, self.delta)
        for x in range(self.map_size_x - 1):
            for y in range(self.map_size_y - 1):
                plain.storage.set_cell(x, y, float(self.value(Point(x, y))))
        return plain