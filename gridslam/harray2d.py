"""Grids stored as lazily allocated square patches."""

from __future__ import annotations

from typing import Any, Callable, FrozenSet, Iterable, Optional

from .array2d import AccessibilityState, Array2D
from .point import Point


def _no_patch() -> Optional[Array2D]:
    return None


class HierarchicalArray2D(Array2D):
    """A grid split into patches of side ``2 ** patch_magnitude``.

    The outer grid holds patches (or None); patches are shared between
    copies until an active area is reallocated with ``alloc_active_area``.
    """

    def __init__(
        self,
        xsize: int,
        ysize: int,
        patch_magnitude: int = 5,
        factory: Callable[[], Any] = float,
    ):
        super().__init__(xsize >> patch_magnitude, ysize >> patch_magnitude, _no_patch)
        self._patch_magnitude = patch_magnitude
        self._cell_factory = factory
        self._active_area: set = set()

    @property
    def patch_magnitude(self) -> int:
        return self._patch_magnitude

    def resize(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        """Resize the patch grid; bounds are in patch coordinates."""
        super().resize(xmin, ymin, xmax, ymax)

    def patch_indexes(self, x: int, y: int) -> Point:
        """The patch holding cell (x, y); (-1, -1) for negative coordinates."""
        if x >= 0 and y >= 0:
            return Point(x >> self._patch_magnitude, y >> self._patch_magnitude)
        return Point(-1, -1)

    def _patch(self, c: Point) -> Optional[Array2D]:
        if not super().is_inside(c.x, c.y):
            return None
        return self._cells[c.x][c.y]

    def is_allocated(self, x: int, y: int) -> bool:
        return self._patch(self.patch_indexes(x, y)) is not None

    def _create_patch(self) -> Array2D:
        side = 1 << self._patch_magnitude
        return Array2D(side, side, self._cell_factory)

    def _local(self, x: int, y: int, c: Point) -> tuple:
        return x - (c.x << self._patch_magnitude), y - (c.y << self._patch_magnitude)

    def _writable_patch(self, x: int, y: int) -> tuple:
        c = self.patch_indexes(x, y)
        if not super().is_inside(c.x, c.y):
            raise IndexError(f"cell ({x}, {y}) is outside the grid")
        patch = self._cells[c.x][c.y]
        if patch is None:
            patch = self._create_patch()
            self._cells[c.x][c.y] = patch
        return patch, c

    def cell(self, x: int, y: int) -> Any:
        """The cell at (x, y), allocating its patch if needed."""
        patch, c = self._writable_patch(x, y)
        return patch.cell(*self._local(x, y, c))

    def peek(self, x: int, y: int) -> Any:
        """The cell at (x, y) without allocating; its patch must exist."""
        c = self.patch_indexes(x, y)
        patch = self._patch(c)
        if patch is None:
            raise IndexError(f"cell ({x}, {y}) is not allocated")
        return patch.cell(*self._local(x, y, c))

    def set_cell(self, x: int, y: int, value: Any) -> None:
        patch, c = self._writable_patch(x, y)
        patch.set_cell(*self._local(x, y, c), value)

    def cell_state(self, x: int, y: int) -> AccessibilityState:
        c = self.patch_indexes(x, y)
        if super().is_inside(c.x, c.y):
            if self._cells[c.x][c.y] is not None:
                return AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
            return AccessibilityState.INSIDE
        return AccessibilityState.OUTSIDE

    def set_active_area(self, area: Iterable[Point], patch_coords: bool = False) -> None:
        """Replace the active area, given in cell or patch coordinates."""
        if patch_coords:
            self._active_area = {Point(p.x, p.y) for p in area}
        else:
            self._active_area = {self.patch_indexes(p.x, p.y) for p in area}

    @property
    def active_area(self) -> FrozenSet[Point]:
        return frozenset(self._active_area)

    def alloc_active_area(self) -> None:
        """Give every active patch storage of its own, copying shared patches."""
        for p in sorted(self._active_area):
            if not super().is_inside(p.x, p.y):
                raise IndexError(f"patch ({p.x}, {p.y}) is outside the grid")
            patch = self._cells[p.x][p.y]
            self._cells[p.x][p.y] = self._create_patch() if patch is None else patch.copy()

    def copy(self) -> HierarchicalArray2D:
        """A copy sharing its patches with this grid; the active area is empty."""
        clone = HierarchicalArray2D(0, 0, self._patch_magnitude, self._cell_factory)
        clone._xsize, clone._ysize = self._xsize, self._ysize
        clone._cells = [list(column) for column in self._cells]
        return clone