"""Dense two-dimensional cell arrays."""

from __future__ import annotations

import copy as _copy
from enum import IntFlag
from typing import Any, Callable


class AccessibilityState(IntFlag):
    """Whether a cell lies inside a grid and whether its storage exists."""

    OUTSIDE = 0x0
    INSIDE = 0x1
    ALLOCATED = 0x2


class Array2D:
    """A dense grid of cells indexed as ``[x][y]``.

    New cells are made by calling ``factory`` with no arguments.
    """

    def __init__(self, xsize: int = 0, ysize: int = 0, factory: Callable[[], Any] = float):
        self._factory = factory
        if xsize > 0 and ysize > 0:
            self._xsize, self._ysize = xsize, ysize
        else:
            self._xsize, self._ysize = 0, 0
        self._cells = self._blank(self._xsize, self._ysize)

    def _blank(self, xsize: int, ysize: int) -> list:
        return [[self._factory() for _ in range(ysize)] for _ in range(xsize)]

    @property
    def xsize(self) -> int:
        return self._xsize

    @property
    def ysize(self) -> int:
        return self._ysize

    @property
    def patch_magnitude(self) -> int:
        """A dense array has no patches; the magnitude is always 0."""
        return 0

    def clear(self) -> None:
        """Drop every cell and shrink to an empty grid."""
        self._cells = []
        self._xsize = self._ysize = 0

    def resize(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        """Make the grid cover [xmin, xmax) x [ymin, ymax) of the old indexes.

        Cells inside both the old and the new range keep their values; the
        new index of old cell (x, y) is (x - xmin, y - ymin).
        """
        xsize, ysize = xmax - xmin, ymax - ymin
        if xsize < 0 or ysize < 0:
            raise ValueError("resize bounds are inverted")
        newcells = self._blank(xsize, ysize)
        for x in range(max(xmin, 0), min(xmax, self._xsize)):
            column = self._cells[x]
            target = newcells[x - xmin]
            for y in range(max(ymin, 0), min(ymax, self._ysize)):
                target[y - ymin] = column[y]
        self._cells = newcells
        self._xsize, self._ysize = xsize, ysize

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self._xsize and 0 <= y < self._ysize

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside the grid")

    def cell(self, x: int, y: int) -> Any:
        self._check(x, y)
        return self._cells[x][y]

    def set_cell(self, x: int, y: int, value: Any) -> None:
        self._check(x, y)
        self._cells[x][y] = value

    def cell_state(self, x: int, y: int) -> AccessibilityState:
        if self.is_inside(x, y):
            return AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
        return AccessibilityState.OUTSIDE

    def copy(self) -> Array2D:
        """An independent copy; every cell is copied too."""
        clone = Array2D(0, 0, self._factory)
        clone._xsize, clone._ysize = self._xsize, self._ysize
        clone._cells = [[_copy.copy(c) for c in column] for column in self._cells]
        return clone