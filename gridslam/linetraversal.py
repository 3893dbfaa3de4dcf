"""Cells crossed by a straight segment on a grid (Bresenham)."""

from __future__ import annotations

from typing import List

from .point import Point


def grid_line_core(start: Point, end: Point) -> List[Point]:
    """Cells of the segment, ordered from the endpoint with the lower major coordinate."""
    dx = abs(end.x - start.x)
    dy = abs(end.y - start.y)
    points: List[Point] = []
    if dy <= dx:
        d = 2 * dy - dx
        incr1, incr2 = 2 * dy, 2 * (dy - dx)
        if start.x > end.x:
            x, y, ydirflag, xend = end.x, end.y, -1, start.x
        else:
            x, y, ydirflag, xend = start.x, start.y, 1, end.x
        step = 1 if (end.y - start.y) * ydirflag > 0 else -1
        points.append(Point(x, y))
        while x < xend:
            x += 1
            if d < 0:
                d += incr1
            else:
                y += step
                d += incr2
            points.append(Point(x, y))
    else:
        d = 2 * dx - dy
        incr1, incr2 = 2 * dx, 2 * (dx - dy)
        if start.y > end.y:
            x, y, xdirflag, yend = end.x, end.y, -1, start.y
        else:
            x, y, xdirflag, yend = start.x, start.y, 1, end.y
        step = 1 if (end.x - start.x) * xdirflag > 0 else -1
        points.append(Point(x, y))
        while y < yend:
            y += 1
            if d < 0:
                d += incr1
            else:
                x += step
                d += incr2
            points.append(Point(x, y))
    return points


def grid_line(start: Point, end: Point) -> List[Point]:
    """Cells of the segment, ordered from start to end."""
    points = grid_line_core(start, end)
    if points[0] != start:
        points.reverse()
    return points