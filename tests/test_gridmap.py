import pytest

from gridslam.array2d import Array2D
from gridslam.gridmap import GridMap
from gridslam.harray2d import HierarchicalArray2D
from gridslam.point import Point


def hier(magnitude=2):
    return lambda xs, ys: HierarchicalArray2D(xs, ys, magnitude, float)


def test_with_bounds_dense():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5)
    assert isinstance(m.storage, Array2D)
    assert (m.map_size_x, m.map_size_y) == (8, 8)
    assert m.world2map(m.center) == Point(4, 4)
    assert m.map2world(Point(4, 4)) == m.center


def test_world2map_rounds_half_away_from_zero():
    m = GridMap.with_bounds(Point(0.0, 0.0), -5.0, -5.0, 5.0, 5.0, 1.0)
    assert m.world2map(Point(0.5, -0.5)) == Point(6, 4)


@pytest.mark.parametrize("x,y", [(0.3, -0.7), (1.2, 1.9), (-1.9, 0.0)])
def test_world_map_round_trip(x, y):
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5)
    back = m.map2world(m.world2map(Point(x, y)))
    assert abs(back.x - x) <= 0.25 + 1e-12
    assert abs(back.y - y) <= 0.25 + 1e-12
    assert m.world2map(back) == m.world2map(Point(x, y))


def test_value_unknown_until_allocated():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5, hier(), unknown=-1.0)
    p = Point(1.0, 1.0)
    assert m.value(p) == -1.0
    assert m.cell(p) == 0.0
    assert m.value(p) == 0.0


def test_cell_outside_raises():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5)
    assert not m.is_inside(Point(10.0, 10.0))
    with pytest.raises(IndexError):
        m.cell(Point(10.0, 10.0))
    with pytest.raises(IndexError):
        m.cell(Point(-1, 0))


def test_grow_preserves_values():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5, hier())
    p = Point(1.0, 1.0)
    i = m.world2map(p)
    m.storage.set_cell(i.x, i.y, 0.75)
    assert not m.is_inside(Point(-5.0, -5.0))
    m.grow(-5.0, -5.0, 5.0, 5.0)
    assert m.is_inside(Point(-5.0, -5.0))
    assert m.is_inside(Point(5.0, 5.0))
    assert m.value(p) == 0.75
    assert m.map_size_x % 4 == 0


def test_grow_inside_is_noop():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5, hier())
    before = (m.map_size_x, m.map_size_y, m.size())
    m.grow(-1.0, -1.0, 1.0, 1.0)
    assert (m.map_size_x, m.map_size_y, m.size()) == before


def test_resize_keeps_world_cells():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5, hier())
    p = Point(-1.0, 0.5)
    i = m.world2map(p)
    m.storage.set_cell(i.x, i.y, 0.25)
    m.resize(-4.0, -4.0, 4.0, 4.0)
    assert m.is_inside(Point(-3.9, 3.5))
    assert m.value(p) == 0.25


def test_size_matches_corners():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5)
    lo = m.map2world(Point(0, 0))
    hi = m.map2world(Point(m.map_size_x - 1, m.map_size_y - 1))
    assert m.size() == (lo.x, lo.y, hi.x, hi.y)


def test_with_map_size_and_centered():
    m = GridMap.with_map_size(10, 6, 0.5)
    assert (m.map_size_x, m.map_size_y) == (10, 6)
    assert m.center == Point(0.5 * m.world_size_x, 0.5 * m.world_size_y)
    assert m.world2map(m.center) == Point(5, 3)
    c = GridMap.centered(Point(1.0, 1.0), 4.0, 4.0, 0.5)
    assert c.map_size_x == 8
    assert c.world2map(Point(1.0, 1.0)) == Point(c.map_size_x >> 1, c.map_size_y >> 1)


def test_to_double_array():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5, hier(), unknown=-1.0)
    m.storage.set_cell(2, 3, 0.5)
    arr = m.to_double_array()
    assert (arr.xsize, arr.ysize) == (m.map_size_x - 1, m.map_size_y - 1)
    assert arr.cell(2, 3) == 0.5
    assert arr.cell(5, 5) == m.value(Point(5, 5))


def test_to_double_map():
    m = GridMap.with_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 0.5, hier(), unknown=-1.0)
    m.storage.set_cell(1, 6, 0.5)
    plain = m.to_double_map()
    assert plain.delta == m.delta
    assert plain.map_size_x >= m.map_size_x - 1
    assert plain.storage.cell(1, 6) == 0.5
    assert plain.storage.cell(0, 0) == m.value(Point(0, 0))