# gridslam

Building blocks for grid-based SLAM (simultaneous localisation and mapping), written in Python. The only outside dependency is numpy.

## What is inside

- `gridslam.point`
  - `Point` and `OrientedPoint`: immutable points and poses with arithmetic.
  - `Point * Point` gives the dot product.
  - `normalize_angle` brings an angle into [-pi, pi).
  - Also `absolute_difference`, `absolute_sum`, `point_min`, `point_max`, `interpolate`, `euclidian_dist` and `radial_key`, a sort key by bearing.
- `gridslam.movement`
  - `FSRMovement` is a forward / sideward / rotate motion.
  - It has `between`, `compose`, `invert` and `move`.
  - The static helpers include `frame_transformation`.
- `gridslam.stat`
  - A seedable module-level generator, set with `seed`.
  - `sample_gaussian` (polar Box-Muller), `sample_uniform_int`, `sample_uniform_double`, `eval_gaussian` and `eval_log_gaussian`.
  - `Covariance3`, `EigenCovariance3` (eigen-decomposition with numpy, with `rotate` and `sample`) and `Gaussian3` (`eval`, `compute_from_samples`).
  - `compute_gaussian_from_samples` fits a Gaussian to poses, with or without weights.
- `gridslam.array2d`
  - `Array2D` is a dense `[x][y]` cell grid with `resize`, `cell`, `set_cell`, `cell_state` and `copy`.
  - `AccessibilityState` flags report whether a cell is inside the grid and allocated.
- `gridslam.harray2d`
  - `HierarchicalArray2D` is a grid of lazily allocated square patches.
  - Patches are shared between copies until `alloc_active_area` gives the active patches storage of their own.
- `gridslam.gridmap`
  - `GridMap` maps world coordinates onto a grid store.
  - It has `world2map`, `map2world`, `cell`, `value`, `is_inside`, `resize`, `grow`, `to_double_array` and `to_double_map`.
  - `value` returns the map's unknown value for unallocated cells.
  - A `Point` with integer coordinates is read as a cell index; any other `Point` is read as world coordinates.
- `gridslam.smmap`
  - `PointAccumulator` occupancy cells record hits and visits, with `mean`, `float()` occupancy and `entropy`.
  - `make_scan_matcher_map` builds a patch-allocated map of them.
- `gridslam.linetraversal`: `grid_line` and `grid_line_core` list the grid cells along a segment (Bresenham).
- `gridslam.icp`: `icp_step` and `icp_nonlinear_step` return a rigid transform for matched point pairs together with its squared error.
- `gridslam.dmatrix`
  - `DMatrix` is a small dense matrix with `det`, `inv`, `transpose`, `identity` and `from_rows`, plus `+`, `-` and `*`.
  - Errors are raised as `MatrixError` subclasses.
- `gridslam.boundingbox`: `OrientedBoundingBox` is the box along the principal axes of a point set, with corners `ul`, `ur`, `ll`, `lr` and an `area()` method.
- `gridslam.pgm`: `write_pgm` writes `matrix[x][y]` values in [0, 1] to a binary stream as a P5 image.
- `gridslam.particlefilter`
  - Weight helpers: `to_normal_form`, `to_log_form`, `normalize_weights`, `normalize`, `neff` and `rle`.
  - Resampling: `resample_indexes` does systematic resampling; `repeat_indexes` and `repeat_indexes_into` apply the result.
  - `UniformResampler`, `Evolver` and `AuxiliaryEvolver`.
- `gridslam.datasmoother`
  - `DataSmoother` is a Parzen-window density over weighted 1D samples.
  - Sampling: `sample`, `sample_multiple`, `sample_numeric`.
  - Analysis: `approx_gauss`, `cramer_von_mises_to_gauss`, `kld_to_gauss`.
  - Text dumps: `dump_data`, `dump_smoothed_data`.
- `gridslam.memusage`
  - `print_mem_usage` writes the process's `VmData` and `VmSize` from `/proc/<pid>/status`, or from a path you give it.
  - It writes nothing when that file cannot be read.
  - `parse_mem_status` parses such text.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from gridslam.point import OrientedPoint, Point
from gridslam.movement import FSRMovement
from gridslam.linetraversal import grid_line

start = OrientedPoint(0.0, 0.0, 0.0)
goal = OrientedPoint(1.0, 1.0, 1.57)
move = FSRMovement.between(start, goal)
print(move.move(start))          # the goal pose again

cells = grid_line(Point(0, 0), Point(5, 2))
print([(c.x, c.y) for c in cells])
```

All random draws in `gridslam.stat`, and in `gridslam.datasmoother`, which uses it, come from one module-level generator. Call `gridslam.stat.seed(value)` to make runs repeatable. `resample_indexes` and `UniformResampler` take their own `random.Random` if one is passed.

## What it does not do

This is a library of parts, not a mapping program. It does not cover the following:

- It has no scan matcher and no particle-filter SLAM processor tying these parts together.
- It cannot read sensor logs or range-sensor configurations.
- It has no graphical viewer and no command-line tool.
- Maps live only in memory. Apart from `write_pgm`, nothing saves or loads them.