"""Building blocks for grid-based SLAM: poses and movements, grid maps, line traversal, ICP steps, particle filter helpers and statistics."""

__version__ = "0.1.0"