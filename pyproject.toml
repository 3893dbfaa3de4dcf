[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridslam"
version = "0.1.0"
description = "Building blocks for grid-based SLAM: poses, occupancy grids, scan geometry, particle filter helpers and statistics."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["slam", "robotics", "occupancy-grid", "particle-filter", "mapping", "icp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gridslam"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
