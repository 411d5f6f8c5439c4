[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tspsolve"
version = "0.1.0"
description = "Travelling salesman heuristics and exact solvers for TSPLIB coordinate problems"
requires-python = ">=3.10"
dependencies = []
keywords = ["tsp", "travelling salesman", "tsplib", "held-karp", "mst", "clustering", "heuristics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tsp-greedy = "tspsolve.greedy:main"
tsp-mst = "tspsolve.mst:main"
tsp-held-karp = "tspsolve.held_karp:main"
tsp-optcheck = "tspsolve.optcheck:main"
tsp-clustering = "tspsolve.clustering:main"

[tool.hatch.build.targets.wheel]
packages = ["tspsolve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
