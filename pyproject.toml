[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minicp"
version = "0.1.0"
description = "Building blocks for constraint programming: reversible state, a propagation queue, matching, automata and depth-first search."
requires-python = ">=3.10"
dependencies = []
keywords = ["constraint programming", "search", "propagation", "trail", "backtracking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minicp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
