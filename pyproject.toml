[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pizzahouse"
version = "0.1.0"
description = "Interactive pizzeria locator with k-d tree spatial queries, neighborhoods and undo"
requires-python = ">=3.10"
dependencies = []
keywords = ["kd-tree", "spatial", "nearest-neighbor", "pizzeria", "geometry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pizzahouse = "pizzahouse.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pizzahouse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
