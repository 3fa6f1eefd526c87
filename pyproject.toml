[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "radarmap"
version = "0.1.0"
description = "Transverse Mercator projection, layered map file handling and a simple air traffic radar model"
requires-python = ">=3.10"
dependencies = []
keywords = ["gis", "transverse-mercator", "bessel", "radar", "air-traffic", "map"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
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
dat2map = "radarmap.datmap:main"

[tool.hatch.build.targets.wheel]
packages = ["radarmap"]

[tool.pytest.ini_options]
addopts = "-ra"
