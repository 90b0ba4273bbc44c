[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "th25"
version = "0.2.0"
description = "Virtual radiotherapy linac control core and hardware simulators with safety interlocks"
requires-python = ">=3.10"
dependencies = []
keywords = ["radiotherapy", "simulation", "safety", "interlock", "linac"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["th25"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
