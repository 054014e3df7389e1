[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simul"
version = "0.1.0"
description = "Pin-level digital logic simulator with gates, latches, memory chips and a microcoded control bus"
requires-python = ">=3.10"
dependencies = []
keywords = ["digital logic", "simulation", "circuit", "TTL", "microcode", "flip-flop"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simul"]

[tool.pytest.ini_options]
addopts = "-ra"
