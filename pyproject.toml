[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sectordisk"
version = "0.1.0"
description = "A simulated magnetic disk stored as directories of sector files, with CSV relation storage and simple queries"
requires-python = ">=3.10"
dependencies = []
keywords = ["disk", "simulation", "sectors", "csv", "database", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sectordisk = "sectordisk.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sectordisk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
