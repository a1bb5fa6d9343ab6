[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "attrtool"
version = "0.1.0"
description = "Typed hardware attributes: info database parsing, big-endian encoding, Cronus target names and dump line formats"
requires-python = ">=3.10"
dependencies = []
keywords = ["attributes", "device-tree", "cronus", "fapi", "firmware", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["attrtool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
