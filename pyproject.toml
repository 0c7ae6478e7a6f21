[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sdfshape"
version = "0.1.0"
description = "Vector shapes, edge coloring and error correction for multi-channel signed distance fields"
requires-python = ">=3.10"
keywords = ["msdf", "signed distance field", "font rendering", "vector shapes", "edge coloring"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sdfshape"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
