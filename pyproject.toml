[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xbundle"
version = "0.1.0"
description = "Maven version ranges, POM parsing and dependency resolution, plus PRI resource map and schema sections"
requires-python = ">=3.10"
dependencies = []
keywords = ["maven", "dependency-resolution", "version-range", "pom", "pri", "resources"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xbundle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
