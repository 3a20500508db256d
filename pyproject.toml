[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "partee"
version = "0.1.0"
description = "A small entity-component game engine core: vectors, entities, modules, input events and box physics"
requires-python = ">=3.10"
dependencies = []
keywords = ["game engine", "entity component system", "physics", "collision", "input", "event bus"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["partee*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
