[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixelcade"
version = "1.0.0"
description = "Small frame-stepped arcade games: tanks, space invaders, a lumberjack ledger, a scripted dialogue scene and a bun-blasting shooter"
requires-python = ">=3.10"
dependencies = []
keywords = ["games", "arcade", "shooter", "space-invaders", "tanks", "dialogue", "game-loop"]
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
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pixelcade"]

[tool.hatch.build.targets.sdist]
include = ["pixelcade", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
