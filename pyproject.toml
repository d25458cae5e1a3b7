[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sochaclient"
version = "0.1.0"
description = "Client framework and game logic for the Software Challenge board games Hive (2020) and Blokus (2021)"
requires-python = ">=3.10"
dependencies = []
keywords = ["software-challenge", "hive", "blokus", "board-game", "game-client", "xml-protocol"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sochaclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
