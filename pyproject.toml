[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dialoguetree"
version = "0.1.0"
description = "Branching dialogue trees with speakers, conditions, events and visit records for games"
requires-python = ">=3.10"
dependencies = []
keywords = ["dialogue", "dialogue-tree", "games", "branching", "narrative"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dialoguetree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
