[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reactlens"
version = "0.1.0"
description = "Functional lenses, reactive cursors and value-oriented state for interactive Python programs"
requires-python = ">=3.10"
dependencies = []
keywords = ["lenses", "cursors", "reactive", "state", "functional", "dataflow"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["reactlens"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
