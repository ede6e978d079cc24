[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "survey"
version = "2.0.0"
description = "Interactive terminal prompts: a filterable select list, with answer validation and transformation"
requires-python = ">=3.10"
dependencies = []
keywords = ["prompt", "terminal", "cli", "interactive", "select", "survey"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["survey"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
