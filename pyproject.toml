[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eventstream"
version = "1.0.0"
description = "Building blocks for an event streaming client: metadata validation, serialization, partition selection and event data views."
requires-python = ">=3.10"
dependencies = [
    "jsonschema",
]
keywords = ["events", "streaming", "validation", "eventbridge", "partitioning", "serialization"]
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
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["eventstream"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
