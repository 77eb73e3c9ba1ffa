[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "erdraft"
version = "1.0.0"
description = "Data model for entity-relationship diagrams: entities, fields, relations, undo history, JSON storage and SQL DDL generation"
requires-python = ">=3.10"
dependencies = []
keywords = ["erd", "entity-relationship", "database", "schema", "sql", "ddl", "diagram"]
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
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["erdraft"]

[tool.pytest.ini_options]
addopts = "-ra"
