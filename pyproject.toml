[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kate"
version = "0.1.0"
description = "SQL statement builder, query parameter helpers, API result envelope and Redis-based distributed locking"
requires-python = ">=3.10"
keywords = ["sql", "query builder", "mysql", "postgresql", "redis", "distributed lock", "redlock"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "redis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kate"]

[tool.pytest.ini_options]
addopts = "-ra"
