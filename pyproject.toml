[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pgwire_core"
version = "0.1.0"
description = "Building blocks for an asynchronous PostgreSQL client: errors, SQLSTATE codes, rows, statements, sockets and transactions."
requires-python = ">=3.10"
dependencies = []
keywords = ["postgresql", "postgres", "database", "asyncio", "client", "sqlstate"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
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
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["pgwire_core"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
