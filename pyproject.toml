[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gamesrv"
version = "0.1.0"
description = "Building blocks for a distributed game server: ids, crypto, Redis locks, HTTP plumbing and packet routing"
requires-python = ">=3.10"
keywords = [
    "game-server",
    "snowflake",
    "diffie-hellman",
    "aes",
    "redis",
    "distributed-lock",
    "flask",
]
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
dependencies = [
    "cryptography",
    "redis",
    "pymongo",
    "flask",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gamesrv-version = "gamesrv.version:main"

[tool.hatch.build.targets.wheel]
packages = ["gamesrv"]

[tool.hatch.build.targets.sdist]
include = ["gamesrv", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
