"""Build information and the command that prints it."""

from __future__ import annotations

import argparse
import logging
import platform
from typing import Sequence

log = logging.getLogger(__name__)

BUILD_TIME = ""
GIT_COMMIT = ""
GIT_TAG = ""


def version_string() -> str:
    """Build time, tag, commit and interpreter version, one per line."""
    return (
        f"BuildTime: {BUILD_TIME}\n"
        f"GitTag: {GIT_TAG}\n"
        f"GitCommit: {GIT_COMMIT}\n"
        f"PythonVersion: {platform.python_version()}\n"
    )


def log_version() -> list[str]:
    """Log the build information line by line and return the lines logged."""
    lines = version_string().splitlines()
    for line in lines:
        log.info("%s", line)
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Print the server version."""
    parser = argparse.ArgumentParser(description="show server version")
    parser.add_argument("command", nargs="?", choices=["version"], help="show server version")
    parser.parse_args(argv)
    print(version_string())
    return 0