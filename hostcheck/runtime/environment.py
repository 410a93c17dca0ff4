# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Facts about the machine hostcheck runs on.

This is the Python side, not the probed PHP runtime. The hostname doubles as
the report hostname when a snapshot doesn't carry one.
"""

import platform
import sys
from typing import NamedTuple

REQUIRED_PYTHON = (3, 11)


class SystemInfo(NamedTuple):
    python_version: str
    platform: str
    architecture: str
    hostname: str


def get_python_version() -> tuple[int, int, int]:
    return sys.version_info[:3]


def check_minimum_python() -> None:
    """
    Refuse to run on an interpreter older than REQUIRED_PYTHON.

    Raises:
        RuntimeError: On Python older than 3.11.
    """
    running = get_python_version()
    if running[:2] < REQUIRED_PYTHON:
        wanted = ".".join(str(part) for part in REQUIRED_PYTHON)
        raise RuntimeError(
            f"hostcheck needs Python {wanted} or newer, "
            f"found {running[0]}.{running[1]}.{running[2]}"
        )


def get_system_info() -> SystemInfo:
    """Describe this machine for the debug log written at bootstrap."""
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
    )
