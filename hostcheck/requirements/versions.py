# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime version ordering.

Distribution builds of PHP report versions like "8.1.2-1ubuntu2.14" or
"7.4.33+deb11". Only the leading dotted numeric run matters for the minimum
version check, so that's all we parse.
"""

import re

_VERSION_PREFIX = re.compile(r"[0-9]+(?:\.[0-9]+)*")


def parse_version(version: str) -> tuple[int, ...]:
    """
    Extract the numeric components of a version string.

    Returns an empty tuple when the string doesn't start with a digit.
    """
    match = _VERSION_PREFIX.match(version.strip())
    if match is None:
        return ()
    return tuple(int(part) for part in match.group(0).split("."))


def version_satisfies(detected: str, required: str) -> bool:
    """True if detected >= required. An unparseable detected version never satisfies."""
    detected_parts = parse_version(detected)
    required_parts = parse_version(required)
    if not detected_parts:
        return False

    width = max(len(detected_parts), len(required_parts))
    padded_detected = detected_parts + (0,) * (width - len(detected_parts))
    padded_required = required_parts + (0,) * (width - len(required_parts))
    return padded_detected >= padded_required
