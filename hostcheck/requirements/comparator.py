# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Pass/fail decision for a single ini setting.

The setting name picks one of three rules:

  BYTE_SIZE    both values are parsed into bytes, detected must be >= required
  BOOLEAN      detected is "1" only if it is literally "1", otherwise "0",
               and must then equal the required value exactly
  EXACT_STRING detected must equal required

Nothing here raises. Values that don't parse degrade to 0 bytes or to "0",
which simply makes the check fail.

The legacy_exact_match flag reproduces the behavior of the original PHP
checker, where the exact-string branch compared the setting *name* to the
required value. It almost never passes and is only there for parity runs.
"""

import re

from hostcheck.requirements.classification import classify
from hostcheck.requirements.models import SettingKind

_SIZE_PATTERN = re.compile(r"([0-9]+)([KMG])")
_DIGITS_PATTERN = re.compile(r"[0-9]+")

SIZE_MULTIPLIERS: dict[str, int] = {
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
}


def _to_int(digits: str) -> int:
    # int() refuses digit strings past sys.get_int_max_str_digits()
    try:
        return int(digits)
    except ValueError:
        return 0


def parse_byte_size(value: str) -> int:
    """
    Convert a size string like "512M" into a byte count.

    Only an uppercase K, M or G suffix directly after the digits is
    understood. A plain digit string is already bytes. Anything else,
    including "", "-1", "1.5G", "512m" and digit runs too long for int(),
    is 0.
    """
    match = _SIZE_PATTERN.fullmatch(value)
    if match is not None:
        digits, unit = match.groups()
        return _to_int(digits) * SIZE_MULTIPLIERS[unit]

    if _DIGITS_PATTERN.fullmatch(value):
        return _to_int(value)
    return 0


def normalize_flag(value: str) -> str:
    return "1" if value == "1" else "0"


def evaluate(
    setting_name: str,
    detected_value: str,
    required_value: str,
    legacy_exact_match: bool = False,
) -> bool:
    """
    Decide whether the detected value of a setting satisfies the requirement.

    Args:
        setting_name: ini directive name, e.g. "memory_limit".
        detected_value: Raw value read from the runtime ("" when unset).
        required_value: Raw value from the requirements baseline.
        legacy_exact_match: Compare the setting name instead of the detected
                            value for unclassified settings.

    Returns:
        True if the requirement is met.
    """
    kind = classify(setting_name)

    if kind is SettingKind.BYTE_SIZE:
        return parse_byte_size(detected_value) >= parse_byte_size(required_value)

    if kind is SettingKind.BOOLEAN:
        return normalize_flag(detected_value) == required_value

    if legacy_exact_match:
        return setting_name == required_value
    return detected_value == required_value
