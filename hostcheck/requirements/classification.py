# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Static classification of known ini settings.

The comparator needs to know whether a setting holds a byte size, an on/off
flag or an arbitrary string. That knowledge lives in a single read-only
mapping built at import time, so the comparator itself stays a pure function
of its three string arguments.

To support a new setting, add it here. Anything not listed is compared as an
exact string. See http://php.net/manual/en/ini.list.php for the directives.
"""

from types import MappingProxyType
from typing import Mapping

from hostcheck.requirements.models import Requirement, SettingKind

SETTING_KINDS: Mapping[str, SettingKind] = MappingProxyType({
    "memory_limit": SettingKind.BYTE_SIZE,
    "post_max_size": SettingKind.BYTE_SIZE,
    "upload_max_filesize": SettingKind.BYTE_SIZE,
    "allow_call_time_pass_reference": SettingKind.BOOLEAN,
    "allow_url_fopen": SettingKind.BOOLEAN,
    "allow_url_include": SettingKind.BOOLEAN,
    "opcache.enable": SettingKind.BOOLEAN,
})


def classify(setting_name: str) -> SettingKind:
    """Return the comparison kind for a setting, EXACT_STRING when unknown."""
    return SETTING_KINDS.get(setting_name, SettingKind.EXACT_STRING)


def build_requirement(setting_name: str, required_value: str) -> Requirement:
    return Requirement(
        name=setting_name,
        kind=classify(setting_name),
        required_value=required_value,
    )
