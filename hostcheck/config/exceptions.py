# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Errors raised while turning a baseline file into a HostcheckConfig."""


class ConfigError(Exception):
    """Anything that stops a baseline from loading. The CLI maps it to CONFIG_ERROR."""


class ConfigLoadError(ConfigError):
    """The file is missing, unreadable, not YAML, or not a mapping at the top level."""


class ConfigValidationError(ConfigError):
    """The YAML parsed but doesn't fit the schema (unknown section, bad port, blank module name)."""
