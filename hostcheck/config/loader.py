# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Baseline loading.

A baseline file is plain YAML validated into a frozen HostcheckConfig. Any
section left out keeps the stock values, so a file that only lists extra
modules is enough. No file at all means the stock baseline.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from hostcheck.config.exceptions import ConfigLoadError, ConfigValidationError
from hostcheck.config.schema import HostcheckConfig


def _read_yaml_file(config_path: Path) -> dict[str, Any]:
    """
    Parse config_path into a dict. A blank file reads as {}.

    Raises:
        ConfigLoadError: Missing path, a directory, an I/O error, bad YAML,
            or a top level that isn't a mapping.
    """
    if not config_path.is_file():
        reason = "is not a file" if config_path.exists() else "does not exist"
        raise ConfigLoadError(f"Config path {config_path} {reason}")

    try:
        parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Config file {config_path} is not valid YAML: {err}") from err

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file {config_path} must hold a mapping at the top level, "
            f"found {type(parsed).__name__}"
        )
    return parsed


def load_config(config_path: Path) -> HostcheckConfig:
    """
    Read and validate a baseline file.

    Raises:
        ConfigLoadError: The file couldn't be read or parsed.
        ConfigValidationError: The content doesn't match the schema.
    """
    raw_data = _read_yaml_file(config_path)
    try:
        return HostcheckConfig.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(f"Invalid config in {config_path}:\n{err}") from err


def default_config() -> HostcheckConfig:
    """The stock baseline, used when no config file is given."""
    return HostcheckConfig.model_validate({})
