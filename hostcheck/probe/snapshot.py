# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime snapshots.

A snapshot is everything the checks need to know about a runtime. It can come
from the live PHP probe, or from a YAML/JSON file captured earlier on the
target host (JSON is valid YAML, so one loader handles both):

    version: "8.1.2-1ubuntu2.14"
    hostname: web-01
    extensions: [Core, json, mbstring, Zend OPcache]
    settings:
      memory_limit: 1024M
      opcache.enable: "1"
      allow_url_include: null     # directive unknown to this runtime
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hostcheck.config.schema import stringify_ini_value
from hostcheck.probe.exceptions import SnapshotLoadError


class RuntimeSnapshot(BaseModel):
    """Detected values of one runtime at one point in time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(min_length=1)
    extensions: list[str] = Field(default_factory=list)
    settings: dict[str, Optional[str]] = Field(default_factory=dict)
    hostname: Optional[str] = None

    @field_validator("version", mode="before")
    @classmethod
    def _coerce_version(cls, value: Any) -> Any:
        return stringify_ini_value(value)

    @field_validator("settings", mode="before")
    @classmethod
    def _coerce_setting_values(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: stringify_ini_value(val) for key, val in value.items()}
        return value

    def has_extension(self, name: str) -> bool:
        """Extension names are matched case-insensitively, as PHP does."""
        wanted = name.lower()
        return any(ext.lower() == wanted for ext in self.extensions)

    def setting(self, name: str) -> str:
        """Detected value of a setting, "" when the runtime doesn't know it."""
        value = self.settings.get(name)
        return "" if value is None else value


def load_snapshot(snapshot_path: Path) -> RuntimeSnapshot:
    """
    Read and validate a snapshot file.

    Raises:
        SnapshotLoadError: If the file is missing, isn't YAML/JSON, or fails validation.
    """
    if not snapshot_path.is_file():
        raise SnapshotLoadError(f"Snapshot file not found: {snapshot_path}")

    try:
        raw_text = snapshot_path.read_text(encoding="utf-8")
    except OSError as err:
        raise SnapshotLoadError(f"Cannot read snapshot {snapshot_path}: {err}") from err

    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as err:
        raise SnapshotLoadError(f"Invalid YAML in snapshot {snapshot_path}: {err}") from err

    if not isinstance(parsed, dict):
        raise SnapshotLoadError(
            f"Snapshot must contain a mapping, got {type(parsed).__name__}"
        )

    try:
        return RuntimeSnapshot.model_validate(parsed)
    except ValidationError as err:
        raise SnapshotLoadError(
            f"Snapshot validation failed for {snapshot_path}:\n{err}"
        ) from err
