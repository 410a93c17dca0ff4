# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for hostcheck.

Each config section gets its own frozen pydantic model. Frozen means once you
create it, you cannot mutate it. The requirements baseline is read once and
then only compared against.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Every section has defaults, so an empty YAML file (or no file at all) gives
the stock baseline below.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RUNTIME_VERSION = "7.1.0"

DEFAULT_MODULES: tuple[str, ...] = (
    "bcmath",
    "exif",
    "fileinfo",
    "gd",
    "intl",
    "json",
    "mbstring",
    "mcrypt",
    "mysqlnd",
    "opcache",
    "soap",
)

# Boolean ini settings are expressed as "1" or "0".
DEFAULT_SETTINGS: dict[str, str] = {
    "memory_limit": "1024M",
    "opcache.enable": "1",
    "post_max_size": "21M",
    "upload_max_filesize": "20M",
    "allow_url_include": "0",
}


def stringify_ini_value(value: Any) -> Any:
    """
    YAML turns `opcache.enable: 1` into an int and `on` into a bool. ini
    values are always strings, so map those back before validation.
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class GlobalConfig(BaseModel):
    """Cross-cutting settings: log verbosity and an optional log file."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    log_level: str = Field(
        default="WARNING",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{value}'")
        return upper


class RequirementsConfig(BaseModel):
    """
    The minimum baseline a host has to meet.

    Settings are keyed by ini directive name. Their kind (byte size, flag,
    exact string) comes from the static classification, not from here.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    runtime_version: str = Field(
        default=DEFAULT_RUNTIME_VERSION,
        min_length=1,
        description="Minimum interpreter version, compared numerically",
    )
    modules: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MODULES),
        description="Extensions that must be loaded",
    )
    settings: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SETTINGS),
        description="ini directives and their required values",
    )

    @field_validator("runtime_version", mode="before")
    @classmethod
    def _coerce_runtime_version(cls, value: Any) -> Any:
        return stringify_ini_value(value)

    @field_validator("settings", mode="before")
    @classmethod
    def _coerce_setting_values(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: stringify_ini_value(val) for key, val in value.items()}
        return value

    @field_validator("modules")
    @classmethod
    def _reject_blank_modules(cls, value: list[str]) -> list[str]:
        for name in value:
            if not name.strip():
                raise ValueError("Module names must not be blank")
        return value


class ComparatorConfig(BaseModel):
    """Switches for the setting comparator."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    legacy_exact_match: bool = Field(
        default=False,
        description=(
            "Compare unclassified settings by name instead of detected value, "
            "as the original PHP checker did"
        ),
    )


class ProbeConfig(BaseModel):
    """How the live runtime is queried."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    php_binary: str = Field(default="php", description="PHP CLI executable")
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Hard limit for the probe subprocess",
    )


class MailConfig(BaseModel):
    """Delivery settings for the emailed report."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    sender: str = Field(default="no-reply@localhost", description="From address")
    smtp_host: str = Field(default="localhost", description="SMTP relay host")
    smtp_port: int = Field(default=25, ge=1, le=65535, description="SMTP relay port")
    timeout_seconds: float = Field(default=30.0, gt=0)
    subject: str = Field(
        default="Host requirements checker",
        description="Subject prefix, the hostname is appended",
    )


class ReportConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    title: str = Field(default="Host requirements checker", min_length=1)


class HostcheckConfig(BaseModel):
    """
    Top-level config container.

    A YAML file might contain just `requirements:` to override the baseline,
    or any combination of sections. Sections not present fall back to their
    defaults.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    requirements: RequirementsConfig = Field(default_factory=RequirementsConfig)
    comparator: ComparatorConfig = Field(default_factory=ComparatorConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
