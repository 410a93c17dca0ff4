# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Data models for the requirements checker.

These are the types that flow from the checks runner to the reporter. They
are all frozen dataclasses: a result is computed once and only ever read
after that.
"""

from dataclasses import dataclass, field
from enum import Enum


class SettingKind(str, Enum):
    """How a setting's detected value is compared against its required value."""

    EXACT_STRING = "exact_string"
    BOOLEAN = "boolean"
    BYTE_SIZE = "byte_size"


@dataclass(frozen=True)
class Requirement:
    """A single setting with the value the host must satisfy."""

    name: str
    kind: SettingKind
    required_value: str


@dataclass(frozen=True)
class CheckResult:
    """Outcome of comparing one setting against its requirement."""

    requirement: Requirement
    detected_value: str
    passed: bool


@dataclass(frozen=True)
class VersionResult:
    """Outcome of the runtime version check."""

    required: str
    detected: str
    passed: bool


@dataclass(frozen=True)
class ModuleResult:
    """Whether a required extension is loaded in the runtime."""

    name: str
    installed: bool

    @property
    def passed(self) -> bool:
        return self.installed


@dataclass(frozen=True)
class CheckReport:
    """
    Everything one run of the checker found.

    Modules and settings keep the order they were declared in, which is
    also the order they get displayed in. Ordering has no effect on the
    verdict.
    """

    hostname: str
    version: VersionResult
    modules: list[ModuleResult] = field(default_factory=list)
    settings: list[CheckResult] = field(default_factory=list)

    @property
    def failures(self) -> int:
        failed = 0 if self.version.passed else 1
        failed += sum(1 for module in self.modules if not module.passed)
        failed += sum(1 for setting in self.settings if not setting.passed)
        return failed

    @property
    def total(self) -> int:
        return 1 + len(self.modules) + len(self.settings)

    @property
    def passed(self) -> bool:
        return self.failures == 0
