# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runs every requirement against a runtime snapshot.

Three groups of checks, in display order:
  - runtime version (detected >= required)
  - modules (each must be loaded)
  - settings (each compared by the setting comparator)

Checks are independent of one another. The report keeps declaration order
for display only; the verdict doesn't depend on it.
"""

import logging
import platform

from hostcheck.config.schema import RequirementsConfig
from hostcheck.logging.logger import get_logger
from hostcheck.probe.snapshot import RuntimeSnapshot
from hostcheck.requirements.classification import build_requirement
from hostcheck.requirements.comparator import evaluate
from hostcheck.requirements.models import (
    CheckReport,
    CheckResult,
    ModuleResult,
    VersionResult,
)
from hostcheck.requirements.versions import version_satisfies

_logger: logging.Logger = get_logger(__name__)


def check_version(snapshot: RuntimeSnapshot, required: str) -> VersionResult:
    return VersionResult(
        required=required,
        detected=snapshot.version,
        passed=version_satisfies(snapshot.version, required),
    )


def check_modules(snapshot: RuntimeSnapshot, modules: list[str]) -> list[ModuleResult]:
    return [
        ModuleResult(name=name, installed=snapshot.has_extension(name))
        for name in modules
    ]


def check_settings(
    snapshot: RuntimeSnapshot,
    settings: dict[str, str],
    legacy_exact_match: bool = False,
) -> list[CheckResult]:
    """Compare each declared setting against the value detected in the snapshot."""
    results: list[CheckResult] = []
    for name, required_value in settings.items():
        requirement = build_requirement(name, required_value)
        detected = snapshot.setting(name)
        results.append(
            CheckResult(
                requirement=requirement,
                detected_value=detected,
                passed=evaluate(
                    name,
                    detected,
                    required_value,
                    legacy_exact_match=legacy_exact_match,
                ),
            )
        )
    return results


def run_checks(
    requirements: RequirementsConfig,
    snapshot: RuntimeSnapshot,
    legacy_exact_match: bool = False,
) -> CheckReport:
    """
    Run all checks and collect them into a single report.

    Args:
        requirements: The baseline to check against.
        snapshot: Detected values of the runtime under test.
        legacy_exact_match: Forwarded to the setting comparator.

    Returns:
        CheckReport with one entry per requirement.
    """
    report = CheckReport(
        hostname=snapshot.hostname or platform.node(),
        version=check_version(snapshot, requirements.runtime_version),
        modules=check_modules(snapshot, requirements.modules),
        settings=check_settings(snapshot, requirements.settings, legacy_exact_match),
    )

    _log_check(
        "version",
        report.version.passed,
        required=report.version.required,
        detected=report.version.detected,
    )
    for module in report.modules:
        _log_check(f"module:{module.name}", module.passed)
    for setting in report.settings:
        _log_check(
            f"setting:{setting.requirement.name}",
            setting.passed,
            kind=setting.requirement.kind.value,
            required=setting.requirement.required_value,
            detected=setting.detected_value,
        )

    _logger.info(
        "Requirements check complete",
        extra={
            "hostname": report.hostname,
            "passed": report.total - report.failures,
            "failed": report.failures,
        },
    )
    return report


def _log_check(check: str, passed: bool, **context: str) -> None:
    log_fn = _logger.debug if passed else _logger.info
    log_fn("Requirement check", extra={"check": check, "passed": passed, **context})
