# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Command handler for the hostcheck CLI.

One run does, in order:
  1. validate --email (a bad address stops everything before any check)
  2. load the config, or fall back to the stock baseline
  3. bootstrap logging
  4. collect a snapshot, from --snapshot or the live PHP binary
  5. run the checks and print the report
  6. optionally write the JSON report and email the plain-text one

The report is the product and goes to stdout. Errors go to stderr as a
colored line for the operator plus a structured log entry.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, TextIO

from hostcheck.checks.runner import run_checks
from hostcheck.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from hostcheck.config.exceptions import ConfigError
from hostcheck.config.loader import default_config, load_config
from hostcheck.config.schema import HostcheckConfig
from hostcheck.logging.logger import get_logger
from hostcheck.mail.exceptions import MailError
from hostcheck.mail.sender import send_report, validate_email_address
from hostcheck.probe.exceptions import ProbeError
from hostcheck.probe.php import PhpProbe
from hostcheck.probe.snapshot import RuntimeSnapshot, load_snapshot
from hostcheck.reporting.console import (
    ReportLine,
    ReportRenderer,
    build_lines,
    format_plain_text,
)
from hostcheck.reporting.writer import write_report
from hostcheck.runtime.bootstrap import PACKAGE_LOGGER, bootstrap

_logger = get_logger(__name__)


def _fail(renderer: ReportRenderer, message: str) -> None:
    renderer.write_line(ReportLine(message, "red"))


def _load_and_bootstrap(
    args: argparse.Namespace,
    errors: ReportRenderer,
) -> tuple[int, Optional[HostcheckConfig]]:
    """
    Load config and run bootstrap.

    Returns (exit_code, config). If exit_code is not SUCCESS, the caller
    should return it immediately.
    """
    if args.config is None:
        config = default_config()
    else:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            get_logger(PACKAGE_LOGGER, log_level=args.log_level or "WARNING")
            _logger.error("Configuration error", extra={"error": str(err)})
            _fail(errors, f"Configuration error: {err}")
            return CONFIG_ERROR, None

    bootstrap(config.global_config, log_level=args.log_level)
    _logger.debug(
        "Configuration loaded",
        extra={"config": args.config, "snapshot": args.snapshot},
    )
    return SUCCESS, config


def _collect_snapshot(args: argparse.Namespace, config: HostcheckConfig) -> RuntimeSnapshot:
    if args.snapshot is not None:
        return load_snapshot(Path(args.snapshot))

    probe = PhpProbe.from_config(config.probe)
    if args.php_binary is not None:
        probe = PhpProbe(binary=args.php_binary, timeout_seconds=config.probe.timeout_seconds)
    return probe.collect(config.requirements)


def handle_check(
    args: argparse.Namespace,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Run every requirement check and report on it."""
    out = stdout or sys.stdout
    err_stream = stderr or sys.stderr

    renderer = ReportRenderer(out, color=args.color)
    errors = ReportRenderer(err_stream, color=args.color)

    if args.email is not None and not validate_email_address(args.email):
        _fail(errors, "You must pass a valid email address")
        return USER_ERROR

    exit_code, config = _load_and_bootstrap(args, errors)
    if exit_code != SUCCESS or config is None:
        return exit_code

    try:
        snapshot = _collect_snapshot(args, config)
    except ProbeError as err:
        _logger.error("Could not read runtime", extra={"error": str(err)})
        _fail(errors, f"Could not read runtime: {err}")
        return RUNTIME_ERROR

    legacy = args.legacy_exact_match or config.comparator.legacy_exact_match
    report = run_checks(config.requirements, snapshot, legacy_exact_match=legacy)

    lines = build_lines(report, config.report.title)
    renderer.render(lines)

    if args.json_output is not None:
        try:
            write_report(report, Path(args.json_output))
        except OSError as err:
            _logger.error(
                "Could not write report",
                extra={"output_path": args.json_output, "error": str(err)},
            )
            _fail(errors, f"Could not write report to {args.json_output}: {err}")
            return RUNTIME_ERROR

    if args.email is not None:
        try:
            send_report(args.email, format_plain_text(lines), config.mail, report.hostname)
        except MailError as err:
            _logger.error("Email failed", extra={"error": str(err)}, exc_info=True)
            _fail(errors, str(err))
            return RUNTIME_ERROR
        renderer.render([ReportLine(f"Email sent to {args.email}", "green")])

    return SUCCESS if report.passed else VALIDATION_ERROR

