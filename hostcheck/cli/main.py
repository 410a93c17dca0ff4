# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for hostcheck.

Running with no arguments checks the local PHP runtime against the stock
baseline and prints the report. Everything else is optional.

Usage:
    hostcheck
    hostcheck --email=ops@example.com
    hostcheck --config baseline.yaml --snapshot web-01.yaml --json-output report.json
"""

import argparse
import sys
from typing import Optional

from hostcheck import __version__
from hostcheck.cli.commands import handle_check


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostcheck",
        description=(
            "Check that a host's PHP version, extensions and ini settings "
            "meet the deployment baseline."
        ),
    )
    parser.add_argument(
        "--email",
        type=str,
        default=None,
        help="Also send the plain-text report to this address.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML configuration file overriding the stock baseline.",
    )
    parser.add_argument(
        "--snapshot",
        type=str,
        default=None,
        help="Check a captured YAML/JSON runtime snapshot instead of the live PHP binary.",
    )
    parser.add_argument(
        "--php-binary",
        type=str,
        default=None,
        dest="php_binary",
        help="PHP executable to probe (overrides probe.php_binary).",
    )
    parser.add_argument(
        "--json-output",
        type=str,
        default=None,
        dest="json_output",
        help="Also write a machine-readable JSON report to this path.",
    )
    parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force colored output on or off (default: detect the terminal).",
    )
    parser.add_argument(
        "--legacy-exact-match",
        action="store_true",
        default=False,
        dest="legacy_exact_match",
        help="Compare unclassified settings by name, as the original PHP checker did.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Diagnostic log verbosity (logs go to stderr).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    Parses the command line, runs the check and exits with its return code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    sys.exit(handle_check(args))


if __name__ == "__main__":
    main()
