# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Machine-readable report writer.

The terminal output is for people; this JSON file is for deploy pipelines
that want to gate on the verdict or archive what a host looked like:

    {
      "generated_at": "...",
      "hostname": "web-01",
      "passed": false,
      "failures": 2,
      "version": {"required": "7.1.0", "detected": "8.1.2", "passed": true},
      "modules": [{"name": "gd", "installed": true}, ...],
      "settings": [{"name": "memory_limit", "kind": "byte_size", ...}, ...]
    }
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from hostcheck.logging.logger import get_logger
from hostcheck.requirements.models import CheckReport
from hostcheck.utils.filesystem import atomic_write

logger = get_logger(__name__)


def report_to_dict(report: CheckReport) -> dict[str, object]:
    return {
        "generated_at": datetime.now(tz=timezone.utc).isoformat(),
        "hostname": report.hostname,
        "passed": report.passed,
        "failures": report.failures,
        "version": asdict(report.version),
        "modules": [asdict(module) for module in report.modules],
        "settings": [
            {
                "name": result.requirement.name,
                "kind": result.requirement.kind.value,
                "required": result.requirement.required_value,
                "detected": result.detected_value,
                "passed": result.passed,
            }
            for result in report.settings
        ],
    }


def write_report(report: CheckReport, output_path: Path) -> Path:
    """
    Write the report as JSON, atomically. Returns the path written to.

    Raises:
        OSError: If the file can't be written.
    """
    atomic_write(
        output_path,
        json.dumps(report_to_dict(report), indent=2, sort_keys=True) + "\n",
    )
    logger.info("Report written", extra={"output_path": str(output_path)})
    return output_path
