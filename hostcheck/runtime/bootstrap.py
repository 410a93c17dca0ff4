# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for hostcheck.

The one-time setup that happens before any check runs:
  1. Validate the Python version
  2. Configure the package logger (level, optional log file)
  3. Log what we're running on

Every CLI run goes through this before probing the host.
"""

import logging
from pathlib import Path

from hostcheck.config.schema import GlobalConfig
from hostcheck.logging.logger import get_logger
from hostcheck.runtime.environment import check_minimum_python, get_system_info

PACKAGE_LOGGER = "hostcheck"


def bootstrap(config: GlobalConfig, log_level: str | None = None) -> logging.Logger:
    """
    Run the bootstrap sequence.

    Args:
        config: The validated global configuration.
        log_level: Command-line override for config.log_level.

    Returns:
        The configured package logger.
    """
    check_minimum_python()

    log_file = None
    if config.log_file is not None:
        log_file = Path(config.log_file)

    logger = get_logger(
        PACKAGE_LOGGER,
        log_level=log_level or config.log_level,
        log_file=log_file,
    )

    system_info = get_system_info()
    logger.debug(
        "hostcheck bootstrap complete",
        extra={
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "hostname": system_info.hostname,
        },
    )
    return logger
