# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for hostcheck tests.

Fixtures here are available to every test file automatically. Snapshots
stand in for a live PHP binary so nothing here needs PHP installed.
"""

import textwrap
from pathlib import Path

import pytest

from hostcheck.config.loader import default_config
from hostcheck.config.schema import HostcheckConfig
from hostcheck.probe.snapshot import RuntimeSnapshot

PASSING_SNAPSHOT = textwrap.dedent("""\
    version: "8.1.2-1ubuntu2.14"
    hostname: web-01
    extensions:
      - Core
      - bcmath
      - exif
      - fileinfo
      - gd
      - intl
      - json
      - mbstring
      - mcrypt
      - mysqlnd
      - Zend OPcache
      - opcache
      - soap
    settings:
      memory_limit: "2G"
      opcache.enable: "1"
      post_max_size: "32M"
      upload_max_filesize: "32M"
      allow_url_include: "0"
""")

FAILING_SNAPSHOT = textwrap.dedent("""\
    version: "7.0.33"
    hostname: legacy-01
    extensions: [Core, json, mbstring]
    settings:
      memory_limit: "128M"
      opcache.enable: ""
      post_max_size: "8M"
      upload_max_filesize: "2M"
      allow_url_include: "1"
""")


@pytest.fixture()
def baseline() -> HostcheckConfig:
    return default_config()


@pytest.fixture()
def passing_snapshot() -> RuntimeSnapshot:
    return RuntimeSnapshot.model_validate({
        "version": "8.1.2-1ubuntu2.14",
        "hostname": "web-01",
        "extensions": [
            "Core", "bcmath", "exif", "fileinfo", "gd", "intl", "json",
            "mbstring", "mcrypt", "mysqlnd", "opcache", "soap",
        ],
        "settings": {
            "memory_limit": "2G",
            "opcache.enable": "1",
            "post_max_size": "32M",
            "upload_max_filesize": "32M",
            "allow_url_include": "0",
        },
    })


@pytest.fixture()
def passing_snapshot_file(tmp_path: Path) -> Path:
    snapshot_file = tmp_path / "passing_snapshot.yaml"
    snapshot_file.write_text(PASSING_SNAPSHOT, encoding="utf-8")
    return snapshot_file


@pytest.fixture()
def failing_snapshot_file(tmp_path: Path) -> Path:
    snapshot_file = tmp_path / "failing_snapshot.yaml"
    snapshot_file.write_text(FAILING_SNAPSHOT, encoding="utf-8")
    return snapshot_file


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """A small valid config that overrides part of the baseline."""
    config_content = textwrap.dedent("""\
        global:
          log_level: "DEBUG"
        requirements:
          runtime_version: "8.0"
          modules: [json, mbstring]
          settings:
            memory_limit: 256M
            opcache.enable: 1
            allow_url_include: off
        report:
          title: "Test baseline"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (unknown section)."""
    config_content = textwrap.dedent("""\
        requirements:
          runtime_version: "7.1.0"
        plugins:
          enabled: true
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
