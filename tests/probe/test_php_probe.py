# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the live PHP probe.

subprocess.run is replaced with a fake so these run without PHP. We check the
command we build, the snapshot we parse, and every failure path.
"""

import json
import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from hostcheck.config.schema import ProbeConfig, RequirementsConfig
from hostcheck.probe.exceptions import ProbeError
from hostcheck.probe.php import PROBE_SCRIPT, PhpProbe

_REQUIREMENTS = RequirementsConfig(
    modules=["gd", "opcache"],
    settings={"memory_limit": "1024M", "opcache.enable": "1"},
)

_PAYLOAD = {
    "version": "8.2.7",
    "extensions": ["Core", "gd", "Zend OPcache", "opcache"],
    "settings": {"memory_limit": "1G", "opcache.enable": "1"},
    "hostname": "web-02",
}


def _fake_run(stdout: str = "", returncode: int = 0, stderr: str = "") -> Any:
    calls: list[list[str]] = []

    def run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        calls.append(command)
        assert kwargs["capture_output"] is True
        assert kwargs["timeout"] > 0
        assert kwargs["errors"] == "replace"
        return subprocess.CompletedProcess(command, returncode, stdout=stdout, stderr=stderr)

    run.calls = calls  # type: ignore[attr-defined]
    return run


class TestBuildCommand:
    def test_command_passes_query_as_argument(self) -> None:
        command = PhpProbe(binary="/usr/bin/php8.2").build_command(_REQUIREMENTS)
        assert command[:4] == ["/usr/bin/php8.2", "-r", PROBE_SCRIPT, "--"]
        assert json.loads(command[4]) == {
            "modules": ["gd", "opcache"],
            "settings": ["memory_limit", "opcache.enable"],
        }

    def test_from_config(self) -> None:
        probe = PhpProbe.from_config(ProbeConfig(php_binary="php81", timeout_seconds=3))
        assert probe.binary == "php81"
        assert probe.timeout_seconds == 3


class TestCollect:
    def test_parses_snapshot(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = _fake_run(stdout=json.dumps(_PAYLOAD))
        monkeypatch.setattr(subprocess, "run", fake)

        snapshot = PhpProbe().collect(_REQUIREMENTS)

        assert snapshot.version == "8.2.7"
        assert snapshot.hostname == "web-02"
        assert snapshot.has_extension("opcache")
        assert snapshot.setting("memory_limit") == "1G"
        assert len(fake.calls) == 1

    def test_unknown_setting_comes_back_as_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        payload = dict(_PAYLOAD, settings={"memory_limit": None})
        monkeypatch.setattr(subprocess, "run", _fake_run(stdout=json.dumps(payload)))

        snapshot = PhpProbe().collect(_REQUIREMENTS)
        assert snapshot.settings["memory_limit"] is None

    def test_missing_binary(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def run(*args: Any, **kwargs: Any) -> None:
            raise FileNotFoundError("php")

        monkeypatch.setattr(subprocess, "run", run)
        with pytest.raises(ProbeError, match="not found"):
            PhpProbe(binary="php-missing").collect(_REQUIREMENTS)

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def run(command: list[str], **kwargs: Any) -> None:
            raise subprocess.TimeoutExpired(command, kwargs["timeout"])

        monkeypatch.setattr(subprocess, "run", run)
        with pytest.raises(ProbeError, match="timed out"):
            PhpProbe(timeout_seconds=0.5).collect(_REQUIREMENTS)

    def test_non_zero_exit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            subprocess, "run", _fake_run(returncode=255, stderr="PHP Parse error")
        )
        with pytest.raises(ProbeError, match="exited with code 255"):
            PhpProbe().collect(_REQUIREMENTS)

    def test_invalid_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(subprocess, "run", _fake_run(stdout="Warning: something\n{"))
        with pytest.raises(ProbeError, match="invalid JSON"):
            PhpProbe().collect(_REQUIREMENTS)

    def test_unexpected_payload(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(subprocess, "run", _fake_run(stdout=json.dumps({"extensions": []})))
        with pytest.raises(ProbeError, match="unexpected payload"):
            PhpProbe().collect(_REQUIREMENTS)


@pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX exec permissions")
class TestCollectRealProcess:
    def test_non_executable_binary(self, tmp_path: Path) -> None:
        binary = tmp_path / "php"
        binary.write_text("not a program\n", encoding="utf-8")
        binary.chmod(0o644)

        with pytest.raises(ProbeError, match="Cannot run PHP executable"):
            PhpProbe(binary=str(binary)).collect(_REQUIREMENTS)

    def test_undecodable_output_is_replaced(self, tmp_path: Path) -> None:
        binary = tmp_path / "php"
        binary.write_text(
            "#!/bin/sh\nprintf '{\"version\": \"8.2.0\", \"hostname\": \"web-\\377\"}'\n",
            encoding="utf-8",
        )
        binary.chmod(0o755)

        snapshot = PhpProbe(binary=str(binary)).collect(_REQUIREMENTS)

        assert snapshot.version == "8.2.0"
        assert snapshot.hostname == "web-\ufffd"
