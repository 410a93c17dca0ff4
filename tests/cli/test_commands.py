# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
In-process tests for the check command, for the paths a subprocess can't
observe: the emailed body and the streams the report is written to.
"""

import io
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Any

import pytest

from hostcheck.cli.commands import handle_check
from hostcheck.cli.exit_codes import RUNTIME_ERROR, SUCCESS, USER_ERROR, VALIDATION_ERROR
from hostcheck.cli.main import _build_parser


class RecordingSMTP:
    sent: list[EmailMessage] = []

    def __init__(self, host: str, port: int, timeout: float) -> None:
        pass

    def __enter__(self) -> "RecordingSMTP":
        return self

    def __exit__(self, *exc: Any) -> None:
        return None

    def send_message(self, message: EmailMessage) -> None:
        RecordingSMTP.sent.append(message)


def _run(*argv: str) -> tuple[int, str, str]:
    args = _build_parser().parse_args(list(argv))
    stdout, stderr = io.StringIO(), io.StringIO()
    exit_code = handle_check(args, stdout=stdout, stderr=stderr)
    return exit_code, stdout.getvalue(), stderr.getvalue()


class TestHandleCheck:
    def test_report_goes_to_stdout(self, passing_snapshot_file: Path) -> None:
        exit_code, out, err = _run("--snapshot", str(passing_snapshot_file), "--no-color")
        assert exit_code == SUCCESS
        assert out.startswith("Host requirements checker\n~~~~")
        assert err == ""

    def test_failing_host(self, failing_snapshot_file: Path) -> None:
        exit_code, out, _ = _run("--snapshot", str(failing_snapshot_file))
        assert exit_code == VALIDATION_ERROR
        assert "PHP ini setting memory_limit NOT OK, required: 1024M, detected: 128M" in out

    def test_invalid_email(self, passing_snapshot_file: Path) -> None:
        exit_code, out, err = _run("--email=foo@", "--snapshot", str(passing_snapshot_file))
        assert exit_code == USER_ERROR
        assert out == ""
        assert "valid email" in err

    def test_legacy_flag_from_command_line(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "requirements:\n  modules: []\n  settings:\n    display_errors: \"Off\"\n",
            encoding="utf-8",
        )
        snapshot_file = tmp_path / "snapshot.yaml"
        snapshot_file.write_text(
            "version: 8.2.0\nsettings:\n  display_errors: \"Off\"\n", encoding="utf-8"
        )
        common = ("--config", str(config_file), "--snapshot", str(snapshot_file))

        assert _run(*common)[0] == SUCCESS
        assert _run(*common, "--legacy-exact-match")[0] == VALIDATION_ERROR


class TestEmail:
    def test_plain_report_is_emailed(
        self, monkeypatch: pytest.MonkeyPatch, failing_snapshot_file: Path
    ) -> None:
        RecordingSMTP.sent = []
        monkeypatch.setattr(smtplib, "SMTP", RecordingSMTP)

        exit_code, out, _ = _run(
            "--email=ops@example.com", "--snapshot", str(failing_snapshot_file), "--color"
        )

        assert exit_code == VALIDATION_ERROR
        [message] = RecordingSMTP.sent
        assert message["Subject"] == "Host requirements checker on legacy-01"
        body = message.get_content()
        assert "Requirements check did not pass" in body
        assert "\033" not in body
        assert "Email sent to ops@example.com" in out

    def test_delivery_failure_is_a_runtime_error(
        self, monkeypatch: pytest.MonkeyPatch, passing_snapshot_file: Path
    ) -> None:
        def refuse(*args: Any, **kwargs: Any) -> None:
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr(smtplib, "SMTP", refuse)
        exit_code, out, err = _run(
            "--email=ops@example.com", "--snapshot", str(passing_snapshot_file)
        )
        assert exit_code == RUNTIME_ERROR
        assert "A-OK" in out
        assert "Could not send report" in err
