# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Human-readable rendering of a CheckReport.

The report is first turned into a flat list of styled lines. The same lines
are then either printed through a rich Console or joined into the plain-text
body that gets emailed. Keeping the two paths on one list means the email
always says exactly what the terminal said, minus the styling.

Color is a flag passed in by the caller: True forces it, False turns it off,
None lets rich decide from the stream and the environment (TTY, NO_COLOR,
FORCE_COLOR, Windows consoles).
"""

from dataclasses import dataclass
from typing import Optional, TextIO

from rich.console import Console

from hostcheck.requirements.models import CheckReport

TITLE_STYLE = "blue"
PASSED_STYLE = "green"
FAILED_STYLE = "red"

PASSED_SUMMARY = "Requirements check passed, hosting environment is A-OK!"
FAILED_SUMMARY = "Requirements check did not pass, see above for more details"


@dataclass(frozen=True)
class ReportLine:
    """One line of output. `style` is a rich style string, None means plain text."""

    text: str
    style: Optional[str] = None


def _verdict(passed: bool) -> tuple[str, str]:
    return ("OK", PASSED_STYLE) if passed else ("NOT OK", FAILED_STYLE)


def build_title(title: str) -> list[ReportLine]:
    return [
        ReportLine(title, TITLE_STYLE),
        ReportLine("~" * len(title), TITLE_STYLE),
        ReportLine(""),
    ]


def build_lines(report: CheckReport, title: str) -> list[ReportLine]:
    """
    Lay out the full report: title, version, modules, settings, summary.

    Modules and settings appear in the order they were declared.
    """
    lines = build_title(title)

    word, style = _verdict(report.version.passed)
    lines.append(
        ReportLine(
            f"PHP version {word}, required: {report.version.required}, "
            f"detected: {report.version.detected}",
            style,
        )
    )

    for module in report.modules:
        if module.installed:
            lines.append(ReportLine(f"PHP module installed: {module.name}", PASSED_STYLE))
        else:
            lines.append(ReportLine(f"PHP module NOT installed: {module.name}", FAILED_STYLE))

    for setting in report.settings:
        word, style = _verdict(setting.passed)
        lines.append(
            ReportLine(
                f"PHP ini setting {setting.requirement.name} {word}, "
                f"required: {setting.requirement.required_value}, "
                f"detected: {setting.detected_value}",
                style,
            )
        )

    lines.append(ReportLine(""))
    if report.passed:
        lines.append(ReportLine(PASSED_SUMMARY, PASSED_STYLE))
    else:
        lines.append(ReportLine(FAILED_SUMMARY, FAILED_STYLE))
    return lines


def format_plain_text(lines: list[ReportLine]) -> str:
    """Join lines without any styling, e.g. for an email body."""
    return "".join(f"{line.text}\n" for line in lines)


def make_console(stream: TextIO, color: Optional[bool] = None) -> Console:
    """
    Build a Console writing to stream.

    Report text is printed verbatim: no markup, no highlighting and no
    wrapping, so ini values containing brackets or long paths come out as-is.
    """
    return Console(
        file=stream,
        force_terminal=color,
        no_color=None if color is None else not color,
        color_system="standard" if color else "auto",
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


class ReportRenderer:
    """
    Prints report lines through a rich Console.

    Args:
        stream: Destination, usually sys.stdout.
        color: Force color on (True) or off (False), or None to detect.
    """

    def __init__(self, stream: TextIO, color: Optional[bool] = None) -> None:
        self.console = make_console(stream, color)

    def write_line(self, line: ReportLine) -> None:
        self.console.print(line.text, style=line.style)

    def render(self, lines: list[ReportLine]) -> None:
        for line in lines:
            self.write_line(line)
        self.console.file.flush()
