"""Parser for the linter's plain-text ("stylish") report.

Two report shapes are recognised:

- A tool failure, where the report starts with ``Error:``. The linter could
  not check the document at all (bad config, crash), so a single error
  spanning the whole document is produced.
- A normal report, where each issue line looks like
  ``  3:10  error  Missing semicolon  semi``. Every other line (file header,
  summary, blank lines) is ignored.
"""

from __future__ import annotations

import re

from eslsp.linter.types import DocumentSnapshot, LintDiagnostic, Severity
from eslsp.text import line_column_to_offset, token_region

__all__ = [
    "TOOL_FAILURE_MARKER",
    "parse_report",
]

TOOL_FAILURE_MARKER = "Error:"

# The message is non-greedy so that two or more spaces separate the rule id
# while single spaces stay part of the message.
_REPORT_LINE_PATTERN = re.compile(
    r"^\s*(?P<row>\d+):(?P<col>\d+)"
    r"\s+(?P<severity>error|warning)"
    r"\s+(?P<message>.+?)"
    r"(?:\s{2,}(?P<rule>\S+))?\s*$"
)


def _severity_from_token(token: str) -> Severity:
    if token == "warning":
        return Severity.WARNING
    return Severity.ERROR


def _compose_message(
    severity: str, message: str, rule: str | None, *, show_rule_name: bool
) -> str:
    if rule and show_rule_name:
        return f"{severity}: {message} [{rule}]"
    return f"{severity}: {message}"


def _tool_failure_diagnostic(
    report_text: str, snapshot: DocumentSnapshot
) -> LintDiagnostic:
    first_line = report_text.splitlines()[0]
    return LintDiagnostic(
        start=0,
        end=len(snapshot.source),
        severity=Severity.ERROR,
        message=first_line.rstrip(),
        rule=None,
    )


def parse_report(
    report_text: str,
    snapshot: DocumentSnapshot,
    *,
    show_rule_name: bool = True,
) -> list[LintDiagnostic]:
    """
    Parse a linter report into diagnostics anchored to ``snapshot``.

    Args:
        report_text: Captured standard output of the linter.
        snapshot: The document text the linter was run against.
        show_rule_name: Whether to append ``[rule]`` to each message.

    Returns:
        Diagnostics in the order the linter reported them.
    """
    if report_text.startswith(TOOL_FAILURE_MARKER):
        return [_tool_failure_diagnostic(report_text, snapshot)]

    source = snapshot.source
    lines = snapshot.lines
    diagnostics: list[LintDiagnostic] = []

    for report_line in report_text.splitlines():
        match = _REPORT_LINE_PATTERN.match(report_line)
        if match is None:
            continue

        start = line_column_to_offset(
            lines, int(match.group("row")), int(match.group("col"))
        )
        end = min(token_region(source, start), len(source))
        severity_token = match.group("severity")
        rule = match.group("rule")

        diagnostics.append(
            LintDiagnostic(
                start=start,
                end=end,
                severity=_severity_from_token(severity_token),
                message=_compose_message(
                    severity_token,
                    match.group("message"),
                    rule,
                    show_rule_name=show_rule_name,
                ),
                rule=rule,
            )
        )

    return diagnostics
