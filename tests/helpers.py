from __future__ import annotations

from prettylint.engine.types import LintMessage, LintResult, is_error


def msg(
    line: int = 1,
    column: int = 1,
    *,
    severity: int | str = 2,
    rule_id: str | None = "no-undef",
    message: str = "problem",
    fatal: bool = False,
) -> LintMessage:
    return LintMessage(line=line, column=column, severity=severity, fatal=fatal, rule_id=rule_id, message=message)


def result(file_path: str, *messages: LintMessage, warning_count: int | None = None, error_count: int | None = None) -> LintResult:
    if warning_count is None:
        warning_count = sum(1 for m in messages if not is_error(m))
    return LintResult(file_path=file_path, messages=tuple(messages), warning_count=warning_count, error_count=error_count)
