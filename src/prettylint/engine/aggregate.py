from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from functools import cmp_to_key
from pathlib import Path

from prettylint.engine.types import (
    Aggregation,
    Header,
    LineItem,
    LintMessage,
    LintResult,
    MessageLine,
    Separator,
    SummaryEntry,
    is_error,
    is_error_severity,
)
from prettylint.text import display_width, emphasize_inline_code
from prettylint.utils import safe_relpath

logger = logging.getLogger(__name__)


def result_error_count(result: LintResult) -> int:
    if result.error_count is not None:
        return result.error_count
    return sum(1 for m in result.messages if is_error(m))


def compare_results(a: LintResult, b: LintResult) -> int:
    """
    Order files: clean-of-errors first, then the noisiest.

    Equal error counts are broken by warnings (more first). Otherwise a file
    without errors wins, and between two files with errors more errors wins.
    """

    a_errors = result_error_count(a)
    b_errors = result_error_count(b)
    if a_errors == b_errors:
        return b.warning_count - a.warning_count
    if a_errors == 0:
        return -1
    if b_errors == 0:
        return 1
    return b_errors - a_errors


def compare_messages(a: LintMessage, b: LintMessage) -> int:
    # Only the error-vs-non-error direction is special cased. An error `b`
    # against a non-error `a` falls through to position ordering.
    if is_error(a) and not is_error(b):
        return 1
    a_line, b_line = a.line or 0, b.line or 0
    if a_line != b_line:
        return -1 if a_line < b_line else 1
    a_column, b_column = a.column or 0, b.column or 0
    if a_column != b_column:
        return -1 if a_column < b_column else 1
    return 0


class _Aggregator:
    def __init__(self, *, cwd: Path) -> None:
        self.cwd = cwd
        self.lines: list[LineItem] = []
        self.error_count = 0
        self.warning_count = 0
        self.max_line_width = 0
        self.max_column_width = 0
        self.max_message_width = 0
        self.max_rule_width = 0
        self.show_line_numbers = False
        self.summary: dict[str, SummaryEntry] = {}

    def add_result(self, result: LintResult) -> None:
        messages = result.messages
        if not messages:
            return

        self.warning_count += result.warning_count

        if self.lines:
            self.lines.append(Separator())

        error_count = sum(1 for m in messages if is_error(m))
        self.error_count += error_count

        if error_count > 0:
            first = next((m for m in messages if is_error_severity(m.severity)), messages[0])
            self.lines.append(
                Header(
                    file_path=result.file_path,
                    relative_file_path=safe_relpath(result.file_path, self.cwd),
                    first_line_col=f"{first.line or 0}:{first.column or 0}",
                )
            )

        for message in sorted(messages, key=cmp_to_key(compare_messages)):
            self._add_message(message, file_path=result.file_path)

    def _add_message(self, m: LintMessage, *, file_path: str) -> None:
        rendered = emphasize_inline_code(m.message or "")
        line = str(m.line or 0)
        column = str(m.column or 0)
        rule_id = m.rule_id or ""

        line_width = display_width(line)
        column_width = display_width(column)
        message_width = display_width(rendered)

        self.max_line_width = max(line_width, self.max_line_width)
        self.max_column_width = max(column_width, self.max_column_width)
        self.max_message_width = max(message_width, self.max_message_width)
        self.max_rule_width = max(display_width(rule_id), self.max_rule_width)
        self.show_line_numbers = self.show_line_numbers or bool(m.line or m.column)

        if is_error(m):
            self.lines.append(
                MessageLine(
                    severity="error",
                    line=line,
                    line_width=line_width,
                    column=column,
                    column_width=column_width,
                    message=rendered,
                    message_width=message_width,
                    rule_id=rule_id,
                )
            )
            return

        self.summary.setdefault(rule_id, SummaryEntry()).add(file_path)

    def build(self) -> Aggregation:
        return Aggregation(
            lines=tuple(self.lines),
            error_count=self.error_count,
            warning_count=self.warning_count,
            max_line_width=self.max_line_width,
            max_column_width=self.max_column_width,
            max_message_width=self.max_message_width,
            max_rule_width=self.max_rule_width,
            show_line_numbers=self.show_line_numbers,
            summary=self.summary,
        )


def aggregate(results: Iterable[LintResult], *, cwd: str | Path | None = None) -> Aggregation:
    """
    Group and order lint results into renderable line items.

    Errors (fatal or error severity) become detail lines under a per-file
    header. Everything else is folded into a per-rule warning summary.
    `error_count` counts reclassified errors while `warning_count` sums the
    linter's own per-file warning counts.
    """

    aggregator = _Aggregator(cwd=Path(cwd) if cwd is not None else Path(os.getcwd()))
    ordered = sorted(results, key=cmp_to_key(compare_results))
    for result in ordered:
        aggregator.add_result(result)

    aggregation = aggregator.build()
    logger.debug(
        "aggregated %d file(s): %d error(s), %d warning(s), %d summarized rule(s)",
        len(ordered),
        aggregation.error_count,
        aggregation.warning_count,
        len(aggregation.summary),
    )
    return aggregation
