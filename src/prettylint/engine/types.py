from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

from rich.text import Text

# ESLint reports severities numerically (1, 2); some integrations use names.
Severity: TypeAlias = int | str
SeverityLabel = Literal["warning", "error"]
RulesMeta: TypeAlias = Mapping[str, Any]

SEVERITY_WARNING = 1
SEVERITY_ERROR = 2


@dataclass(frozen=True, slots=True)
class LintMessage:
    line: int = 0  # 1-based, 0 = unknown
    column: int = 0  # 1-based, 0 = unknown
    severity: Severity = SEVERITY_WARNING
    fatal: bool = False
    rule_id: str | None = None
    message: str = ""


@dataclass(frozen=True, slots=True)
class LintResult:
    file_path: str
    messages: tuple[LintMessage, ...] = ()
    warning_count: int = 0
    # Precomputed by the linter. Derived from `messages` when not supplied.
    error_count: int | None = None


def is_error_severity(severity: Severity) -> bool:
    return severity == SEVERITY_ERROR or severity == "error"


def is_error(message: LintMessage) -> bool:
    """Fatal messages are errors whatever their declared severity."""

    return bool(message.fatal) or is_error_severity(message.severity)


@dataclass(frozen=True, slots=True)
class Separator:
    pass


@dataclass(frozen=True, slots=True)
class Header:
    file_path: str
    relative_file_path: str
    first_line_col: str


@dataclass(frozen=True, slots=True)
class MessageLine:
    severity: SeverityLabel
    line: str
    line_width: int
    column: str
    column_width: int
    message: Text
    message_width: int
    rule_id: str


LineItem: TypeAlias = Separator | Header | MessageLine


@dataclass(slots=True)
class SummaryEntry:
    count: int = 0
    files: list[str] = field(default_factory=list)

    def add(self, file_path: str) -> None:
        self.count += 1
        if file_path not in self.files:
            self.files.append(file_path)


@dataclass(frozen=True, slots=True)
class Aggregation:
    lines: tuple[LineItem, ...]
    error_count: int
    warning_count: int
    max_line_width: int
    max_column_width: int
    max_message_width: int
    max_rule_width: int
    show_line_numbers: bool
    summary: Mapping[str, SummaryEntry]
