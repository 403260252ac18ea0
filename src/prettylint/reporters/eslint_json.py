from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from prettylint.engine.types import SEVERITY_WARNING, LintMessage, LintResult, RulesMeta, Severity, is_error

logger = logging.getLogger(__name__)


class ReportParseError(ValueError):
    """Raised when a linter JSON report cannot be read."""


@dataclass(frozen=True, slots=True)
class EslintReport:
    results: tuple[LintResult, ...]
    rules_meta: RulesMeta | None = None


def parse_eslint_report(raw: str) -> EslintReport:
    """
    Parse the output of `eslint -f json` or `eslint -f json-with-metadata`.

    Malformed messages degrade to defaults; a result whose `messages` is not a
    list is rejected.
    """

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ReportParseError(f"invalid JSON: {exc}") from exc

    rules_meta: RulesMeta | None = None
    if isinstance(data, dict):
        rules_meta = _parse_rules_meta(data)
        data = data.get("results")
    if not isinstance(data, list):
        raise ReportParseError("expected a list of results (or an object with a `results` list).")

    results = tuple(_parse_result(item, index=i) for i, item in enumerate(data))
    logger.debug("parsed %d result(s) from JSON report", len(results))
    return EslintReport(results=results, rules_meta=rules_meta)


def parse_rules_meta(raw: str) -> RulesMeta:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ReportParseError(f"invalid rules metadata JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ReportParseError("rules metadata must be a JSON object.")
    wrapped = _parse_rules_meta(data)
    return wrapped if wrapped is not None else data


def _parse_rules_meta(data: Mapping[str, Any]) -> RulesMeta | None:
    metadata = data.get("metadata")
    if isinstance(metadata, dict) and isinstance(metadata.get("rulesMeta"), dict):
        return metadata["rulesMeta"]
    if isinstance(data.get("rulesMeta"), dict):
        return data["rulesMeta"]
    return None


def _int_or(value: Any, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return default


def _parse_result(item: Any, *, index: int) -> LintResult:
    if not isinstance(item, dict):
        raise ReportParseError(f"result #{index} must be an object.")

    raw_messages = item.get("messages", [])
    if not isinstance(raw_messages, list):
        raise ReportParseError(f"result #{index}: `messages` must be a list.")
    messages = tuple(_parse_message(m) for m in raw_messages if isinstance(m, dict))

    file_path = item.get("filePath")
    if not isinstance(file_path, str):
        file_path = "<unknown>"

    error_count = _int_or(item.get("errorCount"), -1)
    warning_count = _int_or(
        item.get("warningCount"),
        sum(1 for m in messages if not is_error(m)),
    )

    return LintResult(
        file_path=file_path,
        messages=messages,
        warning_count=warning_count,
        error_count=error_count if error_count >= 0 else None,
    )


def _parse_severity(value: Any) -> Severity:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized == "warn":
            normalized = "warning"
        return normalized
    return SEVERITY_WARNING


def _parse_message(item: dict[str, Any]) -> LintMessage:
    rule_id = item.get("ruleId")
    message = item.get("message", "")
    return LintMessage(
        line=_int_or(item.get("line"), 0),
        column=_int_or(item.get("column"), 0),
        severity=_parse_severity(item.get("severity")),
        fatal=item.get("fatal") is True,
        rule_id=rule_id if isinstance(rule_id, str) else None,
        message=message if isinstance(message, str) else ("" if message is None else str(message)),
    )
