from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

from prettylint.terminal import HyperlinkMode


class ConfigError(ValueError):
    """Raised when a prettylint configuration file is invalid."""


DEFAULT_HYPERLINKS: HyperlinkMode = "auto"
DEFAULT_CWD_HINT = True
DEFAULT_EXIT_ZERO = False

_HYPERLINK_MODES = {"auto", "always", "never"}


@dataclass(frozen=True, slots=True)
class PrettyLintConfig:
    hyperlinks: HyperlinkMode = DEFAULT_HYPERLINKS
    cwd_hint: bool = DEFAULT_CWD_HINT
    exit_zero: bool = DEFAULT_EXIT_ZERO
    # Plugin prefix -> URL template with a `{rule}` placeholder.
    rule_docs: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def load_config(project_dir: Path | str = ".") -> PrettyLintConfig:
    """
    Load prettylint configuration from `pyproject.toml` within `project_dir`.

    If no file / no `[tool.prettylint]` table exists, returns defaults.
    """

    pyproject_path = Path(project_dir) / "pyproject.toml"
    if not pyproject_path.exists():
        return PrettyLintConfig()

    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {exc}") from exc

    tool_table = data.get("tool", {})
    if not isinstance(tool_table, dict):
        return PrettyLintConfig()

    table = tool_table.get("prettylint", {})
    if not isinstance(table, dict) or not table:
        return PrettyLintConfig()

    return parse_config_table(table)


def _get(table: Mapping[str, Any], key: str, default: Any) -> Any:
    # Accept both `cwd-hint` and `cwd_hint` spellings.
    return table.get(key, table.get(key.replace("-", "_"), default))


def parse_hyperlink_mode(value: Any, *, field_name: str = "tool.prettylint.hyperlinks") -> HyperlinkMode:
    if not isinstance(value, str) or value.strip().lower() not in _HYPERLINK_MODES:
        raise ConfigError(f"`{field_name}` must be one of: auto, always, never.")
    return cast(HyperlinkMode, value.strip().lower())


def parse_config_table(table: Mapping[str, Any]) -> PrettyLintConfig:
    hyperlinks = parse_hyperlink_mode(_get(table, "hyperlinks", DEFAULT_HYPERLINKS))

    cwd_hint = _get(table, "cwd-hint", DEFAULT_CWD_HINT)
    if not isinstance(cwd_hint, bool):
        raise ConfigError("`tool.prettylint.cwd-hint` must be a boolean.")

    exit_zero = _get(table, "exit-zero", DEFAULT_EXIT_ZERO)
    if not isinstance(exit_zero, bool):
        raise ConfigError("`tool.prettylint.exit-zero` must be a boolean.")

    rule_docs = _parse_rule_docs(_get(table, "rule-docs", {}))

    return PrettyLintConfig(
        hyperlinks=hyperlinks,
        cwd_hint=cwd_hint,
        exit_zero=exit_zero,
        rule_docs=rule_docs,
    )


def _parse_rule_docs(value: Any) -> Mapping[str, str]:
    if value is None:
        return MappingProxyType({})
    if not isinstance(value, dict):
        raise ConfigError("`tool.prettylint.rule-docs` must be a table.")

    templates: dict[str, str] = {}
    for prefix, template in value.items():
        if not isinstance(template, str) or not template.strip():
            raise ConfigError(f"`tool.prettylint.rule-docs.{prefix}` must be a non-empty string.")
        if not template.startswith(("http://", "https://")):
            raise ConfigError(f"`tool.prettylint.rule-docs.{prefix}` must be an http(s) URL template.")
        templates[str(prefix).strip()] = template.strip()
    return MappingProxyType(templates)
