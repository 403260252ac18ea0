from __future__ import annotations

import io
import os
from typing import assert_never

from rich.console import Console
from rich.text import Text

from prettylint.docs import RuleDocsLookup, lookup_rule_docs, resolve_doc_url
from prettylint.engine.types import Aggregation, Header, LineItem, MessageLine, RulesMeta, Separator
from prettylint.terminal import TerminalCapabilities, cwd_hint, hyperlink
from prettylint.text import display_width
from prettylint.utils import plural

_INDENT = "  "
_TITLE_STYLE = "blue"
_MUTED_STYLE = "bright_black"
# Readable only when copied or clicked; dim grey for terminals without `conceal`.
_HIDDEN_STYLE = "conceal dim bright_black"


class _Painter:
    """Renders styled fragments to ANSI, or to plain text when colour is off."""

    def __init__(self, *, color: bool) -> None:
        self._console = Console(
            file=io.StringIO(),
            color_system="standard" if color else None,
            force_terminal=color,
            no_color=False,
            legacy_windows=False,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    def __call__(self, text: str | Text, style: str = "") -> str:
        renderable = Text(text, style=style) if isinstance(text, str) else text
        with self._console.capture() as capture:
            self._console.print(renderable, end="")
        return capture.get()


class _Renderer:
    def __init__(
        self,
        aggregation: Aggregation,
        capabilities: TerminalCapabilities,
        *,
        rules_meta: RulesMeta | None,
        lookup: RuleDocsLookup | None,
    ) -> None:
        self.agg = aggregation
        self.caps = capabilities
        self.rules_meta = rules_meta
        self.lookup = lookup
        self.paint = _Painter(color=capabilities.color)

    def warning_summary(self) -> str:
        agg = self.agg
        out = _INDENT + self.paint("Warning summary", _TITLE_STYLE) + "\n"
        for rule_id, entry in agg.summary.items():
            padding = " " * (agg.max_rule_width - display_width(rule_id))
            out += (
                _INDENT
                + self.paint(rule_id, _MUTED_STYLE)
                + padding
                + "  "
                + self.paint(str(entry.count), "yellow")
                + " errors in "
                + self.paint(str(len(entry.files)), "yellow")
                + " files"
                + "\n"
            )
        return out + "\n"

    def error_details(self) -> str:
        out = _INDENT + self.paint("Error details", _TITLE_STYLE) + "\n"
        return out + "\n".join(self.line_item(item) for item in self.agg.lines) + "\n\n"

    def line_item(self, item: LineItem) -> str:
        if isinstance(item, Separator):
            return ""
        if isinstance(item, Header):
            position = ""
            if self.agg.show_line_numbers:
                # Lets terminals open the file at the first error on click.
                position = self.paint(f":{item.first_line_col}", _HIDDEN_STYLE)
            return _INDENT + self.paint(item.relative_file_path, "underline") + position
        if isinstance(item, MessageLine):
            return self.message_line(item)
        assert_never(item)

    def message_line(self, item: MessageLine) -> str:
        agg = self.agg
        position = Text.assemble(item.line, (":", _MUTED_STYLE), item.column, style="dim")
        cells = [
            "",
            "warning" if item.severity == "warning" else "error",
            " " * (agg.max_line_width - item.line_width) + self.paint(position),
            " " * (agg.max_column_width - item.column_width) + self.paint(item.message),
            " " * (agg.max_message_width - item.message_width) + self.rule_cell(item.rule_id),
        ]
        if not agg.show_line_numbers:
            del cells[2]
        return "  ".join(cells)

    def rule_cell(self, rule_id: str) -> str:
        cell = self.paint(rule_id, "dim")
        if not rule_id or not self.caps.link_support:
            return cell
        url = resolve_doc_url(rule_id, self.rules_meta, lookup=self.lookup)
        return hyperlink(cell, url) if url else cell

    def totals(self) -> str:
        agg = self.agg
        parts = []
        if agg.warning_count > 0:
            parts.append(self.paint(f"{agg.warning_count} {plural('warning', agg.warning_count)}", "yellow"))
        if agg.error_count > 0:
            parts.append(self.paint(f"{agg.error_count} {plural('error', agg.error_count)}", "red"))
        return _INDENT + ", ".join(parts) + "\n"


def render(
    aggregation: Aggregation,
    capabilities: TerminalCapabilities,
    *,
    rules_meta: RulesMeta | None = None,
    lookup: RuleDocsLookup | None = lookup_rule_docs,
    cwd: str | None = None,
) -> str:
    """
    Compose the report: warning summary, error details, then totals.

    Returns an empty string when there are neither errors nor warnings.
    """

    if aggregation.error_count + aggregation.warning_count <= 0:
        return ""

    renderer = _Renderer(aggregation, capabilities, rules_meta=rules_meta, lookup=lookup)
    output = "\n"
    if capabilities.is_interactive_terminal and not capabilities.suppress_cwd_hint:
        output += cwd_hint(cwd if cwd is not None else os.getcwd())
    if aggregation.summary:
        output += renderer.warning_summary()
    if aggregation.error_count > 0:
        output += renderer.error_details()
    return output + renderer.totals()
