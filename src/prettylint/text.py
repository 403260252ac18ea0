from __future__ import annotations

import re

from rich.cells import cell_len
from rich.text import Text

# `code` or 'quoted' spans that start and end inside a non-word boundary, e.g.
# "'x' is defined" but not "don't".
_INLINE_CODE_RE = re.compile(r"\B`(.*?)`\B|\B'(.*?)'\B")

EMPHASIS_STYLE = "bold"
TAB_SIZE = 8


def display_width(value: str | Text) -> int:
    """Terminal columns needed to show `value` (wide glyphs count twice)."""

    if isinstance(value, Text):
        return value.cell_len
    return cell_len(value)


def emphasize_inline_code(message: str, *, tab_size: int = TAB_SIZE) -> Text:
    """
    Replace inline code spans with their emphasized inner text.

    The quotes are dropped; the inner text keeps its position and gets the
    emphasis style, so the plain rendering of the result is the message with
    its quotes removed. Tabs are expanded so the measured width matches
    what the terminal shows.
    """

    text = Text()
    pos = 0
    for match in _INLINE_CODE_RE.finditer(message):
        text.append(message[pos : match.start()])
        inner = match.group(1) or match.group(2) or ""
        if inner:
            text.append(inner, style=EMPHASIS_STYLE)
        pos = match.end()
    text.append(message[pos:])
    text.expand_tabs(tab_size)
    return text
