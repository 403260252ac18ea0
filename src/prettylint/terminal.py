from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from rich.console import Console

HyperlinkMode = Literal["auto", "always", "never"]

OSC = "\x1b]"
BEL = "\x07"

_LEADING_DIGITS_RE = re.compile(r"\d+")


@dataclass(frozen=True, slots=True)
class TerminalCapabilities:
    """What the output stream can do. Queried once per render."""

    is_interactive_terminal: bool = False
    link_support: bool = False
    # Set under CI, where the cwd escape would only pollute logs.
    suppress_cwd_hint: bool = False
    color: bool = False


def is_ci(environ: Mapping[str, str]) -> bool:
    return bool(environ.get("CI"))


def _parse_version(value: str) -> tuple[int, int, int]:
    parts = []
    for raw in value.split(".")[:3]:
        match = _LEADING_DIGITS_RE.match(raw)
        parts.append(int(match.group(0)) if match else 0)
    while len(parts) < 3:
        parts.append(0)
    return parts[0], parts[1], parts[2]


def supports_hyperlinks(*, is_terminal: bool, environ: Mapping[str, str], platform: str | None = None) -> bool:
    """
    Guess whether the terminal renders OSC 8 hyperlinks.

    `FORCE_HYPERLINK` overrides detection (`0` disables). Otherwise only known
    emulators on an interactive, non-CI stream qualify.
    """

    forced = environ.get("FORCE_HYPERLINK")
    if forced is not None:
        return not (forced.strip() == "0" or forced.strip().lower() == "false")

    if not is_terminal:
        return False
    if "DOMTERM" in environ:
        return True
    if (platform or sys.platform) == "win32":
        return bool(environ.get("WT_SESSION"))
    if is_ci(environ) or "TEAMCITY_VERSION" in environ:
        return False

    term_program = environ.get("TERM_PROGRAM")
    if term_program:
        version = _parse_version(environ.get("TERM_PROGRAM_VERSION", ""))
        if term_program == "iTerm.app":
            return version >= (3, 1, 0)
        if term_program == "WezTerm":
            return version >= (20200620, 0, 0)
        if term_program == "vscode":
            return version >= (1, 72, 0)
        if term_program == "ghostty":
            return True

    vte = environ.get("VTE_VERSION")
    if vte:
        # VTE 0.50.0 was buggy; earlier releases lack OSC 8.
        if vte == "0.50.0":
            return False
        if "." in vte:
            return _parse_version(vte) >= (0, 50, 1)
        # Numeric form: major * 10000 + minor * 100 + micro.
        major, rest = divmod(int(vte) if vte.isdigit() else 0, 10000)
        minor, micro = divmod(rest, 100)
        return (major, minor, micro) >= (0, 50, 1)

    return bool(environ.get("KITTY_WINDOW_ID") or environ.get("WT_SESSION"))


def detect_capabilities(
    console: Console | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    hyperlinks: HyperlinkMode = "auto",
    cwd_hint: bool = True,
) -> TerminalCapabilities:
    """Derive capabilities from a rich console (stdout by default) and the environment."""

    env = os.environ if environ is None else environ
    console = console or Console()
    is_terminal = console.is_terminal

    if hyperlinks == "always":
        link_support = True
    elif hyperlinks == "never":
        link_support = False
    else:
        link_support = supports_hyperlinks(is_terminal=is_terminal, environ=env)

    return TerminalCapabilities(
        is_interactive_terminal=is_terminal,
        link_support=link_support,
        suppress_cwd_hint=is_ci(env) or not cwd_hint,
        color=console.color_system is not None and not console.no_color,
    )


def cwd_hint(cwd: str) -> str:
    """iTerm escape announcing the working directory, so relative paths are clickable."""

    return f"{OSC}50;CurrentDir={cwd}{BEL}"


def hyperlink(text: str, url: str) -> str:
    return f"{OSC}8;;{url}{BEL}{text}{OSC}8;;{BEL}"
