from __future__ import annotations

import logging

import pytest

from prettylint.logging_utils import LOGGER_NAME
from prettylint.terminal import TerminalCapabilities

_TERMINAL_ENV = (
    "CI",
    "FORCE_HYPERLINK",
    "FORCE_COLOR",
    "NO_COLOR",
    "TERM_PROGRAM",
    "TERM_PROGRAM_VERSION",
    "VTE_VERSION",
    "WT_SESSION",
    "DOMTERM",
    "KITTY_WINDOW_ID",
    "TEAMCITY_VERSION",
)


@pytest.fixture(autouse=True)
def _isolate_terminal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _TERMINAL_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def plain_caps() -> TerminalCapabilities:
    return TerminalCapabilities(is_interactive_terminal=False, link_support=False, suppress_cwd_hint=False, color=False)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
