from __future__ import annotations

import logging
import sys

LOGGER_NAME = "prettylint"

_QUIET_FORMAT = "prettylint: %(message)s"
_VERBOSE_FORMAT = "prettylint [%(levelname)s] %(name)s: %(message)s"


def resolve_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(*, verbose: bool, quiet: bool) -> int:
    """
    Route the `prettylint` loggers to stderr and return the chosen level.

    Only the package logger is touched, so embedding applications keep their
    own root configuration. Calling this again replaces the previous handler;
    the stream is looked up at call time so a swapped `sys.stderr` is honoured.
    """

    level = resolve_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_prettylint", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _QUIET_FORMAT))
    handler._prettylint = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return level
