from __future__ import annotations

import os
from pathlib import Path


def safe_relpath(path: str | Path, root: str | Path) -> str:
    """
    Return `path` relative to `root` for report output.

    Paths outside `root` are expressed with `..` segments, the way a shell would
    print them. Fall back to the path as given when no relative form exists
    (e.g. a different drive on Windows).
    """

    try:
        return os.path.relpath(os.fspath(path), os.fspath(root))
    except ValueError:
        return os.fspath(path)


def plural(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"
