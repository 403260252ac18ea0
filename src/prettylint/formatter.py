from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from prettylint.docs import RuleDocsLookup, lookup_rule_docs
from prettylint.engine.aggregate import aggregate
from prettylint.engine.types import LintResult, RulesMeta
from prettylint.reporters.pretty import render
from prettylint.terminal import TerminalCapabilities, detect_capabilities


def format_results(
    results: Iterable[LintResult],
    rules_meta: RulesMeta | None = None,
    *,
    capabilities: TerminalCapabilities | None = None,
    lookup: RuleDocsLookup | None = lookup_rule_docs,
    cwd: str | Path | None = None,
) -> str:
    """
    Format lint results as a pretty terminal report.

    Capabilities are detected from stdout when not given. Returns "" for a
    clean run.
    """

    root = os.fspath(cwd) if cwd is not None else os.getcwd()
    aggregation = aggregate(results, cwd=root)
    caps = capabilities if capabilities is not None else detect_capabilities()
    return render(aggregation, caps, rules_meta=rules_meta, lookup=lookup, cwd=root)
