from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from prettylint import __version__
from prettylint.config import ConfigError, PrettyLintConfig, load_config, parse_hyperlink_mode
from prettylint.docs import make_rule_docs_lookup, resolve_doc_url
from prettylint.engine.aggregate import aggregate
from prettylint.engine.types import RulesMeta
from prettylint.logging_utils import configure_logging
from prettylint.reporters.eslint_json import ReportParseError, parse_eslint_report, parse_rules_meta
from prettylint.reporters.pretty import render
from prettylint.terminal import detect_capabilities

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="prettylint: pretty terminal reports for ESLint results.",
)
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose logs (printed to stderr)."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Reduce non-essential output."),
    ] = False,
) -> None:
    """prettylint CLI."""

    if verbose and quiet:
        raise typer.BadParameter("Choose at most one: --verbose or --quiet.")
    configure_logging(verbose=verbose, quiet=quiet)


def _load_config_or_exit(project_root: Path) -> PrettyLintConfig:
    try:
        return load_config(project_root)
    except ConfigError as exc:
        err_console.print(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2) from exc


def _read_input(input_path: str) -> str:
    if input_path.strip() == "-":
        return sys.stdin.read()
    return Path(input_path).read_text(encoding="utf-8", errors="replace")


@app.command()
def report(
    input_json: Annotated[
        str,
        typer.Argument(help="ESLint JSON report path (`eslint -f json`), or '-' to read from stdin."),
    ],
    rules_meta_path: Annotated[
        Path | None,
        typer.Option(
            "--rules-meta",
            exists=True,
            dir_okay=False,
            help="JSON file with rule metadata (rule id -> {docs: {url}}) used for documentation links.",
        ),
    ] = None,
    hyperlinks: Annotated[
        str | None,
        typer.Option("--hyperlinks", help="Link rule ids to their docs: auto, always, never (default: use config)."),
    ] = None,
    color: Annotated[
        bool | None,
        typer.Option("--color/--no-color", help="Force coloured output on or off (default: detect).", show_default=False),
    ] = None,
    exit_zero: Annotated[
        bool | None,
        typer.Option(
            "--exit-zero/--no-exit-zero",
            help="Exit 0 even when errors are reported (default: use config).",
            show_default=False,
        ),
    ] = None,
    project_root: Annotated[
        Path,
        typer.Option(
            "--project-root",
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Directory used for config lookup and relative paths (default: current directory).",
        ),
    ] = Path("."),
) -> None:
    """
    Render an ESLint JSON report as a grouped, aligned terminal summary.
    """

    config = _load_config_or_exit(project_root)
    if hyperlinks is not None:
        try:
            config = replace(config, hyperlinks=parse_hyperlink_mode(hyperlinks, field_name="--hyperlinks"))
        except ConfigError as exc:
            raise typer.BadParameter(str(exc)) from exc

    try:
        parsed = parse_eslint_report(_read_input(input_json))
        rules_meta: RulesMeta | None = parsed.rules_meta
        if rules_meta_path is not None:
            rules_meta = parse_rules_meta(rules_meta_path.read_text(encoding="utf-8"))
    except (OSError, ReportParseError) as exc:
        err_console.print(f"Invalid JSON report: {exc}")
        raise typer.Exit(code=2) from exc

    # `--color` only decides styling; interactivity still comes from the real stream.
    caps = detect_capabilities(Console(), hyperlinks=config.hyperlinks, cwd_hint=config.cwd_hint)
    if color is not None:
        caps = replace(caps, color=color)
    logger.debug("terminal capabilities: %s", caps)

    aggregation = aggregate(parsed.results, cwd=project_root)
    text = render(
        aggregation,
        caps,
        rules_meta=rules_meta,
        lookup=make_rule_docs_lookup(config.rule_docs),
        cwd=str(project_root),
    )
    if text:
        typer.echo(text, nl=False, color=caps.color)
    else:
        logger.info("no problems found in %d file(s)", len(parsed.results))

    effective_exit_zero = exit_zero if exit_zero is not None else config.exit_zero
    if aggregation.error_count > 0 and not effective_exit_zero:
        raise typer.Exit(code=1)


@app.command()
def docs(
    rule_id: Annotated[
        str,
        typer.Argument(help="Rule id to look up (e.g. no-console, @typescript-eslint/no-unused-vars)."),
    ],
    project_root: Annotated[
        Path,
        typer.Option(
            "--project-root",
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Directory used for config lookup (default: current directory).",
        ),
    ] = Path("."),
) -> None:
    """
    Print the documentation URL of a rule.
    """

    config = _load_config_or_exit(project_root)
    url = resolve_doc_url(rule_id.strip(), None, lookup=make_rule_docs_lookup(config.rule_docs))
    if url is None:
        err_console.print(f"No documentation known for rule: {rule_id}")
        raise typer.Exit(code=1)
    typer.echo(url)
