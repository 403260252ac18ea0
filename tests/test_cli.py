from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from prettylint import __version__
from prettylint.cli import app


def _write_report(tmp_path: Path, *messages: dict, name: str = "report.json") -> Path:
    warnings = sum(1 for m in messages if m.get("severity") == 1 and not m.get("fatal"))
    payload = [
        {
            "filePath": str(tmp_path.resolve() / "src" / "a.js"),
            "messages": list(messages),
            "errorCount": len(messages) - warnings,
            "warningCount": warnings,
        }
    ]
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


_ERROR = {"ruleId": "no-undef", "severity": 2, "message": "'foo' is not defined.", "line": 4, "column": 2}
_WARNING = {"ruleId": "no-console", "severity": 1, "message": "Unexpected console statement.", "line": 9, "column": 1}


def test_version() -> None:
    res = CliRunner().invoke(app, ["--version"])
    assert res.exit_code == 0
    assert __version__ in res.output


def test_report_with_errors_exits_non_zero(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _ERROR, _WARNING)

    res = CliRunner().invoke(app, ["report", str(report), "--project-root", str(tmp_path), "--no-color"])

    assert res.exit_code == 1
    assert "Warning summary" in res.output
    assert "no-console  1 errors in 1 files" in res.output
    assert "Error details" in res.output
    assert "src/a.js:4:2" in res.output
    assert "error  4:2  foo is not defined." in res.output
    assert "no-undef" in res.output
    assert "1 warning, 1 error" in res.output


def test_report_exit_zero_flag(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _ERROR)
    res = CliRunner().invoke(app, ["report", str(report), "--project-root", str(tmp_path), "--exit-zero"])
    assert res.exit_code == 0
    assert "1 error" in res.output


def test_report_exit_zero_from_config(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.prettylint]\nexit-zero = true\n", encoding="utf-8")
    report = _write_report(tmp_path, _ERROR)
    res = CliRunner().invoke(app, ["report", str(report), "--project-root", str(tmp_path)])
    assert res.exit_code == 0


def test_report_warnings_only_succeeds(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _WARNING)
    res = CliRunner().invoke(app, ["report", str(report), "--project-root", str(tmp_path)])
    assert res.exit_code == 0
    assert "1 warning" in res.output
    assert "Error details" not in res.output


def test_report_reads_stdin(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _ERROR)
    res = CliRunner().invoke(
        app,
        ["report", "-", "--project-root", str(tmp_path), "--exit-zero"],
        input=report.read_text(encoding="utf-8"),
    )
    assert res.exit_code == 0
    assert "foo is not defined." in res.output


def test_report_clean_run_prints_nothing(tmp_path: Path) -> None:
    report = _write_report(tmp_path)
    res = CliRunner().invoke(app, ["--quiet", "report", str(report), "--project-root", str(tmp_path)])
    assert res.exit_code == 0
    assert res.output == ""


def test_report_hyperlinks_always(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _ERROR)
    res = CliRunner().invoke(
        app,
        ["report", str(report), "--project-root", str(tmp_path), "--hyperlinks", "always", "--exit-zero"],
    )
    assert res.exit_code == 0
    assert "\x1b]8;;https://eslint.org/docs/latest/rules/no-undef\x07" in res.output


def test_report_rules_meta_file_and_config_templates(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.prettylint]\nhyperlinks = "always"\n\n[tool.prettylint.rule-docs]\nacme = "https://acme.test/{rule}"\n',
        encoding="utf-8",
    )
    acme_error = dict(_ERROR, ruleId="acme/no-foo")
    report = _write_report(tmp_path, acme_error, _ERROR)
    meta = tmp_path / "meta.json"
    meta.write_text(json.dumps({"no-undef": {"docs": {"url": "https://meta.test/no-undef"}}}), encoding="utf-8")

    res = CliRunner().invoke(
        app,
        ["report", str(report), "--project-root", str(tmp_path), "--rules-meta", str(meta), "--exit-zero"],
    )

    assert res.exit_code == 0
    assert "\x1b]8;;https://acme.test/no-foo\x07" in res.output
    assert "\x1b]8;;https://meta.test/no-undef\x07" in res.output


def test_report_rejects_unknown_hyperlink_mode(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _ERROR)
    res = CliRunner().invoke(app, ["report", str(report), "--project-root", str(tmp_path), "--hyperlinks", "maybe"])
    assert res.exit_code == 2


def test_report_invalid_json(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{nope", encoding="utf-8")
    res = CliRunner().invoke(app, ["report", str(bad), "--project-root", str(tmp_path)])
    assert res.exit_code == 2
    assert "Invalid JSON report" in res.output


def test_report_missing_file(tmp_path: Path) -> None:
    res = CliRunner().invoke(app, ["report", str(tmp_path / "missing.json"), "--project-root", str(tmp_path)])
    assert res.exit_code == 2


def test_report_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.prettylint]\nhyperlinks = "sometimes"\n', encoding="utf-8")
    report = _write_report(tmp_path, _ERROR)
    res = CliRunner().invoke(app, ["report", str(report), "--project-root", str(tmp_path)])
    assert res.exit_code == 2
    assert "Invalid configuration" in res.output


def test_verbose_and_quiet_are_exclusive(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _ERROR)
    res = CliRunner().invoke(app, ["--verbose", "--quiet", "report", str(report)])
    assert res.exit_code != 0


def test_verbose_logs_capabilities(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _ERROR)
    res = CliRunner().invoke(app, ["--verbose", "report", str(report), "--project-root", str(tmp_path), "--exit-zero"])
    assert res.exit_code == 0
    assert "terminal capabilities" in res.output.lower()


def test_docs_command(tmp_path: Path) -> None:
    res = CliRunner().invoke(app, ["docs", "no-console", "--project-root", str(tmp_path)])
    assert res.exit_code == 0
    assert res.output.strip() == "https://eslint.org/docs/latest/rules/no-console"


def test_docs_command_unknown_rule(tmp_path: Path) -> None:
    res = CliRunner().invoke(app, ["docs", "private/rule", "--project-root", str(tmp_path)])
    assert res.exit_code == 1
    assert "No documentation known" in res.output


def test_report_color_flag_does_not_imply_interactive_terminal(tmp_path: Path) -> None:
    report = _write_report(tmp_path, _ERROR)

    res = CliRunner().invoke(app, ["report", str(report), "--project-root", str(tmp_path), "--color", "--exit-zero"])

    assert res.exit_code == 0
    assert "\x1b[34mError details\x1b[0m" in res.output
    assert "CurrentDir" not in res.output
