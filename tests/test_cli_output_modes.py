import json
from pathlib import Path
import re

from typer.testing import CliRunner

from difflogpack.cli.app import app

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def _write_pair(tmp_path: Path) -> list[str]:
    previous = tmp_path / "previous.json"
    next_value = tmp_path / "next.json"
    previous.write_text(json.dumps({"count": 1, "gone": True}), encoding="utf-8")
    next_value.write_text(json.dumps({"count": 3, "new": "x"}), encoding="utf-8")
    return [str(previous), str(next_value)]


def test_cli_quiet_suppresses_success_text(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--quiet", "diff", *_write_pair(tmp_path)])

    assert result.exit_code == 0
    assert result.stdout.strip() == ""


def test_cli_quiet_still_prints_errors() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--quiet", "diff", "missing-a.json", "missing-b.json"])

    assert result.exit_code == 1
    assert "diff failed" in result.output


def test_cli_stable_json_default_is_compact(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["diff", *_write_pair(tmp_path), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    expected = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    assert result.stdout.strip() == expected


def test_cli_pretty_json_mode_is_multiline(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--pretty-json", "diff", *_write_pair(tmp_path), "--json"])

    assert result.exit_code == 0
    assert "\n  \"" in result.stdout


def test_cli_no_color_mode_disables_ansi_sequences(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--no-color", "diff", *_write_pair(tmp_path)])

    assert result.exit_code == 0
    assert ANSI_PATTERN.search(result.stdout) is None
    assert result.stdout == (
        "~ count: 1 -> 3 | 2\n"
        "- gone: true\n"
        '+ new: "x"\n'
    )


def test_cli_color_mode_emits_ansi_sequences(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["diff", *_write_pair(tmp_path)], color=True)

    assert result.exit_code == 0
    assert ANSI_PATTERN.search(result.stdout) is not None
    assert ANSI_PATTERN.sub("", result.stdout).startswith("~ count: 1 -> 3 | 2")
