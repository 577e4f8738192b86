import json
from dataclasses import dataclass
from datetime import timezone
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import Any, Optional

import typer

from difflogpack.config import (
    HeaderConfig,
    HeaderConfigError,
    build_header_config,
    load_header_config_from_file,
)
from difflogpack.logger import DiffLogger
from difflogpack.plugins import PluginError

app = typer.Typer(help="DiffLog CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


class _InputError(Exception):
    """Unreadable input document or header config."""


def _resolve_cli_version() -> str:
    try:
        return package_version("difflog")
    except PackageNotFoundError:
        from difflogpack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show DiffLog version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    else:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, indent=2)
    typer.echo(rendered, err=err, color=False)


def _read_document(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise _InputError(f"file not found: {path}") from error
    except json.JSONDecodeError as error:
        raise _InputError(f"invalid JSON ({path}): {error}") from error


def _load_header_config(
    config_path: Path | None,
    *,
    headers: list[str],
    hidden_headers: list[str],
) -> HeaderConfig:
    base = HeaderConfig()
    if config_path is not None:
        try:
            base = load_header_config_from_file(config_path)
        except FileNotFoundError as error:
            raise _InputError(f"header config not found: {config_path}") from error
        except HeaderConfigError as error:
            raise _InputError(str(error)) from error
    try:
        return build_header_config(visible=headers, hidden=hidden_headers, base_config=base)
    except HeaderConfigError as error:
        raise _InputError(str(error)) from error


@app.command()
def diff(
    previous: Path = typer.Argument(..., help="Path to the previous JSON document."),
    next: Path = typer.Argument(..., help="Path to the next JSON document."),
    header: Optional[list[str]] = typer.Option(
        None,
        "--header",
        help="Field shown as a header annotation and as an ordinary field (repeatable).",
    ),
    hidden_header: Optional[list[str]] = typer.Option(
        None,
        "--hidden-header",
        help="Field shown only as a header annotation (repeatable).",
    ),
    header_config: Optional[Path] = typer.Option(
        None,
        "--header-config",
        help="Path to JSON header config applied before --header options.",
    ),
    utc: bool = typer.Option(
        False,
        "--utc",
        help="Render timestamps in UTC instead of the local timezone.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable diff output.",
    ),
    exit_code: bool = typer.Option(
        False,
        "--exit-code",
        help="Exit with status 1 when the documents differ.",
    ),
) -> None:
    """Diff two JSON documents and print the changes."""
    try:
        previous_value = _read_document(previous)
        next_value = _read_document(next)
        config = _load_header_config(
            header_config,
            headers=header or [],
            hidden_headers=hidden_header or [],
        )
        logger = DiffLogger(config=config).set_color(not _OUTPUT_OPTIONS.no_color)
        if utc:
            logger = logger.set_local_timezone(timezone.utc)
        change = logger.diff_value(previous_value, next_value)
    except (_InputError, PluginError) as error:
        message = f"diff failed: {error}"
        if json_output:
            _echo_json(
                {
                    "status": "error",
                    "exit_code": 1,
                    "message": message,
                    "previous_path": str(previous),
                    "next_path": str(next),
                }
            )
        else:
            _echo(message, err=True)
        raise typer.Exit(code=1) from error

    status_code = 1 if exit_code and change is not None else 0

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": status_code,
                "changed": change is not None,
                "change": change.to_dict() if change is not None else None,
                "headers": config.to_dict()["headers"],
                "previous_path": str(previous),
                "next_path": str(next),
            }
        )
    elif change is None:
        _echo("no changes detected")
    else:
        _echo(logger.render(change))

    if status_code:
        raise typer.Exit(code=status_code)


def main() -> None:
    app()
