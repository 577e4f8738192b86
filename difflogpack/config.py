"""Header registrations and field visibility for value diffs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping


class HeaderConfigError(ValueError):
    """Raised when a header config payload is invalid."""


@dataclass(frozen=True, slots=True)
class HeaderConfig:
    """Immutable snapshot of registered headers.

    Each entry maps a header name to whether the field is also shown as an
    ordinary field. Names that are not registered are always visible.
    """

    headers: tuple[tuple[str, bool], ...] = ()

    @property
    def header_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.headers)

    def with_header(self, name: str, visible: bool = True) -> HeaderConfig:
        """Return a new config with ``name`` registered; the last registration wins."""
        if not isinstance(name, str) or not name:
            raise HeaderConfigError("Header name must be a non-empty string.")
        if not isinstance(visible, bool):
            raise HeaderConfigError(f"Header '{name}' visibility must be a boolean.")

        registered = dict(self.headers)
        registered[name] = visible
        return HeaderConfig(headers=tuple(registered.items()))

    def is_visible(self, name: str) -> bool:
        for header_name, visible in self.headers:
            if header_name == name:
                return visible
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "headers": [
                {"name": name, "visible": visible} for name, visible in self.headers
            ]
        }


DEFAULT_HEADER_CONFIG = HeaderConfig()


def build_header_config(
    *,
    visible: Iterable[str] = (),
    hidden: Iterable[str] = (),
    base_config: HeaderConfig = DEFAULT_HEADER_CONFIG,
) -> HeaderConfig:
    """Register visible headers, then hidden ones, on top of ``base_config``."""
    config = base_config
    for name in visible:
        config = config.with_header(name, True)
    for name in hidden:
        config = config.with_header(name, False)
    return config


def header_config_from_config(
    config: Mapping[str, Any],
    *,
    base_config: HeaderConfig = DEFAULT_HEADER_CONFIG,
) -> HeaderConfig:
    """Create a header config from a config mapping."""
    unknown = sorted(set(config.keys()) - {"headers"})
    if unknown:
        raise HeaderConfigError("Unsupported header config keys: " + ", ".join(unknown))

    entries = config.get("headers", [])
    if not isinstance(entries, list):
        raise HeaderConfigError("header config key 'headers' must be a list.")

    result = base_config
    for index, entry in enumerate(entries, start=1):
        name, visible = _read_entry(entry, index=index)
        result = result.with_header(name, visible)
    return result


def load_header_config_from_file(
    path: str | Path,
    *,
    base_config: HeaderConfig = DEFAULT_HEADER_CONFIG,
) -> HeaderConfig:
    """Load header config from JSON file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as error:
        raise HeaderConfigError(f"Invalid header config JSON ({config_path}): {error}") from error

    if not isinstance(raw, dict):
        raise HeaderConfigError(f"Header config must be a JSON object ({config_path}).")

    return header_config_from_config(raw, base_config=base_config)


def _read_entry(entry: Any, *, index: int) -> tuple[str, bool]:
    if isinstance(entry, str):
        return entry, True

    if not isinstance(entry, dict):
        raise HeaderConfigError(f"Header entry #{index} must be a string or JSON object.")

    unknown = sorted(set(entry.keys()) - {"name", "visible"})
    if unknown:
        raise HeaderConfigError(
            f"Header entry #{index} contains unsupported keys: {', '.join(unknown)}"
        )

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise HeaderConfigError(f"Header entry #{index} key 'name' must be a non-empty string.")

    visible = entry.get("visible", True)
    if not isinstance(visible, bool):
        raise HeaderConfigError(f"Header entry #{index} key 'visible' must be a boolean.")

    return name.strip(), visible
