"""Reference lifecycle plugin that traces diff hooks to NDJSON."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from difflogpack.plugins.base import DiffEndEvent, DiffStartEvent, LifecyclePlugin


@dataclass(slots=True)
class LifecycleTracePlugin(LifecyclePlugin):
    output_path: str = "difflog-trace.ndjson"
    name: str = "lifecycle-trace"

    def on_diff_start(self, event: DiffStartEvent) -> None:
        self._append("on_diff_start", event.to_dict())

    def on_diff_end(self, event: DiffEndEvent) -> None:
        self._append("on_diff_end", event.to_dict())

    def _append(self, hook: str, event: dict) -> None:
        path = Path(self.output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(
            {"hook": hook, "plugin": self.name, "event": event},
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
