"""Headless replay runner: drive a scripted editing session through the engine.

Script format (YAML or JSON)::

    buffers: [main.py, util.py]      # opened in the first tab
    answers: [y]                     # prompt answers, consumed in order
    steps:
      - tabnew
      - open: notes.md
      - tabnext: 1
      - move: 2
      - close
      - close: {buffer: util.py, force: false}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .engine import ScopeEngine
from .host.memory import InMemoryHost
from .types import ScopeConfig, SummaryRow

logger = logging.getLogger(__name__)


def load_script(path: str | Path) -> dict[str, Any]:
    """Load a replay script from YAML or JSON."""
    p = Path(path)
    text = p.read_text()
    if p.suffix == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Replay script must be a mapping, got {type(raw).__name__}")
    return raw


class ReplayRunner:
    """Run script steps against an ``InMemoryHost`` wired to a ``ScopeEngine``."""

    def __init__(self, engine: ScopeEngine, host: InMemoryHost) -> None:
        self.engine = engine
        self.host = host
        self.results: list[tuple[str, Any]] = []

    @classmethod
    def from_script(cls, script: dict[str, Any], config: ScopeConfig | None = None) -> ReplayRunner:
        host = InMemoryHost(answers=script.get("answers", []))
        engine = ScopeEngine(host, config=config or ScopeConfig())
        host.attach(engine)
        runner = cls(engine, host)
        for name in script.get("buffers", []):
            host.open_buffer(str(name))
        return runner

    def run(self, steps: list[Any]) -> list[SummaryRow]:
        for step in steps:
            verb, arg = self._split(step)
            handler = getattr(self, f"_step_{verb}", None)
            if handler is None:
                raise ValueError(f"Unknown replay step: {verb}")
            result = handler(arg)
            logger.debug("step %s %r -> %r", verb, arg, result)
            self.results.append((verb, result))
            if self.host.quit:
                break
        return self.engine.summary()

    @staticmethod
    def _split(step: Any) -> tuple[str, Any]:
        if isinstance(step, str):
            return step, None
        if isinstance(step, dict) and len(step) == 1:
            ((verb, arg),) = step.items()
            return str(verb), arg
        raise ValueError(f"Malformed replay step: {step!r}")

    def _buffer(self, name: Any) -> int:
        buffer = self.host.find_buffer(str(name))
        if buffer is None:
            raise ValueError(f"No open buffer named {name!r}")
        return buffer

    def _step_open(self, arg):
        return self.host.open_buffer(str(arg))

    def _step_edit(self, arg):
        self.host.edit(self._buffer(arg))

    def _step_modify(self, arg):
        self.host.set_modified(self._buffer(arg), True)

    def _step_tabnew(self, arg):
        return self.host.create_workspace()

    def _tab(self, arg: Any) -> int:
        """Resolve a 1-based tab position to its handle."""
        tabs = self.host.list_workspaces()
        try:
            index = int(arg)
        except (TypeError, ValueError):
            raise ValueError(f"No tab at position {arg!r}") from None
        if not 1 <= index <= len(tabs):
            raise ValueError(f"No tab at position {index} (have {len(tabs)})")
        return tabs[index - 1]

    def _step_tabnext(self, arg):
        self.host.focus_workspace(self._tab(arg))

    def _step_tabclose(self, arg):
        target = self.host.active_workspace() if arg is None else self._tab(arg)
        self.host.destroy_workspace(target)

    def _step_close(self, arg):
        opts = dict(arg or {})
        buffer = self._buffer(opts["buffer"]) if "buffer" in opts else None
        return self.engine.close_buffer(buffer=buffer, force=opts.get("force"), ask=opts.get("ask"))

    def _step_move(self, arg):
        return self.engine.move_current_buffer(arg)

    def listed_by_tab(self) -> dict[int, list[str]]:
        """Names each tab would list when entered (the active tab from the host)."""
        active = self.host.active_workspace()
        out: dict[int, list[str]] = {}
        for tab in self.host.list_workspaces():
            if tab == active:
                ids = self.host.listed_buffers()
            else:
                ids = [b for b in (self.engine.state.cache.get(tab) or []) if self.host.is_buffer_valid(b)]
            out[tab] = [self.host.buffer_name(b) for b in ids]
        return out
