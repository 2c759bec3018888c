"""ScopeEngine: main orchestrator wiring all components together."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import load_config, resolve_hooks
from .core.cache import ScopeState
from .core.close import CloseOrchestrator
from .core.move import MoveOrchestrator
from .core.synchronizer import VisibilitySynchronizer
from .types import (
    BufferId,
    CloseAction,
    CloseOptions,
    Host,
    LifecycleHooks,
    MoveResult,
    ScopeConfig,
    SummaryRow,
    WorkspaceId,
)

logger = logging.getLogger(__name__)


class ScopeEngine:
    """Per-tab buffer scoping on top of a host with one shared buffer list.

    Usage:
        engine = ScopeEngine(host, config_path="./tabscope.yaml")

        # From the host's tab events
        engine.on_tab_leave()
        engine.on_tab_enter()
        engine.on_tab_closed()

        # User commands
        engine.close_buffer()
        engine.move_current_buffer(2)
    """

    def __init__(
        self,
        host: Host,
        config_path: str | Path | None = None,
        config: ScopeConfig | None = None,
        hooks: LifecycleHooks | None = None,
    ) -> None:
        self.config = config or load_config(config_path)
        self.host = host
        self.state = ScopeState()
        self.hooks = hooks if hooks is not None else resolve_hooks(self.config.hooks)

        self._sync = VisibilitySynchronizer(host, self.state, self.hooks)
        self._closer = CloseOrchestrator(host, self.state, self._sync, self.config.close)
        self._mover = MoveOrchestrator(host, self.state, self.config.move)

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    def on_tab_enter(self) -> None:
        self._sync.enter(self.host.active_workspace())

    def on_tab_leave(self) -> None:
        self._sync.leave(self.host.active_workspace())

    def on_tab_closed(self, workspace: WorkspaceId | None = None) -> None:
        """Handle a destroyed tab; see VisibilitySynchronizer.closed for the
        ordering assumption when ``workspace`` is not supplied."""
        self._sync.closed(workspace)

    def on_tab_new_entered(self) -> None:
        buffer = self.host.active_buffer()
        if buffer is not None:
            self.host.set_buffer_listed(buffer, True)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def revalidate(self) -> list[BufferId]:
        return self._sync.revalidate(self.host.active_workspace())

    def close_buffer(
        self,
        buffer: BufferId | None = None,
        force: bool | None = None,
        ask: bool | None = None,
    ) -> CloseAction:
        options = CloseOptions(
            buffer=buffer,
            force=self.config.close.force if force is None else force,
            ask=self.config.close.ask if ask is None else ask,
        )
        return self._closer.close_buffer(options)

    def move_current_buffer(self, target: int | str | None = None) -> MoveResult:
        return self._mover.move_current_buffer(target)

    def move_buffer(self, buffer: BufferId, target: WorkspaceId) -> None:
        self._mover.move_buffer(buffer, target)

    def summary(self) -> list[SummaryRow]:
        """One row per cached (tab, buffer) pair. Stale handles are skipped."""
        rows: list[SummaryRow] = []
        for workspace, buffers in self.state.cache.items():
            for buf in buffers:
                if not self.host.is_buffer_valid(buf):
                    continue
                rows.append(SummaryRow(workspace=workspace, buffer=buf, name=self.host.buffer_name(buf)))
        return rows
