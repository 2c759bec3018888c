"""Visibility synchronizer: keeps listed flags in step with tab switches.

The host shares one buffer list between all tabs. On leave, the tab's listed
buffers are remembered and hidden; on enter, the remembered ones are shown
again. Hook failures are not caught.
"""

from __future__ import annotations

import logging

from ..types import BufferId, Host, LifecycleHooks, WorkspaceId
from .cache import ScopeState

logger = logging.getLogger(__name__)


class VisibilitySynchronizer:
    """Handles the enter/leave/closed transitions for tabs."""

    def __init__(self, host: Host, state: ScopeState, hooks: LifecycleHooks | None = None) -> None:
        self._host = host
        self._state = state
        self._hooks = hooks or LifecycleHooks()

    def enter(self, workspace: WorkspaceId) -> None:
        """Re-list the cached buffers of ``workspace``.

        Handles that are no longer valid are skipped; the entry itself is left
        alone and gets rebuilt on the next leave or revalidate.
        """
        self._hooks.run("pre_tab_enter")
        buffers = self._state.cache.get(workspace)
        if buffers:
            shown = 0
            for buf in buffers:
                if self._host.is_buffer_valid(buf):
                    self._host.set_buffer_listed(buf, True)
                    shown += 1
            logger.debug("enter %s: listed %d/%d cached buffers", workspace, shown, len(buffers))
        self._hooks.run("post_tab_enter")

    def leave(self, workspace: WorkspaceId) -> None:
        """Snapshot the listed buffers of ``workspace`` and hide them."""
        self._hooks.run("pre_tab_leave")
        buffers = self.revalidate(workspace)
        for buf in buffers:
            self._host.set_buffer_listed(buf, False)
        self._state.last_left = workspace
        logger.debug("leave %s: cached and unlisted %d buffers", workspace, len(buffers))
        self._hooks.run("post_tab_leave")

    def closed(self, workspace: WorkspaceId | None = None) -> None:
        """Drop the cache entry of a destroyed tab.

        Precondition when ``workspace`` is None: the destroyed tab is the one
        most recently passed to :meth:`leave`. Hosts that can name the closed
        tab should pass it; otherwise a tab closed without being left first
        (closing a background tab) drops the wrong entry.
        """
        self._hooks.run("pre_tab_close")
        target = workspace if workspace is not None else self._state.last_left
        if target is not None:
            self._state.cache.delete(target)
            logger.debug("closed %s: cache entry dropped", target)
        self._hooks.run("post_tab_close")

    def revalidate(self, workspace: WorkspaceId) -> list[BufferId]:
        """Rebuild the entry for ``workspace`` from the host's valid buffers."""
        buffers = list(self._host.valid_buffers(workspace))
        self._state.cache.set(workspace, buffers)
        return buffers
