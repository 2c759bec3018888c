"""Smart close: only destroy a buffer when no other tab still holds it.

Decision table, after revalidating the active tab:

    held by another tab, tab has other buffers  -> unlist here, show previous
    held by another tab, tab has only this one  -> close the tab
    not held elsewhere, only buffer, >1 tabs    -> destroy buffer, close tab
    not held elsewhere, only buffer, last tab   -> quit (optionally confirmed)
    not held elsewhere, tab has other buffers   -> show previous, destroy
"""

from __future__ import annotations

import logging

from ..types import CloseAction, CloseConfig, CloseOptions, Host
from .cache import ScopeState
from .synchronizer import VisibilitySynchronizer

logger = logging.getLogger(__name__)


class CloseOrchestrator:

    def __init__(
        self,
        host: Host,
        state: ScopeState,
        synchronizer: VisibilitySynchronizer,
        config: CloseConfig | None = None,
    ) -> None:
        self._host = host
        self._state = state
        self._sync = synchronizer
        self._config = config or CloseConfig()

    def close_buffer(self, options: CloseOptions | None = None) -> CloseAction:
        options = options or CloseOptions(force=self._config.force, ask=self._config.ask)
        host = self._host
        workspace = host.active_workspace()
        target = options.buffer if options.buffer is not None else host.active_buffer()

        members = self._sync.revalidate(workspace)
        shared = self._state.cache.contains_elsewhere(target, workspace)

        if shared:
            if len(members) > 1:
                host.set_buffer_listed(target, False)
                host.focus_previous_buffer()
                action = CloseAction.HIDE
            else:
                host.destroy_workspace(workspace)
                action = CloseAction.CLOSE_WORKSPACE
        elif len(members) == 1:
            if len(host.list_workspaces()) > 1:
                host.destroy_buffer(target, force=options.force)
                host.destroy_workspace(workspace)
                action = CloseAction.DESTROY_AND_CLOSE_WORKSPACE
            else:
                action = self._quit(options)
        else:
            host.focus_previous_buffer()
            host.destroy_buffer(target, force=options.force)
            action = CloseAction.DESTROY

        logger.debug(
            "close buffer %s in %s (members=%d, shared=%s): %s",
            target, workspace, len(members), shared, action.value,
        )

        if action is not CloseAction.QUIT:
            self._sync.revalidate(host.active_workspace())
        return action

    def _quit(self, options: CloseOptions) -> CloseAction:
        choice = 1
        if options.ask:
            choice = self._host.prompt_confirm(self._config.confirm_message, self._config.choices)
        if choice != 1:
            logger.info("Quit declined, nothing closed")
            return CloseAction.QUIT_DECLINED
        self._host.quit_session(force=True)
        return CloseAction.QUIT
