"""Move the current buffer into another tab's scope."""

from __future__ import annotations

import logging

from ..types import BufferId, Host, InvalidTargetError, MoveConfig, MoveResult, WorkspaceId
from .cache import ScopeState

logger = logging.getLogger(__name__)


def _parse_index(raw: object) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


class MoveOrchestrator:

    def __init__(self, host: Host, state: ScopeState, config: MoveConfig | None = None) -> None:
        self._host = host
        self._state = state
        self._config = config or MoveConfig()

    def move_current_buffer(self, target: int | str | None = None) -> MoveResult:
        """Move the active buffer to the tab at 1-based position ``target``.

        With a single tab, a new tab is created to receive the buffer and
        ``target`` is ignored. Otherwise a missing or non-numeric ``target``
        is asked for; an empty answer cancels.
        """
        host = self._host
        buffer = host.active_buffer()
        if buffer is None or not host.is_buffer_listed(buffer):
            return MoveResult(moved=False)

        workspaces = host.list_workspaces()
        created = False
        if len(workspaces) <= 1:
            destination = self._split_into_new_workspace(buffer)
            created = True
        else:
            index = _parse_index(target)
            if index is None:
                answer = host.prompt_input(self._config.prompt)
                if answer == "":
                    logger.info("Move cancelled")
                    return MoveResult(moved=False)
                index = _parse_index(answer)
            try:
                destination = self.resolve_target(index, workspaces)
            except InvalidTargetError as e:
                logger.warning("%s", e)
                host.notify_error(self._config.invalid_target_message)
                return MoveResult(moved=False)

        if destination == host.active_workspace():
            # Appending to its own tab then unlisting would drop it from every scope.
            logger.debug("buffer %s already in target tab %s", buffer, destination)
            return MoveResult(moved=False, target=destination)

        self.move_buffer(buffer, destination)
        return MoveResult(moved=True, target=destination, created=created)

    def resolve_target(self, index: int | None, workspaces: list[WorkspaceId]) -> WorkspaceId:
        """Translate a 1-based tab position into the tab's handle."""
        if index is None or not 1 <= index <= len(workspaces):
            raise InvalidTargetError(index)
        return workspaces[index - 1]

    def move_buffer(self, buffer: BufferId, target: WorkspaceId) -> None:
        """Add ``buffer`` to ``target``'s scope and hide it in the active tab.

        The buffer stays listed here when it is the active tab's only buffer.
        The active tab's cache entry is left for the next leave/revalidate.
        """
        host = self._host
        self._state.cache.append(target, buffer)

        origin = host.active_workspace()
        if len(host.valid_buffers(origin)) > 1:
            host.set_buffer_listed(buffer, False)
            if buffer == host.active_buffer():
                host.focus_previous_buffer()
        logger.debug("moved buffer %s from %s to %s", buffer, origin, target)

    def _split_into_new_workspace(self, buffer: BufferId) -> WorkspaceId:
        # Creating a tab focuses it and opens an empty buffer there; show the
        # moved buffer instead, drop the empty one, then go back.
        host = self._host
        origin = host.active_workspace()
        created = host.create_workspace()
        placeholder = host.active_buffer()
        host.focus_buffer(buffer)
        if placeholder is not None and placeholder != buffer:
            host.destroy_buffer(placeholder, force=True)
        host.focus_workspace(origin)
        return created
