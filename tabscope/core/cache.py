"""Membership cache: which buffers belong to which tab.

Pure data. Callers are responsible for checking buffer validity.
"""

from __future__ import annotations

from typing import Iterator

from ..types import BufferId, WorkspaceId


class MembershipCache:
    """Ordered buffer lists keyed by workspace handle."""

    def __init__(self) -> None:
        self._entries: dict[WorkspaceId, list[BufferId]] = {}

    def get(self, workspace: WorkspaceId) -> list[BufferId] | None:
        return self._entries.get(workspace)

    def set(self, workspace: WorkspaceId, buffers: list[BufferId]) -> None:
        """Replace the entry for ``workspace`` wholesale."""
        self._entries[workspace] = list(buffers)

    def append(self, workspace: WorkspaceId, buffer: BufferId) -> list[BufferId]:
        """Append ``buffer`` to the entry, creating it if absent."""
        entry = self._entries.setdefault(workspace, [])
        entry.append(buffer)
        return entry

    def delete(self, workspace: WorkspaceId) -> None:
        self._entries.pop(workspace, None)

    def contains_elsewhere(self, buffer: BufferId, workspace: WorkspaceId) -> bool:
        """True if ``buffer`` is a member of any entry other than ``workspace``'s."""
        return any(
            buffer in buffers
            for ws, buffers in self._entries.items()
            if ws != workspace
        )

    def items(self) -> Iterator[tuple[WorkspaceId, list[BufferId]]]:
        return iter(list(self._entries.items()))

    def __contains__(self, workspace: object) -> bool:
        return workspace in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ScopeState:
    """Process-wide scoping state, built once and shared by every component."""

    def __init__(self) -> None:
        self.cache = MembershipCache()
        # Most recently left tab. The host's close event does not say which
        # tab went away, so this is what gets dropped from the cache.
        self.last_left: WorkspaceId | None = None
