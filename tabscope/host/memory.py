"""In-memory editor host: one shared buffer list, tab pages, listed flags.

Behaves like the editors tabscope targets closely enough to drive the
scoping layer end to end without an editor process: tab switches fire
leave/enter events in the editor's order, closing a tab fires a close event
that (by default) does not say which tab went away, and prompts are answered
from a script.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..types import HostError

logger = logging.getLogger(__name__)


@dataclass
class BufferRecord:
    id: int
    name: str
    listed: bool = True
    modified: bool = False
    valid: bool = True


class InMemoryHost:
    """Simulated host implementing the ``Host`` Protocol.

    Listeners attached with :meth:`attach` receive ``on_tab_leave()``,
    ``on_tab_enter()``, ``on_tab_new_entered()`` and
    ``on_tab_closed(workspace=None)`` calls.
    """

    def __init__(
        self,
        answers: Iterable[int | str] | None = None,
        reports_closed_workspace: bool = False,
    ) -> None:
        self._buffers: dict[int, BufferRecord] = {}
        self._tabs: list[int] = []
        self._current: dict[int, int | None] = {}
        self._next_buffer = 1
        self._next_tab = 1
        self._reports_closed = reports_closed_workspace
        self.listeners: list = []
        self.answers: deque[int | str] = deque(answers or [])
        self.prompts: list[tuple[str, str]] = []
        self.errors: list[str] = []
        self.quit = False

        first = self._new_tab_id()
        self._tabs.append(first)
        self._current[first] = None
        self._active = first

    def attach(self, listener) -> None:
        self.listeners.append(listener)

    def _emit(self, event: str, *args) -> None:
        for listener in list(self.listeners):
            getattr(listener, event)(*args)

    def _new_tab_id(self) -> int:
        tab = self._next_tab
        self._next_tab += 1
        return tab

    def _new_buffer(self, name: str) -> int:
        buf = BufferRecord(id=self._next_buffer, name=name)
        self._next_buffer += 1
        self._buffers[buf.id] = buf
        return buf.id

    def _record(self, buffer: object) -> BufferRecord:
        rec = self._buffers.get(buffer)  # type: ignore[arg-type]
        if rec is None or not rec.valid:
            raise HostError(f"Invalid buffer id: {buffer}")
        return rec

    def _check_tab(self, workspace: object) -> int:
        if workspace not in self._tabs:
            raise HostError(f"Invalid tabpage id: {workspace}")
        return workspace  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Buffers
    # ------------------------------------------------------------------

    def valid_buffers(self, workspace: int) -> list[int]:
        # The shared list only ever reflects the active tab's scope.
        return [b.id for b in sorted(self._buffers.values(), key=lambda b: b.id) if b.valid and b.listed]

    def is_buffer_valid(self, buffer: int) -> bool:
        rec = self._buffers.get(buffer)
        return rec is not None and rec.valid

    def is_buffer_listed(self, buffer: int) -> bool:
        return self.is_buffer_valid(buffer) and self._buffers[buffer].listed

    def set_buffer_listed(self, buffer: int, listed: bool) -> None:
        self._record(buffer).listed = listed

    def destroy_buffer(self, buffer: int, force: bool) -> None:
        rec = self._record(buffer)
        if rec.modified and not force:
            raise HostError(f"Buffer {buffer} has unsaved changes (add force to override)")
        rec.valid = False
        rec.listed = False
        for tab, current in self._current.items():
            if current != buffer:
                continue
            if tab == self._active:
                self._current[tab] = self._previous_listed(buffer)
            else:
                self._current[tab] = None

    def buffer_name(self, buffer: int) -> str:
        return self._buffers[buffer].name

    def set_modified(self, buffer: int, modified: bool = True) -> None:
        self._record(buffer).modified = modified

    def find_buffer(self, name: str) -> int | None:
        for rec in self._buffers.values():
            if rec.valid and rec.name == name:
                return rec.id
        return None

    def listed_buffers(self) -> list[int]:
        return self.valid_buffers(self._active)

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    def active_workspace(self) -> int:
        return self._active

    def active_buffer(self) -> int | None:
        return self._current[self._active]

    def list_workspaces(self) -> list[int]:
        return list(self._tabs)

    def current_buffer_of(self, workspace: int) -> int | None:
        return self._current[self._check_tab(workspace)]

    def create_workspace(self) -> int:
        """Open a new tab right of the active one, showing a new empty buffer."""
        self._emit("on_tab_leave")
        tab = self._new_tab_id()
        self._tabs.insert(self._tabs.index(self._active) + 1, tab)
        self._current[tab] = self._new_buffer("")
        self._active = tab
        self._emit("on_tab_enter")
        self._emit("on_tab_new_entered")
        return tab

    tabnew = create_workspace

    def destroy_workspace(self, workspace: int) -> None:
        self._check_tab(workspace)
        if len(self._tabs) == 1:
            raise HostError("Cannot close last tab page")

        if workspace != self._active:
            self._tabs.remove(workspace)
            del self._current[workspace]
            self._emit_closed(workspace)
            return

        self._emit("on_tab_leave")
        index = self._tabs.index(workspace)
        self._tabs.remove(workspace)
        del self._current[workspace]
        self._active = self._tabs[min(index, len(self._tabs) - 1)]
        self._emit("on_tab_enter")
        self._emit_closed(workspace)

    def _emit_closed(self, workspace: int) -> None:
        if self._reports_closed:
            self._emit("on_tab_closed", workspace)
        else:
            self._emit("on_tab_closed")

    def focus_workspace(self, workspace: int) -> None:
        self._check_tab(workspace)
        if workspace == self._active:
            return
        self._emit("on_tab_leave")
        self._active = workspace
        self._emit("on_tab_enter")

    # ------------------------------------------------------------------
    # Windows
    # ------------------------------------------------------------------

    def focus_buffer(self, buffer: int) -> None:
        self._record(buffer)
        self._current[self._active] = buffer

    def focus_previous_buffer(self) -> None:
        current = self._current[self._active]
        target = self._previous_listed(current)
        if target is not None:
            self._current[self._active] = target

    def _previous_listed(self, current: int | None) -> int | None:
        listed = [b for b in self.valid_buffers(self._active) if b != current]
        if not listed:
            return None
        if current is None:
            return listed[-1]
        before = [b for b in listed if b < current]
        return before[-1] if before else listed[-1]

    def _replace_placeholder(self) -> None:
        current = self._current[self._active]
        if current is None:
            return
        rec = self._buffers[current]
        if rec.valid and rec.name == "" and not rec.modified:
            rec.valid = False
            rec.listed = False
            self._current[self._active] = None

    def open_buffer(self, name: str) -> int:
        """Edit a new file in the active tab (like ``:edit name``)."""
        existing = self.find_buffer(name)
        if existing is not None:
            self.edit(existing)
            return existing
        self._replace_placeholder()
        buffer = self._new_buffer(name)
        self._current[self._active] = buffer
        return buffer

    def edit(self, buffer: int) -> None:
        """Show an existing buffer in the active tab and list it."""
        rec = self._record(buffer)
        if self._current[self._active] != buffer:
            self._replace_placeholder()
        rec.listed = True
        self._current[self._active] = buffer

    # ------------------------------------------------------------------
    # Session and user interaction
    # ------------------------------------------------------------------

    def quit_session(self, force: bool) -> None:
        logger.debug("quit requested (force=%s)", force)
        self.quit = True

    def prompt_confirm(self, message: str, choices: Sequence[str]) -> int:
        self.prompts.append(("confirm", message))
        if not self.answers:
            return 0
        answer = self.answers.popleft()
        if isinstance(answer, int):
            return answer
        wanted = str(answer).strip().lower()
        for i, choice in enumerate(choices, 1):
            label = choice.replace("&", "").lower()
            if wanted and label and wanted in (label, label[0]):
                return i
        return 0

    def prompt_input(self, message: str) -> str:
        self.prompts.append(("input", message))
        if not self.answers:
            return ""
        return str(self.answers.popleft())

    def notify_error(self, message: str) -> None:
        logger.error("%s", message)
        self.errors.append(message)
