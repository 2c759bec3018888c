"""All dataclasses, Protocols, and type aliases for tabscope."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Protocol, Sequence, runtime_checkable

# Host handles are opaque; the in-memory host uses ints, an editor bridge may
# use whatever its API hands out.
WorkspaceId = Hashable
BufferId = Hashable

Hook = Callable[[], None]

HOOK_SLOTS = (
    "pre_tab_enter",
    "post_tab_enter",
    "pre_tab_leave",
    "post_tab_leave",
    "pre_tab_close",
    "post_tab_close",
)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ScopeError(Exception):
    """Base error for tabscope."""


class InvalidTargetError(ScopeError):
    """A move target does not resolve to a live workspace."""

    def __init__(self, target: object) -> None:
        self.target = target
        super().__init__(f"Invalid target tab: {target!r}")


class HostError(ScopeError):
    """The host refused an operation (unsaved changes, last tab, ...)."""


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

@dataclass
class LifecycleHooks:
    """Zero-argument callbacks run around each transition. Any slot may be None."""
    pre_tab_enter: Hook | None = None
    post_tab_enter: Hook | None = None
    pre_tab_leave: Hook | None = None
    post_tab_leave: Hook | None = None
    pre_tab_close: Hook | None = None
    post_tab_close: Hook | None = None

    def run(self, slot: str) -> None:
        hook = getattr(self, slot)
        if hook is not None:
            hook()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@dataclass
class CloseOptions:
    buffer: BufferId | None = None  # None = active buffer of the active tab
    force: bool = True              # discard unsaved changes
    ask: bool = True                # confirm before quitting the session


class CloseAction(str, Enum):
    """What a smart close ended up doing."""
    HIDE = "hide"                                            # unlisted here, still open elsewhere
    CLOSE_WORKSPACE = "close_workspace"                      # only buffer survives in another tab
    DESTROY_AND_CLOSE_WORKSPACE = "destroy_and_close_workspace"
    QUIT = "quit"
    QUIT_DECLINED = "quit_declined"
    DESTROY = "destroy"


@dataclass
class MoveResult:
    moved: bool
    target: WorkspaceId | None = None
    created: bool = False  # target workspace was created for this move


@dataclass
class SummaryRow:
    workspace: WorkspaceId
    buffer: BufferId
    name: str


# ---------------------------------------------------------------------------
# Host
# ---------------------------------------------------------------------------

@runtime_checkable
class Host(Protocol):
    """Editor primitives the scoping layer drives."""

    def valid_buffers(self, workspace: WorkspaceId) -> list[BufferId]: ...
    def is_buffer_valid(self, buffer: BufferId) -> bool: ...
    def is_buffer_listed(self, buffer: BufferId) -> bool: ...
    def set_buffer_listed(self, buffer: BufferId, listed: bool) -> None: ...
    def destroy_buffer(self, buffer: BufferId, force: bool) -> None: ...
    def active_workspace(self) -> WorkspaceId: ...
    def active_buffer(self) -> BufferId | None: ...
    def list_workspaces(self) -> list[WorkspaceId]: ...
    def create_workspace(self) -> WorkspaceId: ...
    def destroy_workspace(self, workspace: WorkspaceId) -> None: ...
    def focus_workspace(self, workspace: WorkspaceId) -> None: ...
    def focus_buffer(self, buffer: BufferId) -> None: ...
    def focus_previous_buffer(self) -> None: ...
    def quit_session(self, force: bool) -> None: ...
    def prompt_confirm(self, message: str, choices: Sequence[str]) -> int: ...
    def prompt_input(self, message: str) -> str: ...
    def notify_error(self, message: str) -> None: ...
    def buffer_name(self, buffer: BufferId) -> str: ...


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class CloseConfig:
    force: bool = True
    ask: bool = True
    confirm_message: str = "You're about to close the last tab. Do you want to quit?"
    choices: list[str] = field(default_factory=lambda: ["&Yes", "&No"])


@dataclass
class MoveConfig:
    prompt: str = "Move buf to: "
    invalid_target_message: str = "Invalid target tab"


@dataclass
class HookConfig:
    """Hook slot name -> "package.module:attribute" import string."""
    imports: dict[str, str] = field(default_factory=dict)


@dataclass
class ScopeConfig:
    version: str = "1.0"
    close: CloseConfig = field(default_factory=CloseConfig)
    move: MoveConfig = field(default_factory=MoveConfig)
    hooks: HookConfig = field(default_factory=HookConfig)
