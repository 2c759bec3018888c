"""tabscope: per-tab buffer lists on top of a shared editor buffer list."""

from .config import load_config
from .engine import ScopeEngine
from .types import (
    CloseAction,
    CloseOptions,
    Host,
    LifecycleHooks,
    MoveResult,
    ScopeConfig,
    SummaryRow,
)

__version__ = "0.1.0"

__all__ = [
    "ScopeEngine",
    "load_config",
    "CloseAction",
    "CloseOptions",
    "Host",
    "LifecycleHooks",
    "MoveResult",
    "ScopeConfig",
    "SummaryRow",
]
