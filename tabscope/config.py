"""Configuration loading, validation, and defaults."""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any

import yaml

from .types import (
    HOOK_SLOTS,
    CloseConfig,
    HookConfig,
    LifecycleHooks,
    MoveConfig,
    ScopeConfig,
)

CONFIG_FILENAMES = [
    "tabscope.yaml",
    "tabscope.yml",
    "tabscope.json",
]

DEFAULT_CONFIG_TEMPLATE = """\
# tabscope configuration
version: "1.0"

close:
  # Discard unsaved changes when a buffer is destroyed
  force: true
  # Ask before quitting when the last buffer of the last tab is closed
  ask: true
  confirm_message: "You're about to close the last tab. Do you want to quit?"
  choices: ["&Yes", "&No"]

move:
  prompt: "Move buf to: "
  invalid_target_message: "Invalid target tab"

# Optional zero-argument callbacks, as "package.module:attribute"
hooks: {}
#  pre_tab_enter: "mypkg.hooks:before_enter"
#  post_tab_leave: "mypkg.hooks:after_leave"
"""


def _discover_config() -> Path | None:
    """Search CWD then parent dirs up to home for a config file."""
    cwd = Path.cwd()
    home = Path.home()
    search = cwd
    while True:
        for name in CONFIG_FILENAMES:
            candidate = search / name
            if candidate.is_file():
                return candidate
        if search == home or search == search.parent:
            break
        search = search.parent
    return None


def _build_config(raw: dict[str, Any]) -> ScopeConfig:
    """Build a ScopeConfig from a raw dict."""
    close_raw = raw.get("close", {}) or {}
    defaults = CloseConfig()
    close_config = CloseConfig(
        force=close_raw.get("force", defaults.force),
        ask=close_raw.get("ask", defaults.ask),
        confirm_message=close_raw.get("confirm_message", defaults.confirm_message),
        choices=list(close_raw.get("choices", defaults.choices)),
    )

    move_raw = raw.get("move", {}) or {}
    move_defaults = MoveConfig()
    move_config = MoveConfig(
        prompt=move_raw.get("prompt", move_defaults.prompt),
        invalid_target_message=move_raw.get(
            "invalid_target_message", move_defaults.invalid_target_message
        ),
    )

    hooks_raw = raw.get("hooks", {}) or {}
    hook_config = HookConfig(imports={str(k): str(v) for k, v in hooks_raw.items()})

    return ScopeConfig(
        version=str(raw.get("version", "1.0")),
        close=close_config,
        move=move_config,
        hooks=hook_config,
    )


def validate_config(config: ScopeConfig) -> list[str]:
    """Validate a config. Returns list of error strings (empty = valid)."""
    errors: list[str] = []

    for slot, target in config.hooks.imports.items():
        if slot not in HOOK_SLOTS:
            errors.append(f"Unknown hook slot '{slot}' (expected one of: {', '.join(HOOK_SLOTS)})")
        module, sep, attr = target.partition(":")
        if not sep or not module or not attr:
            errors.append(f"Hook '{slot}' must look like 'package.module:attribute', got '{target}'")

    for key in ("force", "ask"):
        value = getattr(config.close, key)
        if not isinstance(value, bool):
            errors.append(f"close.{key} must be true or false, got {value!r}")

    if len(config.close.choices) < 2:
        errors.append("close.choices needs at least a 'yes' and a 'no' option")

    if not config.move.prompt.strip():
        errors.append("move.prompt must not be empty")

    return errors


def _import_hook(target: str):
    module_name, _, attr_path = target.partition(":")
    obj = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    if not callable(obj):
        raise TypeError(f"Hook target is not callable: {target}")
    return obj


def resolve_hooks(hook_config: HookConfig) -> LifecycleHooks:
    """Import the configured hook callables into a LifecycleHooks."""
    hooks = LifecycleHooks()
    for slot, target in hook_config.imports.items():
        if slot not in HOOK_SLOTS:
            raise ValueError(f"Unknown hook slot: {slot}")
        setattr(hooks, slot, _import_hook(target))
    return hooks


def load_config(
    config_path: str | Path | None = None,
    config_dict: dict | None = None,
) -> ScopeConfig:
    """Load config from dict, explicit path, or auto-discover."""
    if config_dict is not None:
        return _build_config(config_dict)

    if config_path is not None:
        path = Path(config_path)
    else:
        path = _discover_config()

    if path is None:
        # Return defaults
        return _build_config({})

    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    text = path.read_text()
    if path.suffix == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text) or {}

    return _build_config(raw)
