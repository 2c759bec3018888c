"""CLI: tabscope init, config validate, replay."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config import DEFAULT_CONFIG_TEMPLATE, load_config, validate_config
from ..replay import ReplayRunner, load_script
from ..types import ScopeError


def cmd_init(args):
    """Write a default config file to the current directory."""
    output = Path.cwd() / "tabscope.yaml"
    if output.exists() and not args.force:
        print(f"Config file already exists: {output}", file=sys.stderr)
        print("Use --force to overwrite.", file=sys.stderr)
        sys.exit(1)

    output.write_text(DEFAULT_CONFIG_TEMPLATE)
    print(f"Created {output}")


def cmd_config_validate(args):
    """Validate config file."""
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        print("Config validation errors:")
        for err in errors:
            print(f"  - {err}")
        sys.exit(1)
    else:
        print("Config is valid.")
        print(f"  Close: force={config.close.force} ask={config.close.ask}")
        print(f"  Hooks: {len(config.hooks.imports)}")


def cmd_replay(args):
    """Replay a scripted session and print the resulting scopes."""
    try:
        config = load_config(args.config)
        script = load_script(args.script)
    except Exception as e:
        print(f"Error loading replay: {e}", file=sys.stderr)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        for err in errors:
            print(f"Config error: {err}", file=sys.stderr)
        sys.exit(1)

    try:
        runner = ReplayRunner.from_script(script, config=config)
    except Exception as e:
        print(f"Error loading hooks: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        rows = runner.run(script.get("steps", []))
    except (ValueError, ScopeError) as e:
        print(f"Replay failed: {e}", file=sys.stderr)
        sys.exit(1)

    for verb, result in runner.results:
        if result is not None:
            print(f"{verb}: {getattr(result, 'value', result)}")
    for message in runner.host.errors:
        print(f"error: {message}")
    if runner.host.quit:
        print("Session quit.")
        return

    print()
    print(f"{'tab':<5} {'buf':<5} name")
    for row in rows:
        print(f"{row.workspace!s:<5} {row.buffer!s:<5} {row.name}")
    print()
    active = runner.host.active_workspace()
    for tab, names in runner.listed_by_tab().items():
        marker = "*" if tab == active else " "
        print(f"{marker}tab {tab}: {', '.join(names) or '(empty)'}")


def main():
    parser = argparse.ArgumentParser(
        prog="tabscope",
        description="Per-tab buffer scoping for editors with a shared buffer list",
    )
    parser.add_argument("--config", "-c", help="Path to config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging to stderr")

    subparsers = parser.add_subparsers(dest="command")

    # init
    init_parser = subparsers.add_parser("init", help="Write a default tabscope.yaml")
    init_parser.add_argument("--force", action="store_true", help="Overwrite existing config")

    # replay
    replay_parser = subparsers.add_parser("replay", help="Replay a scripted session headlessly")
    replay_parser.add_argument("script", help="Replay script (YAML or JSON)")

    # config validate
    config_parser = subparsers.add_parser("config", help="Config operations")
    config_sub = config_parser.add_subparsers(dest="config_command")
    config_sub.add_parser("validate", help="Validate config file")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init":
        cmd_init(args)
    elif args.command == "replay":
        cmd_replay(args)
    elif args.command == "config":
        if args.config_command == "validate":
            cmd_config_validate(args)
        else:
            print("Usage: tabscope config validate")
            sys.exit(1)


if __name__ == "__main__":
    main()
