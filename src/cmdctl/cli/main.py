#!/usr/bin/env python3
"""
CLI entry point for the command controller (cmdctl command).
"""

from __future__ import annotations

import argparse
import sys

from cmdctl.builtins import register_builtins
from cmdctl.config import DEFAULTS, get_config_manager
from cmdctl.core.controller import Controller
from cmdctl.core.datamodels import CommandStatus
from cmdctl.core.handler import describe
from cmdctl.core.registry import HandlerRegistry
from cmdctl.log import configure_logging

EXIT_CODES = {
    CommandStatus.OK: 0,
    CommandStatus.FAILED: 1,
    CommandStatus.UNKNOWN: 2,
    CommandStatus.INVALID: 2,
}


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_registry() -> HandlerRegistry:
    """Registry with every built-in command."""
    return register_builtins(HandlerRegistry())


def print_commands(registry: HandlerRegistry):
    """Print registered commands."""
    print("Commands:\n")
    for handler in sorted(registry.all(), key=lambda h: h.name()):
        print(f"  {handler.name():<16} {describe(handler)}")
    print()


def print_config():
    """Print current configuration."""
    cfg_mgr = get_config_manager()
    settings = cfg_mgr.list_settings()

    print(f"Config file: {cfg_mgr.CONFIG_FILE}")

    if settings:
        print("\nCustom settings:")
        for key, value in settings.items():
            print(f"  {key}: {value}")

    print("\nDefaults (used when not set):")
    for key, value in DEFAULTS.items():
        if key not in settings:
            print(f"  {key}: {value}")

    print("\nSet with: cmdctl --config-set key=value")
    print(f"Available keys: {', '.join(DEFAULTS)}")
    print()


def run_once(controller: Controller, tokens: list[str]) -> int:
    """Dispatch a single command, print its result and return the exit code."""
    result = controller.run(tokens)
    text = result.render()
    if text:
        print(text, file=sys.stdout if result.ok else sys.stderr)
    return EXIT_CODES[result.status]


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the cmdctl CLI."""
    cfg_mgr = get_config_manager()
    cfg = cfg_mgr.config

    parser = argparse.ArgumentParser(
        description="Dispatch commands to registered handlers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Config file: {cfg_mgr.CONFIG_FILE}

Examples:
    cmdctl                             # Interactive REPL
    cmdctl echo hello world            # Run one command
    cmdctl --complete he               # Print completions for a prefix
    cmdctl --list                      # List commands
    cmdctl --config-set max_workers=8  # Set default worker count
        """,
    )
    parser.add_argument("command", nargs=argparse.REMAINDER,
                        help="Command name followed by its arguments")
    parser.add_argument("--list", "-l", action="store_true", help="List available commands")
    parser.add_argument("--complete", metavar="PREFIX",
                        help="Print completions for PREFIX, one per line")
    parser.add_argument("--workers", "-w", type=positive_int, default=cfg.get("max_workers"),
                        help=f"Worker threads (default: {cfg.get('max_workers')})")
    parser.add_argument("--log-level", default=cfg.get("log_level"),
                        help=f"Log level (default: {cfg.get('log_level')})")
    parser.add_argument("--simple", action="store_true", default=cfg.get("simple"),
                        help="Use simple REPL (no prompt_toolkit features)")

    # Config management
    parser.add_argument("--config", action="store_true", help="Show current config")
    parser.add_argument("--config-set", metavar="KEY=VALUE", help="Set a config value")
    parser.add_argument("--config-del", metavar="KEY", help="Reset a config value to its default")

    args = parser.parse_args(argv)

    if args.config:
        print_config()
        return 0

    if args.config_set:
        key, sep, value = args.config_set.partition("=")
        if not sep:
            print("Error: expected KEY=VALUE", file=sys.stderr)
            return 2
        try:
            cfg_mgr.set(key.strip(), value.strip() or None)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Set {key.strip()} = {value.strip()}")
        return 0

    if args.config_del:
        try:
            cfg_mgr.unset(args.config_del)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Reset {args.config_del} to default")
        return 0

    configure_logging(args.log_level, cfg.get("log_file"))
    registry = build_registry()

    if args.list:
        print_commands(registry)
        return 0

    with Controller(registry, max_workers=args.workers) as controller:
        if args.complete is not None:
            for suggestion in controller.autocomplete(args.complete):
                print(suggestion)
            return 0

        if args.command:
            return run_once(controller, args.command)

        if args.simple:
            from cmdctl.cli.repl import simple_repl
            simple_repl(controller, prompt=cfg.get("prompt"))
        else:
            from cmdctl.cli.repl import repl
            repl(controller, prompt=cfg.get("prompt"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
