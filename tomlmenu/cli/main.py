"""tomlmenu command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tomlmenu import __version__
from tomlmenu.cli import MenuError
from tomlmenu.cli._config_loader import load_base_config, read_pattern
from tomlmenu.cli._constants import BASE_CONFIG_FILE, COMMAND
from tomlmenu.cli._runner import MenuOutcome, run_menu
from tomlmenu.cli._schemas import ConfigDocument
from tomlmenu.cli.utils.shared import describe_command, ensure_root_logging
from tomlmenu.utils.pathing import default_config_dir

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI parser."""
    parser = argparse.ArgumentParser(
        prog=COMMAND,
        description="Pick a command from a TOML-defined menu with dmenu and run it.",
        epilog="The config may be piped in on standard input instead of passing a file path.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        metavar="CONFIG",
        help="Path to the menu config (TOML; .yaml/.yml files are read as YAML).",
    )
    parser.add_argument(
        "--config-dir",
        action="store_true",
        help=f"Print the directory searched for the base {BASE_CONFIG_FILE} and exit.",
    )
    base_group = parser.add_mutually_exclusive_group()
    base_group.add_argument(
        "--base-config",
        type=Path,
        help=f"Base config merged underneath the menu (default: {BASE_CONFIG_FILE} in the config directory).",
    )
    base_group.add_argument("--no-base-config", action="store_true", help="Do not merge any base config.")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the resolved menu without starting the selector."
    )
    parser.add_argument(
        "--wait", action="store_true", help="Wait for the chosen command and exit with its status."
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None, *, stdin: TextIO | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    ensure_root_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.config_dir:
        print(default_config_dir())
        return 0

    stdin = sys.stdin if stdin is None else stdin
    if args.config is None and stdin.isatty():
        parser.error("CONFIG is required unless a config is piped to standard input.")

    try:
        base = ConfigDocument() if args.no_base_config else load_base_config(args.base_config)
        pattern = read_pattern(args.config, stdin)
        outcome = run_menu(pattern, base, wait=args.wait, dry_run=args.dry_run)
    except MenuError as exc:
        logger.error("%s.", exc)
        return 1
    except OSError as exc:
        logger.error("can't read config file: %s.", exc)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 1

    if args.dry_run:
        _print_menu(outcome)
        return 0
    if outcome.launched:
        logger.debug("Started %s", describe_command(outcome.config.shell, outcome.command))
    return _exit_code(outcome.exit_status)


def _exit_code(status: int | None) -> int:
    """Map a child status to a process exit code; signal deaths become ``128 + signal``."""
    if status is None:
        return 0
    if status < 0:
        return 128 - status
    return status


def _print_menu(outcome: MenuOutcome) -> None:
    """Render the resolved entries in display order."""
    cfg = outcome.config
    caption_parts = [f"{len(outcome.entries)} entr{'y' if len(outcome.entries) == 1 else 'ies'}"]
    caption_parts.append(f"selector: {cfg.selector_program}")
    caption_parts.append(f"shell: {' '.join(cfg.shell)}")
    if cfg.scan_path:
        caption_parts.append("scan-path on")

    console = Console()
    table = Table(title="Menu", caption=" | ".join(caption_parts), expand=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold cyan", overflow="fold")
    table.add_column("Group", justify="right", style="yellow")
    table.add_column("Command", style="green", overflow="fold")
    for index, entry in enumerate(outcome.entries, start=1):
        table.add_row(str(index), escape(entry.name), str(entry.group), escape(entry.command))
    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
