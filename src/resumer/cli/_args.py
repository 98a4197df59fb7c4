"""Argument registration helpers for the ``cs`` parser."""
from __future__ import annotations

import argparse


def add_mode_flags(parser: argparse.ArgumentParser) -> None:
    """Add the mutually exclusive session/registry modes."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Force create new session (ignore database)",
    )
    group.add_argument(
        "--reset",
        action="store_true",
        help="Remove session from database and create new",
    )
    group.add_argument(
        "--list",
        "-l",
        dest="list_sessions",
        action="store_true",
        help="List all sessions in database",
    )
    group.add_argument(
        "--clear",
        dest="clear_sessions",
        action="store_true",
        help="Clear entire session database",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run/-n flag.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show session info without launching Claude",
    )


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag (debug logging on stderr)."""
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log diagnostic details to stderr",
    )


__all__ = [
    "add_mode_flags",
    "add_dry_run_flag",
    "add_json_flag",
    "add_verbose_flag",
]
