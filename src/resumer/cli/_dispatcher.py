"""
CLI dispatcher for ``cs``.

``cs`` has no subcommands: the mode flags pick one handler from
``resumer.cli.commands`` (list, clear, or the default start).
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from resumer.cli._args import add_dry_run_flag, add_json_flag, add_mode_flags, add_verbose_flag
from resumer.cli._output import OutputFormatter
from resumer.core.exceptions import ResumerError

logger = logging.getLogger(__name__)

DESCRIPTION = """\
cs - Claude Code Session Manager

Start or resume the Claude Code session tied to the current folder and git
branch. The same folder+branch always maps to the same session."""

EPILOG = """\
SESSION FORMAT:
    <folder>+<branch> -> deterministic UUID v5
    Example: my-project+feature/auth -> 4b513bfa-8c71-512b-...

TROUBLESHOOTING:
    If you see "No conversation found" error:
        cs --reset   # Clears stale entry and creates fresh session

ENVIRONMENT VARIABLES:
    CS_NAMESPACE    Custom UUID v5 namespace (default: DNS namespace)
                    Example: export CS_NAMESPACE="your-custom-uuid-here"
    CS_DB_PATH      Session database location (default: ~/.cs/sessions)
    CS_CONFIG       Config file location (default: ~/.cs/config.yaml)
    CS_<SECTION>__<KEY>
                    Override any config key, e.g. CS_LAUNCHER__COMMAND=claude

FILES:
    ~/.cs/sessions     Session database (one UUID per line)
    ~/.cs/config.yaml  Optional configuration overrides
"""


def _get_version() -> str:
    """Get the package version string."""
    from resumer import __version__

    return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the ``cs`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="cs",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    add_mode_flags(parser)
    add_dry_run_flag(parser)
    add_json_flag(parser)
    add_verbose_flag(parser)
    return parser


def select_command(args: argparse.Namespace) -> Callable[[argparse.Namespace], int]:
    """Return the handler for the parsed flags."""
    from resumer.cli.commands import clear, list as list_cmd, start

    if args.list_sessions:
        return list_cmd.main
    if args.clear_sessions:
        return clear.main
    return start.main


def _setup(args: argparse.Namespace) -> None:
    from resumer.core.config import ConfigManager, LoggingConfig
    from resumer.core.stdlib_logging import configure_logging

    config = ConfigManager().load_config()
    log_cfg = LoggingConfig(config)
    configure_logging(level=log_cfg.level, log_path=log_cfg.path, verbose=bool(args.verbose))
    args._config = config


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the ``cs`` CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors). When a session is
        launched with process replacement this function does not return.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)
    formatter = OutputFormatter(json_mode=bool(args.json))

    try:
        _setup(args)
        func = select_command(args)
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except ResumerError as e:
        logger.debug("%s: %s (context=%s)", e.__class__.__name__, e, e.context)
        formatter.error(e, error_code=e.__class__.__name__)
        return 1
    except Exception as e:
        logger.debug("unexpected error", exc_info=True)
        formatter.error(e)
        return 1


def cli() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
