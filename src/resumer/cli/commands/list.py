"""
cs --list: print every identifier in the session database.
"""
from __future__ import annotations

import argparse

from resumer.cli._output import OutputFormatter

from ._common import get_registry


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))
    registry = get_registry(args)
    sessions = registry.list()

    if formatter.json_mode:
        formatter.json_output(
            {"registry": str(registry.path), "count": len(sessions), "sessions": sessions}
        )
        return 0

    if not sessions:
        formatter.text("No sessions in database.")
        return 0

    formatter.text(f"Sessions ({len(sessions)}):")
    for session_id in sessions:
        formatter.text(f"  {session_id}")
    return 0
