"""
cs --clear: delete the session database.
"""
from __future__ import annotations

import argparse

from resumer.cli._output import OutputFormatter

from ._common import get_registry


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))
    registry = get_registry(args)
    cleared = registry.clear()
    message = "Session database cleared." if cleared else "Session database already empty."
    formatter.success({"registry": str(registry.path), "cleared": cleared}, message)
    return 0
