"""Unified CLI output formatting utilities.

Every command prints through :class:`OutputFormatter` so ``--json`` switches
the whole CLI to machine-readable output.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

BOX_RULE = "─" * 45


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON; otherwise output text
            indent: JSON indentation level
        """
        self.json_mode = json_mode
        self.indent = indent

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
    ) -> None:
        """Output success result (``message`` in text mode, ``data`` in JSON mode)."""
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output error result on stderr."""
        msg = message or str(error)
        if self.json_mode:
            to_json = getattr(error, "to_json_error", None)
            output = to_json() if callable(to_json) else {"message": msg, "code": error_code}
            output = {"error": error_code, **output, "message": msg}
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        """Output raw JSON data."""
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        """Output a plain text line (suppressed in JSON mode)."""
        if not self.json_mode:
            print(message)

    def session_banner(self, *, session: str, uuid: str, status: str) -> None:
        """Print the boxed session summary shown before launching."""
        self.text(f"┌{BOX_RULE}")
        self.text(f"│ Session: {session}")
        self.text(f"│ UUID:    {uuid}")
        self.text(f"│ Status:  {status}")
        self.text(f"└{BOX_RULE}")
        self.text("")


__all__ = ["OutputFormatter"]
