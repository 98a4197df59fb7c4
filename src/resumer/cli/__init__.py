"""
Command-line interface for claude-code-resumer (``cs``).

- _dispatcher: parser construction and the ``main`` entry point
- _output: output formatting (JSON/text modes)
- _args: argument registration helpers
- commands/: one module per action (start, list, clear)
"""
from ._args import add_dry_run_flag, add_json_flag, add_mode_flags, add_verbose_flag
from ._output import OutputFormatter

__all__ = [
    "OutputFormatter",
    "add_dry_run_flag",
    "add_json_flag",
    "add_mode_flags",
    "add_verbose_flag",
]
