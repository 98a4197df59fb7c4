"""
claude-code-resumer - deterministic Claude Code sessions per folder and branch

Running ``cs`` in the same folder on the same git branch always reconnects to
the same Claude Code conversation; a different folder or branch gets its own.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
