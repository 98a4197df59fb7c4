"""Core library for claude-code-resumer (no CLI concerns)."""
