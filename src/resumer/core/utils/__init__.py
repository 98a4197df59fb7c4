"""Small shared helpers (subprocess, git)."""
