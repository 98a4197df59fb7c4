"""Command handlers. Each module exposes ``main(args) -> int``; the dispatcher picks one from the mode flags."""
