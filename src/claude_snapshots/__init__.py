"""Reconstruct Claude Code prompts and the file changes each one made."""

__version__ = "0.1.0"
