"""Containment checks for paths built from transcript data."""

import os


def is_path_within(path: str, root: str) -> bool:
    """Check that path resolves to root or somewhere below it.

    Resolves symlinks before checking to prevent escape attacks.
    """
    try:
        resolved = os.path.realpath(os.path.expanduser(path))
        resolved_root = os.path.realpath(os.path.expanduser(root))
    except (OSError, ValueError):
        return False
    return resolved == resolved_root or resolved.startswith(resolved_root + os.sep)


def is_safe_backup_name(name: str) -> bool:
    """A backup file name must be a single path component."""
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name and "\x00" not in name
