"""Read-only access to a session's file-history backup store.

Backups live in ``<claude dir>/file-history/<session id>/`` and are named
``<content hash>@v<version>``. Claude Code writes a new version there as soon
as it edits a file, often before the transcript records a snapshot for it, so
the store is the freshest source for the last prompt's end state.
"""

import logging
import os
import re
from dataclasses import replace
from pathlib import Path

from claude_snapshots.types.events import TrackedFileBackups
from claude_snapshots.utils.path_validation import is_path_within, is_safe_backup_name

logger = logging.getLogger(__name__)

FILE_HISTORY_DIR = "file-history"

_BACKUP_NAME_PATTERN = re.compile(r"^(.+)@v(\d+)$")


def parse_backup_file_name(name: str) -> tuple[str, int] | None:
    """Split ``<hash>@v<version>`` into (hash, version)."""
    match = _BACKUP_NAME_PATTERN.match(name or "")
    if not match:
        return None
    return match.group(1), int(match.group(2))


def backup_dir_for(claude_dir: str | Path, session_id: str) -> Path:
    return Path(claude_dir) / FILE_HISTORY_DIR / session_id


def list_backup_versions(backup_dir: str | Path) -> dict[str, tuple[int, str]]:
    """Group the store's files by hash, keeping the highest version of each.

    Returns hash -> (version, file name). Raises OSError if the directory
    cannot be listed.
    """
    latest: dict[str, tuple[int, str]] = {}
    with os.scandir(backup_dir) as it:
        for entry in it:
            parsed = parse_backup_file_name(entry.name)
            if parsed is None:
                continue
            # is_file() reports False for entries removed since the listing
            if not entry.is_file():
                continue
            content_hash, version = parsed
            current = latest.get(content_hash)
            if current is None or version > current[0]:
                latest[content_hash] = (version, entry.name)
    return latest


def reconcile_snapshot(base: TrackedFileBackups, backup_dir: str | Path | None) -> TrackedFileBackups:
    """Advance each entry of base to the newest version present on disk.

    Never fails: a missing or unreadable directory returns a copy of base.
    """
    result: TrackedFileBackups = dict(base)
    if backup_dir is None:
        return result

    try:
        on_disk = list_backup_versions(backup_dir)
    except FileNotFoundError:
        logger.debug("No backup directory at %s", backup_dir)
        return result
    except OSError as e:
        logger.warning("Could not read backup directory %s: %s", backup_dir, e)
        return result

    for file_path, backup in base.items():
        parsed = parse_backup_file_name(backup.backup_file_name)
        if parsed is None:
            continue
        newest = on_disk.get(parsed[0])
        if newest is None:
            continue
        version, file_name = newest
        if version > backup.version:
            logger.debug("%s: v%d -> v%d from backup store", file_path, backup.version, version)
            result[file_path] = replace(backup, backup_file_name=file_name, version=version)

    return result


def get_backup_file_path(claude_dir: str | Path, session_id: str, backup_file_name: str) -> Path | None:
    """Resolve a backup reference to a path inside the session's store.

    Returns None for names that would leave the session directory.
    """
    if not is_safe_backup_name(session_id) or not is_safe_backup_name(backup_file_name):
        return None
    session_dir = backup_dir_for(claude_dir, session_id)
    path = session_dir / backup_file_name
    if not is_path_within(str(path), str(session_dir)):
        return None
    return path


def read_backup_file(claude_dir: str | Path, session_id: str, backup_file_name: str) -> str | None:
    """Return the text of a backup file, or None if it does not exist."""
    path = get_backup_file_path(claude_dir, session_id, backup_file_name)
    if path is None:
        logger.warning("Rejected backup reference %s/%s", session_id, backup_file_name)
        return None
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except (FileNotFoundError, IsADirectoryError):
        return None
