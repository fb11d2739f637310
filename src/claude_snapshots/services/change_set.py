"""Derive per-prompt file changes from before/after snapshots."""

import logging
import os

from claude_snapshots.types.prompts import ChangeType, FileChange, Prompt, Session
from claude_snapshots.utils.path_matching import basename, normalize, normalize_keys, resolve

logger = logging.getLogger(__name__)


def get_file_changes(prompt: Prompt, project_path: str | None = None) -> list[FileChange]:
    """List the files a prompt added, modified or deleted.

    Relative snapshot paths are made absolute against project_path when it
    is given. Files reported as edited by tool results but not (yet) visible
    in the snapshots are reported too, so a change is never hidden because
    the backup store lags behind.
    """
    changes: list[FileChange] = []
    detected: set[str] = set()

    def to_absolute(p: str) -> str:
        if os.path.isabs(p):
            return normalize(p)
        if project_path:
            return normalize(os.path.join(project_path, p))
        return p

    def add(file_path: str, change_type: ChangeType, **kwargs):
        changes.append(FileChange(
            file_path=file_path,
            change_type=change_type,
            prompt_number=prompt.prompt_number,
            prompt_text=prompt.text,
            **kwargs,
        ))

    before = normalize_keys(prompt.before_snapshot)
    after = normalize_keys(prompt.after_snapshot)

    for file_path in sorted(set(before) | set(after)):
        before_backup = before.get(file_path)
        after_backup = after.get(file_path)
        absolute_path = to_absolute(file_path)

        if before_backup is None and after_backup is not None:
            # First touch this session: the v1 backup already holds the edited
            # content, so the pre-edit state can only come from the transcript.
            original = resolve(prompt.original_file_contents, (file_path, absolute_path))
            if original is not None:
                add(absolute_path, ChangeType.MODIFIED, original_content=original)
            else:
                add(absolute_path, ChangeType.ADDED)
        elif before_backup is not None and after_backup is None:
            add(absolute_path, ChangeType.DELETED, before_backup=before_backup)
        elif before_backup.version != after_backup.version:
            add(
                absolute_path, ChangeType.MODIFIED,
                before_backup=before_backup, after_backup=after_backup,
            )
        else:
            continue

        detected.update((file_path, absolute_path, basename(file_path)))

    for edited in sorted(prompt.edited_files):
        normalized = normalize(edited)
        edited_basename = basename(edited)
        if normalized in detected or edited_basename in detected:
            continue

        backup = resolve(prompt.before_snapshot, (edited, normalized))
        original = None
        if backup is None:
            original = resolve(prompt.original_file_contents, (edited, normalized))

        if backup is not None or original is not None:
            change_type = ChangeType.MODIFIED
        else:
            change_type = ChangeType.ADDED

        add(to_absolute(normalized), change_type, before_backup=backup, original_content=original)
        detected.update((normalized, edited_basename))

    return changes


def changes_by_prompt(
    session: Session,
    project_path: str | None = None,
) -> list[tuple[Prompt, list[FileChange]]]:
    """Newest-first (prompt, changes) pairs, skipping prompts that changed nothing.

    Relative paths resolve against the session's recorded working directory,
    falling back to project_path.
    """
    root = session.project_path or project_path or None
    groups = []
    for prompt in reversed(session.prompts):
        changes = get_file_changes(prompt, root)
        if changes:
            groups.append((prompt, changes))
    return groups
