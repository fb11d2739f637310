"""Prompt, session and file-change types produced by the parser."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from claude_snapshots.types.events import FileBackup, TrackedFileBackups


class ChangeType(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class UnlinkedPrompt:
    """A prompt whose after-state is not known yet."""
    prompt_number: int
    message_id: str
    parent_message_id: Optional[str]
    text: str
    timestamp: Optional[datetime]
    before_snapshot: TrackedFileBackups = field(default_factory=dict)
    tools_used: frozenset[str] = frozenset()
    edited_files: frozenset[str] = frozenset()
    original_file_contents: dict[str, str] = field(default_factory=dict)

    def link(self, after_snapshot: TrackedFileBackups) -> "Prompt":
        return Prompt(
            prompt_number=self.prompt_number,
            message_id=self.message_id,
            parent_message_id=self.parent_message_id,
            text=self.text,
            timestamp=self.timestamp,
            before_snapshot=dict(self.before_snapshot),
            after_snapshot=dict(after_snapshot),
            tools_used=self.tools_used,
            edited_files=self.edited_files,
            original_file_contents=dict(self.original_file_contents),
        )


@dataclass(frozen=True)
class Prompt:
    """One user instruction and everything attributable to it.

    ``before_snapshot`` is the file-history state when the prompt was
    submitted; ``after_snapshot`` is the state when the next prompt was
    submitted (or the latest known state for the final prompt).
    """
    prompt_number: int
    message_id: str
    parent_message_id: Optional[str]
    text: str
    timestamp: Optional[datetime]
    before_snapshot: TrackedFileBackups
    after_snapshot: TrackedFileBackups
    tools_used: frozenset[str] = frozenset()
    edited_files: frozenset[str] = frozenset()
    # Content of each file before the first edit made while handling this prompt
    original_file_contents: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Session:
    session_id: str
    project_path: str
    transcript_path: str
    prompts: tuple[Prompt, ...]
    last_updated: datetime

    def get_prompt(self, prompt_number: int) -> Prompt | None:
        for prompt in self.prompts:
            if prompt.prompt_number == prompt_number:
                return prompt
        return None


@dataclass(frozen=True)
class FileChange:
    file_path: str
    change_type: ChangeType
    prompt_number: int
    prompt_text: str
    before_backup: Optional[FileBackup] = None
    after_backup: Optional[FileBackup] = None
    original_content: Optional[str] = None

    @property
    def diff_against_disk(self) -> bool:
        """True when the "after" side of a diff is the live file on disk.

        That is the case when no after-backup exists yet, or when both sides
        name the same backup because the store has not rotated.
        """
        if self.after_backup is None:
            return self.change_type != ChangeType.DELETED
        return (
            self.before_backup is not None
            and self.before_backup.backup_file_name == self.after_backup.backup_file_name
        )
