"""Event-level types for decoded transcript lines."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class EventType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    FILE_HISTORY = "file-history-snapshot"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FileBackup:
    """A saved copy of a file in the session's file-history store."""
    backup_file_name: str
    version: int
    backup_time: Optional[str] = None


# File path (as recorded by the tool, relative or absolute) -> backup reference
TrackedFileBackups = dict[str, FileBackup]


@dataclass
class ToolUse:
    id: str
    name: str
    input: dict


@dataclass
class ToolUseResult:
    """The parts of an Edit/Write tool result needed for attribution."""
    file_path: str
    original_file: Optional[str] = None


@dataclass
class Event:
    """A single transcript record.

    Unrecognized record types are kept as a bare Event with type UNKNOWN;
    the decoded JSON object is always available as ``raw``.
    """
    type: EventType = EventType.UNKNOWN
    uuid: str = ""
    parent_uuid: Optional[str] = None
    timestamp: Optional[datetime] = None
    raw: dict = field(default_factory=dict, repr=False)


@dataclass
class UserEvent(Event):
    type: EventType = EventType.USER
    content: Any = ""  # str or list of content blocks
    is_meta: bool = False
    tool_use_result: Optional[ToolUseResult] = None
    cwd: str = ""
    session_id: str = ""

    @property
    def is_plain_text(self) -> bool:
        return isinstance(self.content, str)

    @property
    def is_prompt(self) -> bool:
        """A real instruction typed by the user (not a tool result, not meta)."""
        return self.is_plain_text and not self.is_meta


@dataclass
class AssistantEvent(Event):
    type: EventType = EventType.ASSISTANT
    text: str = ""
    tool_uses: list[ToolUse] = field(default_factory=list)


@dataclass
class FileHistorySnapshotEvent(Event):
    type: EventType = EventType.FILE_HISTORY
    message_id: str = ""
    tracked_file_backups: TrackedFileBackups = field(default_factory=dict)
    is_snapshot_update: bool = False
