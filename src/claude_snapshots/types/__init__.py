"""Type definitions for Claude Snapshots."""

from claude_snapshots.types.events import (
    AssistantEvent,
    Event,
    EventType,
    FileBackup,
    FileHistorySnapshotEvent,
    ToolUse,
    ToolUseResult,
    TrackedFileBackups,
    UserEvent,
)
from claude_snapshots.types.prompts import (
    ChangeType,
    FileChange,
    Prompt,
    Session,
    UnlinkedPrompt,
)

__all__ = [
    "AssistantEvent",
    "Event",
    "EventType",
    "FileBackup",
    "FileHistorySnapshotEvent",
    "ToolUse",
    "ToolUseResult",
    "TrackedFileBackups",
    "UserEvent",
    "ChangeType",
    "FileChange",
    "Prompt",
    "Session",
    "UnlinkedPrompt",
]
