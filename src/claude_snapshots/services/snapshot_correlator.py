"""Attribute snapshots, tool calls and file edits to the prompts that caused them."""

import logging
from dataclasses import dataclass, field

from claude_snapshots.services.conversation_tree import build_event_index
from claude_snapshots.types.events import (
    AssistantEvent,
    Event,
    FileHistorySnapshotEvent,
    TrackedFileBackups,
    UserEvent,
)

logger = logging.getLogger(__name__)


@dataclass
class Correlation:
    # messageId -> tracked backups recorded when that message was submitted
    snapshots: dict[str, TrackedFileBackups] = field(default_factory=dict)
    # Last snapshot in the log, regardless of which message it belongs to
    latest_snapshot: TrackedFileBackups = field(default_factory=dict)
    tools: dict[str, set[str]] = field(default_factory=dict)
    edited_files: dict[str, set[str]] = field(default_factory=dict)
    original_contents: dict[str, dict[str, str]] = field(default_factory=dict)


def correlate_snapshots(events: list[Event], index: dict[str, Event] | None = None) -> Correlation:
    """Run the three attribution passes over every event in the log.

    Attribution deliberately ignores the active path: a tool result on a
    rewound branch still belongs to whichever prompt owns it.
    """
    if index is None:
        index = build_event_index(events)

    result = Correlation()

    for event in events:
        if isinstance(event, FileHistorySnapshotEvent):
            result.snapshots[event.message_id] = event.tracked_file_backups
            result.latest_snapshot = event.tracked_file_backups

    for event in events:
        if isinstance(event, AssistantEvent) and event.tool_uses:
            owner = find_owning_prompt_id(event.parent_uuid, index)
            if owner is None:
                continue
            names = result.tools.setdefault(owner, set())
            for tool_use in event.tool_uses:
                names.add(tool_use.name)

        elif isinstance(event, UserEvent) and event.tool_use_result is not None:
            owner = find_owning_prompt_id(event.parent_uuid, index)
            if owner is None:
                continue
            file_path = event.tool_use_result.file_path
            result.edited_files.setdefault(owner, set()).add(file_path)

            original = event.tool_use_result.original_file
            if original is not None:
                # Later edits in the same prompt no longer show the pre-prompt baseline
                result.original_contents.setdefault(owner, {}).setdefault(file_path, original)

    return result


def find_owning_prompt_id(start_id: str | None, index: dict[str, Event]) -> str | None:
    """Walk parent links from start_id to the nearest plain-text user event.

    Returns None when the chain breaks or loops before one is found.
    """
    seen: set[str] = set()
    current_id = start_id
    while current_id and current_id not in seen:
        seen.add(current_id)
        event = index.get(current_id)
        if event is None:
            return None
        if isinstance(event, UserEvent) and event.is_plain_text:
            return event.uuid
        current_id = event.parent_uuid
    return None
