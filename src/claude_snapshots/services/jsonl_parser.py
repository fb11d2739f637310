"""JSONL decoder for Claude Code transcript files."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator

import orjson

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

logger = logging.getLogger(__name__)

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024


@dataclass
class TranscriptLog:
    """Decoded events in log-append order plus the number of lines dropped."""
    events: list[Event] = field(default_factory=list)
    skipped_lines: int = 0


def parse_events(text: str, source: str = "<transcript>") -> TranscriptLog:
    """Decode raw transcript text into a TranscriptLog."""
    # Only "\n" ends a record; U+2028 and friends may appear raw inside strings
    return _decode_lines(text.split("\n"), source)


def load_events(file_path: str | Path) -> TranscriptLog:
    """Decode a transcript file.

    A missing file yields an empty log. Any other OSError (permissions,
    a directory in place of the file) propagates to the caller.
    """
    path = Path(file_path)
    try:
        f = open(path, "r", encoding="utf-8", errors="replace", newline="\n")
    except FileNotFoundError:
        logger.warning("Transcript not found: %s", path)
        return TranscriptLog()

    with f:
        return _decode_lines(f, path.name)


def _decode_lines(lines: Iterable[str], source: str) -> TranscriptLog:
    log = TranscriptLog()
    for raw in _iter_records(lines, source, log):
        log.events.append(decode_event(raw))

    if log.skipped_lines:
        logger.debug("Skipped %d malformed line(s) in %s", log.skipped_lines, source)
    return log


def _iter_records(lines: Iterable[str], source: str, log: TranscriptLog) -> Iterator[dict]:
    line_num = 0
    for line in lines:
        line_num += 1
        line = line.strip()
        if not line:
            continue

        if len(line) > MAX_LINE_SIZE:
            logger.warning(
                "Line %d in %s exceeds %dMB, skipping",
                line_num, source, MAX_LINE_SIZE // (1024 * 1024),
            )
            log.skipped_lines += 1
            continue

        try:
            raw = orjson.loads(line)
        except orjson.JSONDecodeError as e:
            logger.debug("Malformed JSON at line %d in %s: %s", line_num, source, e)
            log.skipped_lines += 1
            continue

        if not isinstance(raw, dict):
            log.skipped_lines += 1
            continue

        yield raw


def decode_event(raw: dict) -> Event:
    """Turn one decoded JSON object into the matching Event variant."""
    type_str = raw.get("type", "")
    try:
        event_type = EventType(type_str)
    except ValueError:
        event_type = EventType.UNKNOWN

    common = {
        "uuid": _str_or_empty(raw.get("uuid")),
        "parent_uuid": _str_or_empty(raw.get("parentUuid")) or None,
        "timestamp": _parse_timestamp(raw.get("timestamp")),
        "raw": raw,
    }

    if event_type == EventType.USER:
        return _decode_user(raw, common)
    if event_type == EventType.ASSISTANT:
        return _decode_assistant(raw, common)
    if event_type == EventType.FILE_HISTORY:
        return _decode_snapshot(raw, common)
    return Event(type=EventType.UNKNOWN, **common)


def _decode_user(raw: dict, common: dict) -> UserEvent:
    message = raw.get("message", {})
    if not isinstance(message, dict):
        message = {}

    tool_use_result = None
    result = raw.get("toolUseResult")
    if isinstance(result, dict):
        file_path = result.get("filePath")
        if isinstance(file_path, str) and file_path:
            original = result.get("originalFile")
            tool_use_result = ToolUseResult(
                file_path=file_path,
                original_file=original if isinstance(original, str) else None,
            )

    return UserEvent(
        content=message.get("content", ""),
        is_meta=bool(raw.get("isMeta", False)),
        tool_use_result=tool_use_result,
        cwd=_str_or_empty(raw.get("cwd")),
        session_id=_str_or_empty(raw.get("sessionId")),
        **common,
    )


def _decode_assistant(raw: dict, common: dict) -> AssistantEvent:
    message = raw.get("message", {})
    if not isinstance(message, dict):
        message = {}

    text_parts = []
    tool_uses = []
    content = message.get("content", [])
    if isinstance(content, list):
        for block in content:
            if not isinstance(block, dict):
                continue
            if block.get("type") == "tool_use" and block.get("name"):
                tool_input = block.get("input", {})
                tool_uses.append(ToolUse(
                    id=_str_or_empty(block.get("id")),
                    name=block["name"],
                    input=tool_input if isinstance(tool_input, dict) else {},
                ))
            elif block.get("type") == "text":
                text_parts.append(_str_or_empty(block.get("text")))
    elif isinstance(content, str):
        text_parts.append(content)

    return AssistantEvent(text="\n".join(text_parts), tool_uses=tool_uses, **common)


def _decode_snapshot(raw: dict, common: dict) -> FileHistorySnapshotEvent:
    snapshot = raw.get("snapshot", {})
    if not isinstance(snapshot, dict):
        snapshot = {}

    return FileHistorySnapshotEvent(
        message_id=_str_or_empty(raw.get("messageId") or snapshot.get("messageId")),
        tracked_file_backups=decode_tracked_backups(snapshot.get("trackedFileBackups")),
        is_snapshot_update=bool(raw.get("isSnapshotUpdate", False)),
        **common,
    )


def decode_tracked_backups(value) -> TrackedFileBackups:
    """Decode a trackedFileBackups object, dropping entries without a usable version."""
    backups: TrackedFileBackups = {}
    if not isinstance(value, dict):
        return backups

    for file_path, entry in value.items():
        if not isinstance(entry, dict):
            continue
        version = entry.get("version")
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            continue
        backup_time = entry.get("backupTime")
        backups[file_path] = FileBackup(
            backup_file_name=_str_or_empty(entry.get("backupFileName")),
            version=version,
            backup_time=backup_time if isinstance(backup_time, str) else None,
        )
    return backups


def _str_or_empty(value) -> str:
    return value if isinstance(value, str) else ""


def _parse_timestamp(ts_value) -> datetime | None:
    """Parse a timestamp from various formats."""
    if isinstance(ts_value, bool):
        return None
    if isinstance(ts_value, (int, float)):
        seconds = ts_value / 1000 if ts_value > 1e12 else ts_value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            return None
    if isinstance(ts_value, str) and ts_value:
        try:
            # ISO 8601 format: "2026-02-13T12:00:00.000Z"
            return datetime.fromisoformat(ts_value.replace("Z", "+00:00"))
        except ValueError:
            pass
        try:
            return datetime.fromtimestamp(float(ts_value), tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            pass
    return None
