"""Build a Session of prompts with before/after file snapshots from a transcript."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Sequence

from claude_snapshots.services.backup_store import FILE_HISTORY_DIR, reconcile_snapshot
from claude_snapshots.services.conversation_tree import (
    build_event_index,
    find_active_path,
    is_on_active_path,
)
from claude_snapshots.services.jsonl_parser import load_events
from claude_snapshots.services.snapshot_correlator import Correlation, correlate_snapshots
from claude_snapshots.types.events import Event, TrackedFileBackups, UserEvent
from claude_snapshots.types.prompts import Prompt, Session, UnlinkedPrompt

logger = logging.getLogger(__name__)


def parse_transcript(transcript_path: str | Path, claude_dir: str | Path) -> Session | None:
    """Parse one transcript file into a Session.

    Returns None when the file is missing or holds no decodable events.
    """
    path = Path(transcript_path)
    log = load_events(path)
    if not log.events:
        return None

    try:
        last_updated = datetime.fromtimestamp(path.stat().st_mtime)
    except FileNotFoundError:
        return None

    return assemble_session(
        log.events,
        transcript_path=str(path),
        backup_root=Path(claude_dir) / FILE_HISTORY_DIR,
        last_updated=last_updated,
    )


def assemble_session(
    events: Sequence[Event],
    transcript_path: str,
    backup_root: str | Path | None,
    last_updated: datetime,
) -> Session:
    """Assemble prompts from decoded events.

    backup_root is the file-history directory holding one subdirectory per
    session; pass None to skip reconciling the last prompt against it.
    """
    events = list(events)
    index = build_event_index(events)

    session_id, project_path = _session_metadata(events)
    active = find_active_path(events, index)
    correlation = correlate_snapshots(events, index)

    unlinked = build_unlinked_prompts(events, active, correlation)

    backup_dir = None
    if backup_root is not None and session_id:
        backup_dir = Path(backup_root) / session_id

    prompts = link_prompts(unlinked, correlation.latest_snapshot, backup_dir)
    logger.debug(
        "Session %s: %d events, %d active, %d prompts",
        session_id or "?", len(events), len(active), len(prompts),
    )

    return Session(
        session_id=session_id,
        project_path=project_path,
        transcript_path=transcript_path,
        prompts=tuple(prompts),
        last_updated=last_updated,
    )


def build_unlinked_prompts(
    events: Sequence[Event],
    active: set[str],
    correlation: Correlation,
) -> list[UnlinkedPrompt]:
    prompts: list[UnlinkedPrompt] = []
    for event in events:
        if not isinstance(event, UserEvent) or not event.is_prompt:
            continue
        if not is_on_active_path(event.uuid, active):
            continue

        message_id = event.uuid
        prompts.append(UnlinkedPrompt(
            prompt_number=len(prompts) + 1,
            message_id=message_id,
            parent_message_id=event.parent_uuid,
            text=event.content,
            timestamp=event.timestamp,
            before_snapshot=dict(correlation.snapshots.get(message_id, {})),
            tools_used=frozenset(correlation.tools.get(message_id, ())),
            edited_files=frozenset(correlation.edited_files.get(message_id, ())),
            original_file_contents=dict(correlation.original_contents.get(message_id, {})),
        ))
    return prompts


def link_prompts(
    unlinked: Sequence[UnlinkedPrompt],
    latest_snapshot: TrackedFileBackups,
    backup_dir: str | Path | None,
) -> list[Prompt]:
    """Give every prompt its after-state.

    A prompt ends where the next one begins. The last prompt has no successor
    yet, so its end state is the latest snapshot advanced against the backup
    store.
    """
    linked: list[Prompt] = []
    for i, prompt in enumerate(unlinked):
        if i + 1 < len(unlinked):
            after = unlinked[i + 1].before_snapshot
        else:
            after = reconcile_snapshot(latest_snapshot, backup_dir)
        linked.append(prompt.link(after))
    return linked


def _session_metadata(events: Sequence[Event]) -> tuple[str, str]:
    for event in events:
        if isinstance(event, UserEvent) and event.session_id:
            return event.session_id, event.cwd
    return "", ""
