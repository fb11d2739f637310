"""Services for Claude Snapshots."""

from claude_snapshots.services.jsonl_parser import TranscriptLog, load_events, parse_events
from claude_snapshots.services.conversation_tree import find_active_path
from claude_snapshots.services.snapshot_correlator import Correlation, correlate_snapshots
from claude_snapshots.services.backup_store import read_backup_file, reconcile_snapshot
from claude_snapshots.services.session_assembler import assemble_session, parse_transcript
from claude_snapshots.services.change_set import changes_by_prompt, get_file_changes
from claude_snapshots.services.transcript_locator import find_transcripts, load_latest_session
from claude_snapshots.services.config_manager import ConfigManager
from claude_snapshots.services.snapshot_manager import SnapshotManager

__all__ = [
    "TranscriptLog",
    "load_events",
    "parse_events",
    "find_active_path",
    "Correlation",
    "correlate_snapshots",
    "read_backup_file",
    "reconcile_snapshot",
    "assemble_session",
    "parse_transcript",
    "changes_by_prompt",
    "get_file_changes",
    "find_transcripts",
    "load_latest_session",
    "ConfigManager",
    "SnapshotManager",
]
