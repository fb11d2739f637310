"""Locate the transcript of the current session for a project."""

import logging
from pathlib import Path

from claude_snapshots.services.session_assembler import parse_transcript
from claude_snapshots.types.prompts import Session
from claude_snapshots.utils.path_codec import encode_path

logger = logging.getLogger(__name__)

CLAUDE_DIR = Path.home() / ".claude"
PROJECTS_DIR = "projects"
SUBAGENT_PREFIX = "agent-"


def project_dir_for(project_path: str, claude_dir: str | Path = CLAUDE_DIR) -> Path:
    """/home/wiz/app → <claude_dir>/projects/-home-wiz-app"""
    return Path(claude_dir) / PROJECTS_DIR / encode_path(project_path)


def find_transcripts(project_path: str, claude_dir: str | Path = CLAUDE_DIR) -> list[Path]:
    """Return the project's main-session transcripts, newest first.

    Sub-agent transcripts (``agent-*.jsonl``) are excluded.
    """
    project_dir = project_dir_for(project_path, claude_dir)
    if not project_dir.is_dir():
        logger.debug("No transcript directory at %s", project_dir)
        return []

    candidates: list[tuple[float, Path]] = []
    for jsonl_file in project_dir.glob("*.jsonl"):
        if jsonl_file.name.startswith(SUBAGENT_PREFIX):
            continue
        try:
            mtime = jsonl_file.stat().st_mtime
        except FileNotFoundError:
            # Removed between listing and stat
            continue
        candidates.append((mtime, jsonl_file))

    candidates.sort(key=lambda c: c[0], reverse=True)
    return [path for _, path in candidates]


def find_latest_transcript(project_path: str, claude_dir: str | Path = CLAUDE_DIR) -> Path | None:
    transcripts = find_transcripts(project_path, claude_dir)
    return transcripts[0] if transcripts else None


def load_latest_session(project_path: str, claude_dir: str | Path = CLAUDE_DIR) -> Session | None:
    """Parse the most recently modified transcript for project_path.

    Returns None when the project has no transcript or it holds no events.
    """
    transcript = find_latest_transcript(project_path, claude_dir)
    if transcript is None:
        return None
    return parse_transcript(transcript, claude_dir)
