"""Tests for claude_snapshots.services.transcript_locator."""

import os

from claude_snapshots.services.transcript_locator import (
    find_latest_transcript,
    find_transcripts,
    load_latest_session,
    project_dir_for,
)
from helpers import ENCODED_PROJECT, PROJECT_PATH


def _write(directory, name, mtime, text="{}\n"):
    path = directory / name
    path.write_text(text)
    os.utime(path, (mtime, mtime))
    return path


def test_project_dir_for(tmp_path):
    assert project_dir_for(PROJECT_PATH, tmp_path) == tmp_path / "projects" / ENCODED_PROJECT


class TestFindTranscripts:
    def test_newest_first(self, claude_dir):
        project_dir = claude_dir / "projects" / ENCODED_PROJECT
        old = _write(project_dir, "old.jsonl", 1_000_000)
        new = _write(project_dir, "new.jsonl", 2_000_000)

        assert find_transcripts(PROJECT_PATH, claude_dir) == [new, old]
        assert find_latest_transcript(PROJECT_PATH, claude_dir) == new

    def test_subagent_transcripts_excluded(self, claude_dir):
        project_dir = claude_dir / "projects" / ENCODED_PROJECT
        main = _write(project_dir, "main.jsonl", 1_000_000)
        _write(project_dir, "agent-a1b2c3.jsonl", 3_000_000)

        assert find_transcripts(PROJECT_PATH, claude_dir) == [main]

    def test_other_files_ignored(self, claude_dir):
        project_dir = claude_dir / "projects" / ENCODED_PROJECT
        _write(project_dir, "notes.txt", 1_000_000)
        assert find_transcripts(PROJECT_PATH, claude_dir) == []

    def test_missing_project_dir(self, tmp_path):
        assert find_transcripts("/nowhere", tmp_path) == []
        assert find_latest_transcript("/nowhere", tmp_path) is None


class TestLoadLatestSession:
    def test_loads_newest(self, claude_dir, installed_rewind_session):
        project_dir = claude_dir / "projects" / ENCODED_PROJECT
        _write(project_dir, "older.jsonl", 1_000_000)

        session = load_latest_session(PROJECT_PATH, claude_dir)

        assert session.session_id == "sess-rewind"
        assert session.transcript_path == str(installed_rewind_session)
        assert len(session.prompts) == 2

    def test_no_transcript(self, claude_dir):
        assert load_latest_session(PROJECT_PATH, claude_dir) is None

    def test_empty_transcript(self, claude_dir):
        _write(claude_dir / "projects" / ENCODED_PROJECT, "empty.jsonl", 1_000_000, text="")
        assert load_latest_session(PROJECT_PATH, claude_dir) is None
