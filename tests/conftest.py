"""Shared test fixtures for Claude Snapshots."""

import os
import sys
from pathlib import Path

import pytest

from helpers import ENCODED_PROJECT

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication for tests that need Qt."""
    os.environ["QT_QPA_PLATFORM"] = "offscreen"
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv or ["test"])
    yield app


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def rewind_session_path(fixtures_dir) -> Path:
    return fixtures_dir / "rewind_session.jsonl"


@pytest.fixture
def malformed_session_path(fixtures_dir) -> Path:
    return fixtures_dir / "malformed_session.jsonl"


@pytest.fixture
def claude_dir(tmp_path) -> Path:
    """Create a temporary ~/.claude layout with one project directory."""
    root = tmp_path / ".claude"
    (root / "projects" / ENCODED_PROJECT).mkdir(parents=True)
    (root / "file-history").mkdir(parents=True)
    return root


@pytest.fixture
def installed_rewind_session(claude_dir, rewind_session_path) -> Path:
    """Copy the rewind fixture into the temporary projects directory."""
    dest = claude_dir / "projects" / ENCODED_PROJECT / "sess-rewind.jsonl"
    dest.write_text(rewind_session_path.read_text())
    return dest


@pytest.fixture
def isolated_settings(qapp, tmp_path):
    """Point QSettings at a throwaway INI location."""
    from PySide6.QtCore import QSettings
    QSettings.setDefaultFormat(QSettings.IniFormat)
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, str(tmp_path / "config"))
    return tmp_path / "config"
