"""Keeps the current Session for a project up to date on request."""

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal, Slot, Property, QTimer, QThread

from claude_snapshots.services.backup_store import backup_dir_for, read_backup_file
from claude_snapshots.services.change_set import changes_by_prompt, get_file_changes
from claude_snapshots.services.config_manager import ConfigManager
from claude_snapshots.services.session_assembler import parse_transcript
from claude_snapshots.services.transcript_locator import find_latest_transcript
from claude_snapshots.types.prompts import FileChange, Prompt, Session

logger = logging.getLogger(__name__)

# (transcript path, transcript mtime, backup directory mtime)
CacheKey = tuple[str, float, float]


def load_if_changed(
    project_path: str,
    claude_dir: str | Path,
    previous_key: CacheKey | None,
    previous: Session | None,
) -> tuple[CacheKey | None, Session | None]:
    """Reparse the latest transcript unless it and its backup store are unchanged.

    The backup directory is part of the key because the last prompt's end
    state is read from it.
    """
    transcript = find_latest_transcript(project_path, claude_dir)
    if transcript is None:
        return None, None

    key = _cache_key(transcript, claude_dir)
    if key is not None and key == previous_key and previous is not None:
        return key, previous

    return key, parse_transcript(transcript, claude_dir)


def _cache_key(transcript: Path, claude_dir: str | Path) -> CacheKey | None:
    try:
        transcript_mtime = transcript.stat().st_mtime
    except FileNotFoundError:
        return None

    # Transcripts are named after their session id
    backup_mtime = 0.0
    try:
        backup_mtime = backup_dir_for(claude_dir, transcript.stem).stat().st_mtime
    except FileNotFoundError:
        pass
    return str(transcript), transcript_mtime, backup_mtime


class _SessionWorker(QThread):
    """Background thread for parsing large transcripts."""

    loaded = Signal(int, object, object)  # generation, cache key, Session | None

    def __init__(self, generation: int, project_path: str, claude_dir: str,
                 previous_key, previous, parent=None):
        super().__init__(parent)
        self._generation = generation
        self._project_path = project_path
        self._claude_dir = claude_dir
        self._previous_key = previous_key
        self._previous = previous

    def run(self):
        try:
            key, session = load_if_changed(
                self._project_path, self._claude_dir, self._previous_key, self._previous,
            )
        except Exception:
            logger.exception("Worker failed to load session for %s", self._project_path)
            key, session = None, None
        self.loaded.emit(self._generation, key, session)


class SnapshotManager(QObject):
    """Owns the latest Session for one project.

    Each refresh recomputes the Session from disk; the newest completed
    refresh replaces the previous result.
    """

    session_changed = Signal()
    loading_changed = Signal()

    def __init__(self, project_path: str, parent=None, claude_dir: str | None = None,
                 config: ConfigManager | None = None):
        super().__init__(parent)
        self._project_path = project_path
        self._config = config if config is not None else ConfigManager(self)
        self._claude_dir = claude_dir or self._config.claude_dir()
        self._session: Session | None = None
        self._cache_key: CacheKey | None = None
        self._generation = 0
        self._loading = False
        self._worker: _SessionWorker | None = None

        self._refresh_timer = QTimer(self)
        self._refresh_timer.setSingleShot(True)
        self._refresh_timer.timeout.connect(self._on_refresh_timer)

    def _get_loading(self) -> bool:
        return self._loading

    def _set_loading(self, value: bool):
        if self._loading != value:
            self._loading = value
            self.loading_changed.emit()

    loading = Property(bool, _get_loading, notify=loading_changed)

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def project_path(self) -> str:
        return self._project_path

    @Slot()
    def refresh(self):
        """Reload synchronously. I/O errors on a present transcript propagate."""
        self._generation += 1
        self._cancel_worker()
        self._set_loading(False)
        key, session = load_if_changed(
            self._project_path, self._claude_dir, self._cache_key, self._session,
        )
        self._publish(self._generation, key, session)

    @Slot()
    def refresh_async(self):
        """Reload on a worker thread; results from superseded requests are dropped."""
        self._generation += 1
        self._set_loading(True)

        self._cancel_worker()

        worker = _SessionWorker(
            self._generation, self._project_path, self._claude_dir,
            self._cache_key, self._session, self,
        )
        worker.loaded.connect(self._on_worker_loaded)
        worker.finished.connect(self._on_worker_finished)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        worker.start()

    @Slot()
    def request_refresh(self):
        """Schedule a refresh, collapsing bursts of requests into one."""
        self._refresh_timer.start(self._config.refresh_debounce_ms())

    def _on_refresh_timer(self):
        if self._config.get_bool("general/runInBackground"):
            self.refresh_async()
        else:
            self.refresh()

    def _on_worker_loaded(self, generation: int, key, session):
        if generation != self._generation:
            logger.debug("Dropping stale session load (%d < %d)", generation, self._generation)
            return
        self._worker = None
        self._set_loading(False)
        self._publish(generation, key, session)

    @Slot()
    def _on_worker_finished(self):
        # deleteLater runs next
        if self.sender() is self._worker:
            self._worker = None

    def _cancel_worker(self):
        """Detach and wait out any in-flight worker so its result is never published."""
        if self._worker is not None and self._worker.isRunning():
            self._worker.loaded.disconnect(self._on_worker_loaded)
            self._worker.quit()
            self._worker.wait(2000)
        self._worker = None

    def _publish(self, generation: int, key: CacheKey | None, session: Session | None):
        if generation != self._generation:
            return
        changed = session is not self._session
        self._cache_key = key
        self._session = session
        if changed:
            self.session_changed.emit()

    def get_file_changes(self, prompt_number: int) -> list[FileChange]:
        if self._session is None:
            return []
        prompt = self._session.get_prompt(prompt_number)
        if prompt is None:
            return []
        return get_file_changes(prompt, self._session.project_path or self._project_path)

    def changes_by_prompt(self) -> list[tuple[Prompt, list[FileChange]]]:
        if self._session is None:
            return []
        return changes_by_prompt(self._session, self._project_path)

    def read_backup(self, backup_file_name: str) -> str | None:
        """Text of one of the current session's backups, or None."""
        if self._session is None or not self._session.session_id:
            return None
        return read_backup_file(self._claude_dir, self._session.session_id, backup_file_name)

    def cleanup(self):
        """Stop pending refreshes and wait for running workers."""
        self._refresh_timer.stop()
        self._generation += 1
        self._cancel_worker()
        self._set_loading(False)
