"""Application configuration manager wrapping QSettings."""

import logging
import os

from PySide6.QtCore import QObject, QSettings, Signal

logger = logging.getLogger(__name__)

# Default values
DEFAULTS = {
    "general/claudeDir": "~/.claude",
    "general/refreshDebounceMs": 500,
    "general/runInBackground": True,
    "advanced/debugLogging": False,
}


class ConfigManager(QObject):
    """Centralized settings for snapshot loading."""

    settings_changed = Signal(str)  # key

    def __init__(self, parent=None):
        super().__init__(parent)
        self._settings = QSettings()

    def get_string(self, key: str) -> str:
        return str(self._settings.value(key, DEFAULTS.get(key, "")))

    def get_int(self, key: str) -> int:
        val = self._settings.value(key, DEFAULTS.get(key, 0))
        try:
            return int(val)
        except (ValueError, TypeError):
            return DEFAULTS.get(key, 0)

    def get_bool(self, key: str) -> bool:
        val = self._settings.value(key, DEFAULTS.get(key, False))
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    def set_value(self, key: str, value):
        """Store a setting and announce the change."""
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    def claude_dir(self) -> str:
        """The Claude Code data directory with ~ expanded."""
        return os.path.expanduser(self.get_string("general/claudeDir"))

    def refresh_debounce_ms(self) -> int:
        return max(0, self.get_int("general/refreshDebounceMs"))


def configure_logging(config: ConfigManager):
    """Apply the debug-logging setting to the package logger."""
    level = logging.DEBUG if config.get_bool("advanced/debugLogging") else logging.INFO
    logging.getLogger("claude_snapshots").setLevel(level)
