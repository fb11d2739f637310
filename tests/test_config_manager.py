"""Tests for claude_snapshots.services.config_manager."""

import logging
import os

import pytest

from claude_snapshots.services.config_manager import ConfigManager, configure_logging


@pytest.fixture
def config(isolated_settings):
    """Create a ConfigManager with isolated QSettings."""
    return ConfigManager()


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

def test_default_string(config):
    assert config.get_string("general/claudeDir") == "~/.claude"


def test_default_int(config):
    assert config.get_int("general/refreshDebounceMs") == 500


def test_default_bool(config):
    assert config.get_bool("general/runInBackground") is True
    assert config.get_bool("advanced/debugLogging") is False


def test_unknown_key(config):
    assert config.get_string("nope/missing") == ""
    assert config.get_int("nope/missing") == 0
    assert config.get_bool("nope/missing") is False


# ---------------------------------------------------------------------------
# Set and get
# ---------------------------------------------------------------------------

def test_set_get_string(config):
    config.set_value("general/claudeDir", "/custom/.claude")
    assert config.get_string("general/claudeDir") == "/custom/.claude"


def test_set_get_int(config):
    config.set_value("general/refreshDebounceMs", 50)
    assert config.get_int("general/refreshDebounceMs") == 50


def test_set_get_bool(config):
    config.set_value("general/runInBackground", False)
    assert config.get_bool("general/runInBackground") is False


def test_bad_int_falls_back_to_default(config):
    config.set_value("general/refreshDebounceMs", "soon")
    assert config.get_int("general/refreshDebounceMs") == 500


def test_settings_changed_signal(config):
    """settings_changed emits the key that was changed."""
    keys = []
    config.settings_changed.connect(lambda k: keys.append(k))
    config.set_value("test/key", "value")
    assert keys == ["test/key"]


def test_persists_across_instances(config):
    config.set_value("general/refreshDebounceMs", 1234)
    config._settings.sync()
    assert ConfigManager().get_int("general/refreshDebounceMs") == 1234


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------

def test_claude_dir_expands_home(config):
    assert config.claude_dir() == os.path.join(os.path.expanduser("~"), ".claude")


def test_refresh_debounce_never_negative(config):
    config.set_value("general/refreshDebounceMs", -5)
    assert config.refresh_debounce_ms() == 0


def test_configure_logging(config):
    logger = logging.getLogger("claude_snapshots")
    original = logger.level
    try:
        configure_logging(config)
        assert logger.level == logging.INFO

        config.set_value("advanced/debugLogging", True)
        configure_logging(config)
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(original)
