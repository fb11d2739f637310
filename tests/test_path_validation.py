"""Tests for path containment checks."""

import os

import pytest

from claude_snapshots.utils.path_validation import is_path_within, is_safe_backup_name


class TestIsPathWithin:
    def test_child(self, tmp_path):
        assert is_path_within(str(tmp_path / "a" / "b"), str(tmp_path)) is True

    def test_root_itself(self, tmp_path):
        assert is_path_within(str(tmp_path), str(tmp_path)) is True

    def test_parent_escape(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        assert is_path_within(str(root / ".." / "other"), str(root)) is False

    def test_sibling_prefix(self, tmp_path):
        """/x/root-other is not inside /x/root."""
        assert is_path_within(str(tmp_path / "root-other"), str(tmp_path / "root")) is False

    def test_symlink_escape(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "outside"
        outside.mkdir()
        os.symlink(outside, root / "link")
        assert is_path_within(str(root / "link" / "f"), str(root)) is False


class TestIsSafeBackupName:
    @pytest.mark.parametrize("name", ["abc123@v1", "a.b@v2", "sess-rewind"])
    def test_safe(self, name):
        assert is_safe_backup_name(name) is True

    @pytest.mark.parametrize("name", ["", ".", "..", "../x", "a/b", "a\\b", "a\x00b"])
    def test_unsafe(self, name):
        assert is_safe_backup_name(name) is False
