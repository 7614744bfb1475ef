"""
Tests for the raw operation helpers.
"""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from modules.resource_ops import raw
from modules.resource_ops.raw import (
    LocalRawOperations,
    if_not_empty,
    is_directory,
    is_file,
    path_exists,
    prefix_arg,
    random_string,
    to_absolute,
)


class TestHelpers:
    """Test the small path and string helpers."""

    def test_kind_checks(self, tmp_path):
        (tmp_path / "file").write_text("")

        assert is_file(tmp_path / "file")
        assert not is_file(tmp_path)
        assert is_directory(tmp_path)
        assert not is_directory(tmp_path / "file")
        assert path_exists(tmp_path / "file")
        assert not path_exists(tmp_path / "missing")

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_dangling_symlink_exists(self, tmp_path):
        os.symlink(tmp_path / "missing", tmp_path / "link")

        assert path_exists(tmp_path / "link")
        assert not is_file(tmp_path / "link")

    def test_to_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert to_absolute("sub") == Path.cwd() / "sub"
        assert to_absolute(tmp_path) == tmp_path

    def test_if_not_empty(self):
        assert if_not_empty("") is None
        assert if_not_empty(None) is None
        assert if_not_empty("value") == "value"

    def test_random_string(self):
        value = random_string(12)

        assert len(value) == 12
        assert value.isalnum()
        assert value == value.lower()

    def test_prefix_arg(self, tmp_path):
        assert prefix_arg("--prefix=", tmp_path) == f"--prefix={tmp_path}"

    def test_home_dir_unavailable(self, monkeypatch):
        def no_home():
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(raw.Path, "home", staticmethod(no_home))

        assert raw.home_dir() is None


class TestLocalRawOperations:
    """Test the primitives directly."""

    @pytest.fixture
    def ops(self):
        return LocalRawOperations()

    def test_ensure_dir_exists_callback(self, ops, tmp_path):
        created = []
        target = tmp_path / "a" / "b"

        assert ops.ensure_dir_exists(target, created.append) is True
        assert ops.ensure_dir_exists(target, created.append) is False
        assert created == [target]

    def test_link_failures_return_false(self, ops, tmp_path):
        assert ops.hardlink(tmp_path / "missing", tmp_path / "link") is False
        assert ops.copy_dir(tmp_path / "missing", tmp_path / "copy") is False

    def test_user_agent_header(self):
        ops = LocalRawOperations()

        assert ops.session.headers["User-Agent"] == ops.settings.user_agent


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
