"""
Tests for the audit logger and notification events.
"""

import json
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.logger import AuditLogger, AuditEntry
from core.notifications import (
    CallbackNotifier,
    CreatingDirectory,
    DownloadingFile,
    NoCanonicalPath,
    Notification,
    NotificationLevel,
    NullNotifier,
    RemovingDirectory,
)


class TestNotifications:
    """Test notification events."""

    def test_levels(self):
        assert CreatingDirectory("cache", Path("/tmp/c")).level == NotificationLevel.VERBOSE
        assert NoCanonicalPath(Path("/tmp/x")).level == NotificationLevel.WARN

    def test_describe(self):
        event = RemovingDirectory("toolchain", Path("/opt/tc"))

        assert event.describe() == f"removing toolchain directory: '{Path('/opt/tc')}'"

    def test_base_describe(self):
        assert Notification().describe() == "notification"

    def test_metadata_is_json_friendly(self):
        event = DownloadingFile("https://example.com/a", Path("/tmp/a"))

        metadata = event.to_metadata()

        assert metadata == {"url": "https://example.com/a", "path": str(Path("/tmp/a"))}
        json.dumps(metadata)

    def test_callback_notifier(self):
        seen = []
        event = NoCanonicalPath(Path("x"))

        CallbackNotifier(seen.append).call(event)
        NullNotifier().call(event)

        assert seen == [event]


class TestAuditLogger:
    """Test AuditLogger class."""

    @pytest.fixture
    def temp_log(self):
        """Create a temporary log file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            yield f.name
        os.unlink(f.name)

    @pytest.fixture
    def logger(self, temp_log):
        """Create a logger with temp file."""
        return AuditLogger(log_path=temp_log)

    def test_call_logs_event(self, logger):
        """Test that a notification becomes one JSON line."""
        logger.call(CreatingDirectory("cache", Path("/tmp/cache")))

        lines = logger.log_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        entry = AuditEntry.from_json(lines[0])
        assert entry.kind == "creating_directory"
        assert entry.level == "verbose"
        assert entry.metadata["name"] == "cache"

    def test_creates_missing_directory(self, tmp_path):
        logger = AuditLogger(log_path=str(tmp_path / "nested" / "audit.jsonl"))

        assert logger.log_path.exists()

    def test_get_recent(self, logger):
        """Test getting recent entries."""
        for i in range(5):
            logger.call(CreatingDirectory(f"dir{i}", Path(f"/tmp/{i}")))

        entries = logger.get_recent(limit=3)

        assert len(entries) == 3
        assert entries[0].metadata["name"] == "dir4"

    def test_skips_corrupt_lines(self, logger):
        logger.call(CreatingDirectory("cache", Path("/tmp/cache")))
        with open(logger.log_path, "a", encoding="utf-8") as f:
            f.write("not json\n")

        assert len(logger.get_recent()) == 1

    def test_get_by_kind(self, logger):
        logger.call(CreatingDirectory("cache", Path("/tmp/cache")))
        logger.call(DownloadingFile("https://example.com/a", Path("/tmp/a")))

        entries = logger.get_by_kind("downloading_file")

        assert [e.metadata["url"] for e in entries] == ["https://example.com/a"]

    def test_get_warnings(self, logger):
        """Test getting warning-level events."""
        logger.call(CreatingDirectory("cache", Path("/tmp/cache")))
        logger.call(NoCanonicalPath(Path("/tmp/missing")))

        warnings = logger.get_warnings()

        assert len(warnings) == 1
        assert warnings[0].kind == "no_canonical_path"

    def test_export(self, logger):
        logger.call(NoCanonicalPath(Path("/tmp/missing")))

        exported = json.loads(logger.export("json"))
        csv = logger.export("csv")

        assert exported[0]["kind"] == "no_canonical_path"
        assert csv.splitlines()[0] == "timestamp,kind,level,description"
        assert "no_canonical_path" in csv

        with pytest.raises(ValueError):
            logger.export("xml")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
