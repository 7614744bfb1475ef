"""
Tests for settings loading.
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import Settings, DownloadSettings


class TestSettings:
    """Test Settings loading and saving."""

    @pytest.fixture
    def temp_config(self, tmp_path):
        """Create a temporary config file."""
        path = tmp_path / "config.yaml"
        path.write_text("""install_ops:
  download:
    chunk_size: 1024
    timeout: 5
  audit:
    log_path: logs/audit.jsonl
""", encoding="utf-8")
        return path

    def test_load(self, temp_config):
        settings = Settings.load(str(temp_config))

        assert settings.download.chunk_size == 1024
        assert settings.download.timeout == 5.0
        assert settings.download.user_agent == DownloadSettings().user_agent
        assert settings.audit.log_path == "logs/audit.jsonl"

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = Settings.load(str(tmp_path / "missing.yaml"))

        assert settings.download == DownloadSettings()

    def test_broken_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("install_ops: [unclosed", encoding="utf-8")

        assert Settings.load(str(path)).download == DownloadSettings()

    def test_unrooted_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("download:\n  chunk_size: 2048\n", encoding="utf-8")

        assert Settings.load(str(path)).download.chunk_size == 2048

    def test_bad_value_falls_back_per_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "install_ops:\n  download:\n    chunk_size: lots\n    timeout: 12\n",
            encoding="utf-8"
        )

        download = Settings.load(str(path)).download

        assert download.chunk_size == DownloadSettings().chunk_size
        assert download.timeout == 12.0

    @pytest.mark.parametrize("chunk_size,timeout", [(0, -1), (-4096, 0), ([1], {"a": 1})])
    def test_unusable_numbers_fall_back(self, chunk_size, timeout):
        settings = Settings.from_dict({"download": {"chunk_size": chunk_size, "timeout": timeout}})

        assert settings.download == DownloadSettings()

    @pytest.mark.parametrize("section", ["x", 5, ["chunk_size", 1024], None])
    def test_non_mapping_section_falls_back(self, section):
        settings = Settings.from_dict({"download": section, "audit": section})

        assert settings.download == DownloadSettings()
        assert settings.audit.log_path == "data/audit_log.jsonl"

    def test_save_keeps_other_sections(self, temp_config):
        existing = yaml.safe_load(temp_config.read_text(encoding="utf-8"))
        existing["other_tool"] = {"enabled": True}
        temp_config.write_text(yaml.dump(existing), encoding="utf-8")

        settings = Settings.load(str(temp_config))
        settings.download.timeout = 60
        settings.save()

        saved = yaml.safe_load(temp_config.read_text(encoding="utf-8"))
        assert saved["other_tool"] == {"enabled": True}
        assert saved["install_ops"]["download"]["timeout"] == 60


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
