"""
Settings for install-ops.

Settings come from a YAML file. A missing or unreadable file falls back to the
defaults so a fresh install always has something to work with.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


CONFIG_ROOT = "install_ops"


@dataclass
class DownloadSettings:
    """Knobs for streaming HTTP(S) downloads."""
    chunk_size: int = 64 * 1024
    timeout: float = 30.0
    user_agent: str = "install-ops/0.1.0"


@dataclass
class AuditSettings:
    log_path: str = "data/audit_log.jsonl"


@dataclass
class Settings:
    """All install-ops settings."""
    download: DownloadSettings = field(default_factory=DownloadSettings)
    audit: AuditSettings = field(default_factory=AuditSettings)
    config_path: Optional[Path] = None

    @classmethod
    def load(cls, config_path: str = "config.yaml") -> "Settings":
        """
        Load settings from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Settings populated from the file, defaults where a key is missing
        """
        path = Path(config_path)
        settings = cls.from_dict(_load_config(path))
        settings.config_path = path
        return settings

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "Settings":
        """Build settings, keeping the default for any unusable value."""
        download = _section(config, "download")
        audit = _section(config, "audit")
        defaults = DownloadSettings()

        return cls(
            download=DownloadSettings(
                chunk_size=_coerce(download, "chunk_size", int, defaults.chunk_size),
                timeout=_coerce(download, "timeout", float, defaults.timeout),
                user_agent=_coerce(download, "user_agent", str, defaults.user_agent),
            ),
            audit=AuditSettings(
                log_path=_coerce(audit, "log_path", str, AuditSettings().log_path),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "download": {
                "chunk_size": self.download.chunk_size,
                "timeout": self.download.timeout,
                "user_agent": self.download.user_agent,
            },
            "audit": {
                "log_path": self.audit.log_path,
            },
        }

    def save(self, config_path: Optional[str] = None) -> None:
        """Save the settings, keeping unrelated top-level keys in the file."""
        path = Path(config_path) if config_path else (self.config_path or Path("config.yaml"))
        config: Dict[str, Any] = {CONFIG_ROOT: self.to_dict()}

        # Merge with existing config
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    existing = yaml.safe_load(f) or {}
                if isinstance(existing, dict):
                    existing[CONFIG_ROOT] = config[CONFIG_ROOT]
                    config = existing
            except yaml.YAMLError:
                pass

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(config, f, default_flow_style=False)


def _load_config(path: Path) -> Dict[str, Any]:
    """Load the raw configuration mapping from YAML."""
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}

    if not isinstance(config, dict):
        return {}
    section = config.get(CONFIG_ROOT, config)
    return section if isinstance(section, dict) else {}


def _section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = config.get(key)
    return section if isinstance(section, dict) else {}


def _coerce(section: Dict[str, Any], key: str, kind, default):
    if section.get(key) is None:
        return default
    try:
        value = kind(section[key])
    except (TypeError, ValueError):
        return default
    # Sizes and timeouts must be positive.
    if kind in (int, float) and value <= 0:
        return default
    return value
