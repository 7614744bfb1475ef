"""
Audit Logger for install-ops.

Provides an append-only notification sink that records every resource
operation event with a timestamp, so installs can be reviewed afterwards.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any

from .notifications import Notification, NotificationLevel


@dataclass
class AuditEntry:
    """Represents a single audit log entry."""
    timestamp: str
    kind: str
    level: str
    description: str
    metadata: Dict[str, Any]

    @classmethod
    def from_event(cls, event: Notification) -> "AuditEntry":
        """Factory method to create an audit entry with current timestamp."""
        return cls(
            timestamp=datetime.now().isoformat(),
            kind=event.kind,
            level=event.level.value,
            description=event.describe(),
            metadata=event.to_metadata()
        )

    def to_json(self) -> str:
        """Convert entry to JSON string."""
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "AuditEntry":
        """Create entry from JSON string."""
        data = json.loads(json_str)
        return cls(**data)


class AuditLogger:
    """
    Append-only audit logger and notification sink.

    Every event handed to ``call`` is written as one line of a JSONL file.
    """

    def __init__(self, log_path: str = "data/audit_log.jsonl"):
        """
        Initialize the audit logger.

        Args:
            log_path: Path to the JSONL log file
        """
        self.log_path = Path(log_path)
        self._ensure_log_directory()

    def _ensure_log_directory(self) -> None:
        """Create the log directory if it doesn't exist."""
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.log_path.exists():
            self.log_path.touch()

    def call(self, event: Notification) -> None:
        """Record a notification event."""
        self.log(AuditEntry.from_event(event))

    def log(self, entry: AuditEntry) -> None:
        """
        Append an audit entry to the log.

        Args:
            entry: The AuditEntry to log
        """
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(entry.to_json() + "\n")

    def _iter_entries(self):
        if not self.log_path.exists():
            return

        with open(self.log_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    yield AuditEntry.from_json(line)
                except (json.JSONDecodeError, TypeError):
                    continue

    def get_recent(self, limit: int = 100) -> List[AuditEntry]:
        """
        Get the most recent audit entries.

        Args:
            limit: Maximum number of entries to return

        Returns:
            List of AuditEntry objects, most recent first
        """
        entries = list(self._iter_entries())
        return list(reversed(entries[-limit:])) if limit > 0 else []

    def get_by_kind(self, kind: str, limit: int = 100) -> List[AuditEntry]:
        """
        Get audit entries for one event kind, oldest first.

        Args:
            kind: Event kind, e.g. "downloading_file"
            limit: Maximum number of entries to return
        """
        entries = []
        for entry in self._iter_entries():
            if len(entries) >= limit:
                break
            if entry.kind == kind:
                entries.append(entry)
        return entries

    def get_warnings(self, limit: int = 50) -> List[AuditEntry]:
        """
        Get warning-level events.

        Useful for spotting paths that could not be resolved.
        """
        entries = []
        for entry in self._iter_entries():
            if len(entries) >= limit:
                break
            if entry.level == NotificationLevel.WARN.value:
                entries.append(entry)
        return entries

    def export(self, format: str = "json") -> str:
        """
        Export the entire audit log.

        Args:
            format: Export format ("json" or "csv")

        Returns:
            String containing the exported data
        """
        entries = self.get_recent(limit=10000)

        if format == "json":
            return json.dumps([asdict(e) for e in entries], indent=2)
        elif format == "csv":
            lines = ["timestamp,kind,level,description"]
            for e in entries:
                description = e.description.replace('"', '""')
                lines.append(f'"{e.timestamp}","{e.kind}","{e.level}","{description}"')
            return "\n".join(lines) + "\n"
        else:
            raise ValueError(f"Unsupported export format: {format}")
