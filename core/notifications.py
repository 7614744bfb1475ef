"""
Notification events for install-ops.

Resource operations announce what they are about to do by handing one of these
events to a notification sink. Sinks are for observability only: they cannot
veto an action and whatever they return is ignored.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Protocol


class NotificationLevel(Enum):
    """How loudly an event should be reported."""
    VERBOSE = "verbose"
    INFO = "info"
    WARN = "warn"


@dataclass(frozen=True)
class Notification:
    """Base class for every notification event."""

    kind = "notification"
    level = NotificationLevel.VERBOSE

    def describe(self) -> str:
        return self.kind.replace("_", " ")

    def to_metadata(self) -> Dict[str, Any]:
        """Event fields as JSON-friendly values."""
        return {
            key: str(value) if isinstance(value, Path) else value
            for key, value in self.__dict__.items()
        }


@dataclass(frozen=True)
class CreatingDirectory(Notification):
    name: str
    path: Path

    kind = "creating_directory"

    def describe(self) -> str:
        return f"creating {self.name} directory: '{self.path}'"


@dataclass(frozen=True)
class DownloadingFile(Notification):
    url: str
    path: Path

    kind = "downloading_file"

    def describe(self) -> str:
        return f"downloading file from: '{self.url}'"


@dataclass(frozen=True)
class LinkingDirectory(Notification):
    src: Path
    dest: Path

    kind = "linking_directory"

    def describe(self) -> str:
        return f"linking directory from: '{self.src}' to '{self.dest}'"


@dataclass(frozen=True)
class CopyingDirectory(Notification):
    src: Path
    dest: Path

    kind = "copying_directory"

    def describe(self) -> str:
        return f"copying directory from: '{self.src}' to '{self.dest}'"


@dataclass(frozen=True)
class RemovingDirectory(Notification):
    name: str
    path: Path

    kind = "removing_directory"

    def describe(self) -> str:
        return f"removing {self.name} directory: '{self.path}'"


@dataclass(frozen=True)
class NoCanonicalPath(Notification):
    path: Path

    kind = "no_canonical_path"
    level = NotificationLevel.WARN

    def describe(self) -> str:
        return f"could not canonicalize path: '{self.path}'"


class NotifyHandler(Protocol):
    """Anything with a ``call(event)`` method can receive notifications."""

    def call(self, event: Notification) -> None:
        ...


class NullNotifier:
    """Sink that drops every event."""

    def call(self, event: Notification) -> None:
        pass


class CallbackNotifier:
    """Adapts a plain function into a notification sink."""

    def __init__(self, callback):
        self._callback = callback

    def call(self, event: Notification) -> None:
        self._callback(event)
