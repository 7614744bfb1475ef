"""
Platform-specific behaviour for install-ops.

One implementation per platform family, picked once when this module is
imported. The resource operator takes the instance as a dependency, so tests
can hand it the other one.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .raw import home_dir, to_absolute


EXECUTABLE_BITS = 0o111


class Platform(ABC):
    """Executable-bit support and the per-user data directory."""

    name = "unknown"
    supports_executable_bit = False

    @abstractmethod
    def local_data_path(self) -> Optional[Path]:
        """Per-user data directory, or None when it cannot be found."""
        ...

    def executable_mode(self, mode: int) -> int:
        return mode | EXECUTABLE_BITS


class PosixPlatform(Platform):
    name = "posix"
    supports_executable_bit = True

    def local_data_path(self) -> Optional[Path]:
        # TODO: consider $XDG_DATA_HOME (~/.local/share) instead of $HOME
        home = home_dir()
        if home is None:
            return None
        return to_absolute(home)


class WindowsPlatform(Platform):
    name = "windows"

    def local_data_path(self) -> Optional[Path]:
        return get_special_folder("LOCALAPPDATA")


def get_special_folder(variable: str) -> Optional[Path]:
    """Look up a Windows known folder through its environment variable."""
    value = os.environ.get(variable)
    if not value:
        return None
    return Path(value)


CURRENT_PLATFORM: Platform = WindowsPlatform() if os.name == "nt" else PosixPlatform()
