"""
Resource operations module for install-ops.

Provides named, error-mapped file, directory, process and download operations
that announce what they are about to change through a notification sink.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

import requests

from core import errors
from core.notifications import (
    NotifyHandler,
    CreatingDirectory,
    DownloadingFile,
    LinkingDirectory,
    CopyingDirectory,
    RemovingDirectory,
    NoCanonicalPath,
)
from .platform import Platform, CURRENT_PLATFORM
from .raw import RawOperations, LocalRawOperations, is_file, is_directory, list_dir


T = TypeVar("T")


@dataclass
class Command:
    """A process to run: argument vector plus optional cwd and environment."""
    args: Sequence[str]
    cwd: Optional[Path] = None
    env: Optional[Dict[str, str]] = field(default=None, repr=False)


class ResourceOperator:
    """Named filesystem, process and network operations with notifications."""

    def __init__(
        self,
        notify_handler: NotifyHandler,
        raw: Optional[RawOperations] = None,
        platform: Optional[Platform] = None
    ):
        """
        Initialize ResourceOperator.

        Args:
            notify_handler: Sink that receives "about to act" events
            raw: Primitive operations (local machine if omitted)
            platform: Platform behaviour (the running platform if omitted)
        """
        self.notify = notify_handler
        self.raw = raw or LocalRawOperations()
        self.platform = platform or CURRENT_PLATFORM

    # --- Directory lifecycle ---

    def ensure_dir_exists(self, name: str, path: Path) -> bool:
        """
        Create a directory (and its parents) unless it already exists.

        Args:
            name: What the directory is for, e.g. "toolchains"
            path: Directory to create

        Returns:
            True if this call created the directory, False if it was there

        Raises:
            CreatingDirectoryError: If the directory could not be created
        """
        try:
            return self.raw.ensure_dir_exists(
                Path(path), lambda p: self.notify.call(CreatingDirectory(name, Path(p)))
            )
        except (OSError, ValueError) as e:
            raise errors.CreatingDirectoryError(name, path, e) from e

    def remove_dir(self, name: str, path: Path) -> None:
        """Recursively delete a directory."""
        self.notify.call(RemovingDirectory(name, Path(path)))
        try:
            shutil.rmtree(path)
        except (OSError, ValueError) as e:
            raise errors.RemovingDirectoryError(name, path, e) from e

    def read_dir(self, name: str, path: Path) -> List[Path]:
        try:
            return list_dir(path)
        except (OSError, ValueError) as e:
            raise errors.ReadingDirectoryError(name, path, e) from e

    # --- File content ---

    def read_file(self, name: str, path: Path) -> str:
        """
        Read a whole UTF-8 text file.

        Raises:
            ReadingFileError: If the file is missing, unreadable or not UTF-8
        """
        try:
            return self.raw.read_file(Path(path))
        except (OSError, ValueError) as e:
            raise errors.ReadingFileError(name, path, e) from e

    def write_file(self, name: str, path: Path, contents: str) -> None:
        try:
            self.raw.write_file(Path(path), contents)
        except (OSError, ValueError) as e:
            raise errors.WritingFileError(name, path, e) from e

    def append_file(self, name: str, path: Path, line: str) -> None:
        """Append ``line`` and a newline to a file, creating it if needed."""
        try:
            self.raw.append_file(Path(path), line)
        except (OSError, ValueError) as e:
            raise errors.WritingFileError(name, path, e) from e

    def filter_file(
        self,
        name: str,
        src: Path,
        dest: Path,
        predicate: Callable[[str], bool]
    ) -> int:
        """
        Copy only the lines of ``src`` that satisfy ``predicate`` into ``dest``.

        Lines reach the predicate without their line terminator and are written
        back with a single ``\\n``. ``dest`` is truncated first and is left as
        far as it got if the copy fails.

        Args:
            name: What the file is, e.g. "settings"
            src: File to read
            dest: File to write
            predicate: Called once per line, in order

        Returns:
            Number of lines written to ``dest``

        Raises:
            FilteringFileError: If either file cannot be used or ``src`` is not UTF-8
        """
        try:
            return self.raw.filter_file(Path(src), Path(dest), predicate)
        except (OSError, ValueError) as e:
            raise errors.FilteringFileError(name, src, dest, e) from e

    def match_file(self, name: str, src: Path, mapper: Callable[[str], Optional[T]]) -> Optional[T]:
        """
        Return the first non-None ``mapper`` result over the lines of ``src``.

        Reading stops at the first match; later lines are never passed to
        ``mapper``. Returns None if no line maps.

        Raises:
            ReadingFileError: If ``src`` cannot be read or is not UTF-8
        """
        try:
            return self.raw.match_file(Path(src), mapper)
        except (OSError, ValueError) as e:
            raise errors.ReadingFileError(name, src, e) from e

    # --- Path administration ---

    def rename_file(self, name: str, src: Path, dest: Path) -> None:
        try:
            os.rename(src, dest)
        except (OSError, ValueError) as e:
            raise errors.RenamingFileError(name, src, dest, e) from e

    def rename_dir(self, name: str, src: Path, dest: Path) -> None:
        try:
            os.rename(src, dest)
        except (OSError, ValueError) as e:
            raise errors.RenamingDirectoryError(name, src, dest, e) from e

    def remove_file(self, name: str, path: Path) -> None:
        try:
            os.remove(path)
        except (OSError, ValueError) as e:
            raise errors.RemovingFileError(name, path, e) from e

    def copy_file(self, src: Path, dest: Path) -> None:
        """Copy file contents and permission bits."""
        try:
            shutil.copyfile(src, dest)
            shutil.copymode(src, dest)
        except (OSError, ValueError):
            raise errors.CopyingFileError(src, dest) from None

    def copy_dir(self, src: Path, dest: Path) -> None:
        """Recursively copy a directory; ``dest`` must not exist yet."""
        self.notify.call(CopyingDirectory(Path(src), Path(dest)))
        if not self.raw.copy_dir(Path(src), Path(dest)):
            raise errors.CopyingDirectoryError(src, dest)

    def symlink_file(self, src: Path, dest: Path) -> None:
        if not self.raw.symlink_file(Path(src), Path(dest)):
            raise errors.LinkingFileError(src, dest)

    def symlink_dir(self, src: Path, dest: Path) -> None:
        self.notify.call(LinkingDirectory(Path(src), Path(dest)))
        if not self.raw.symlink_dir(Path(src), Path(dest)):
            raise errors.LinkingDirectoryError(src, dest)

    def hardlink_file(self, src: Path, dest: Path) -> None:
        if not self.raw.hardlink(Path(src), Path(dest)):
            raise errors.LinkingFileError(src, dest)

    def canonicalize_path(self, path: Path) -> Path:
        """
        Resolve symlinks and relative parts of ``path``.

        Never raises: if the path cannot be resolved a NoCanonicalPath event is
        sent and ``path`` comes back unchanged.
        """
        try:
            return Path(path).resolve(strict=True)
        except (OSError, RuntimeError, ValueError):
            self.notify.call(NoCanonicalPath(Path(path)))
            return Path(path)

    # --- Verification ---

    def assert_is_file(self, path: Path) -> None:
        if not is_file(path):
            raise errors.NotAFileError(path)

    def assert_is_directory(self, path: Path) -> None:
        if not is_directory(path):
            raise errors.NotADirError(path)

    # --- Network ---

    def download_file(self, url: str, path: Path, hasher=None) -> None:
        """
        Download ``url`` to ``path``.

        Every chunk written to ``path`` is also fed to ``hasher.update`` in
        order, so a ``hashlib`` object passed in ends up with the digest of the
        file on disk.

        Args:
            url: HTTP(S) URL to fetch
            path: Destination file, overwritten
            hasher: Optional object with an ``update(bytes)`` method

        Raises:
            DownloadingFileError: On any connection, HTTP status or write failure
        """
        self.notify.call(DownloadingFile(str(url), Path(path)))
        try:
            self.raw.download_file(str(url), Path(path), hasher)
        except (requests.RequestException, OSError, ValueError):
            raise errors.DownloadingFileError(url, path) from None

    # --- Process ---

    def cmd_status(self, name: str, command: Command) -> None:
        """
        Run a command to completion.

        Args:
            name: Name to report the command under
            command: What to run

        Raises:
            RunningCommandError: If the process could not be started
            CommandStatusError: If it exited with anything but 0
        """
        if not command.args:
            raise errors.RunningCommandError(name, ValueError("empty argument list"))

        try:
            result = subprocess.run(
                list(command.args),
                cwd=command.cwd,
                env=command.env
            )
        except (OSError, ValueError) as e:
            raise errors.RunningCommandError(name, e) from e

        if result.returncode != 0:
            raise errors.CommandStatusError(name, result.returncode, command.args)

    # --- Platform integration ---

    def open_browser(self, path: Path) -> None:
        if not self.raw.open_browser(Path(path)):
            raise errors.OpeningBrowserError()

    def set_permissions(self, path: Path, mode: int) -> None:
        try:
            os.chmod(path, mode)
        except (OSError, ValueError):
            raise errors.SettingPermissionsError(path) from None

    def make_executable(self, path: Path) -> None:
        """Add the execute bits for user, group and other. No-op on Windows."""
        if not self.platform.supports_executable_bit:
            return

        try:
            mode = os.stat(path).st_mode
        except (OSError, ValueError):
            raise errors.SettingPermissionsError(path) from None

        self.set_permissions(path, self.platform.executable_mode(mode))

    def get_local_data_path(self) -> Path:
        """
        Per-user data directory for this platform.

        Raises:
            LocatingHomeError: If no such directory can be determined
        """
        path = self.platform.local_data_path()
        if path is None:
            raise errors.LocatingHomeError()
        return path
