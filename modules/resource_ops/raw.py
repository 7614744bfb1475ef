"""
Raw operations for install-ops.

These are the primitives the resource operator is built on. They do the real
OS and network work and report failure in the plainest way available: an
``OSError`` (or ``UnicodeDecodeError``) for file content, a ``requests``
exception for downloads, and a bare ``False`` for linking, directory copying
and browser launch.
"""

import os
import secrets
import shutil
import string
import webbrowser
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

import requests
import urllib3

from core.config import DownloadSettings


T = TypeVar("T")


# --- Helpers ---

def is_file(path) -> bool:
    return Path(path).is_file()


def is_directory(path) -> bool:
    return Path(path).is_dir()


def path_exists(path) -> bool:
    return os.path.lexists(path)


def to_absolute(path) -> Optional[Path]:
    """Resolve ``path`` against the working directory; None if that is gone."""
    path = Path(path)
    if path.is_absolute():
        return path
    try:
        return Path.cwd() / path
    except OSError:
        return None


def if_not_empty(value: Optional[str]) -> Optional[str]:
    return value if value else None


def random_string(length: int) -> str:
    """Random lowercase alphanumeric string, used for scratch file names."""
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def prefix_arg(prefix: str, value) -> str:
    """Glue a flag prefix to its value, e.g. ``prefix_arg("--prefix=", p)``."""
    return f"{prefix}{value}"


def home_dir() -> Optional[Path]:
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return None


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


# --- Collaborator contract ---

class RawOperations(ABC):
    """Primitive filesystem, network and desktop operations.

    Implementations:
    - LocalRawOperations: local filesystem, ``requests`` for HTTP(S)
    """

    @abstractmethod
    def ensure_dir_exists(self, path: Path, on_create: Callable[[Path], None]) -> bool:
        """Create ``path`` and its parents if missing.

        ``on_create`` runs just before the directory is created. Returns True
        only when this call created it.
        """
        ...

    @abstractmethod
    def read_file(self, path: Path) -> str:
        ...

    @abstractmethod
    def write_file(self, path: Path, contents: str) -> None:
        ...

    @abstractmethod
    def append_file(self, path: Path, line: str) -> None:
        ...

    @abstractmethod
    def filter_file(self, src: Path, dest: Path, predicate: Callable[[str], bool]) -> int:
        """Copy the lines of ``src`` that satisfy ``predicate`` into ``dest``.

        Returns:
            Number of lines written
        """
        ...

    @abstractmethod
    def match_file(self, src: Path, mapper: Callable[[str], Optional[T]]) -> Optional[T]:
        """Return the first non-None ``mapper`` result over the lines of ``src``."""
        ...

    @abstractmethod
    def symlink_file(self, src: Path, dest: Path) -> bool:
        ...

    @abstractmethod
    def symlink_dir(self, src: Path, dest: Path) -> bool:
        ...

    @abstractmethod
    def hardlink(self, src: Path, dest: Path) -> bool:
        ...

    @abstractmethod
    def copy_dir(self, src: Path, dest: Path) -> bool:
        ...

    @abstractmethod
    def download_file(self, url: str, path: Path, hasher=None) -> None:
        """Stream ``url`` into ``path``, feeding each written chunk to ``hasher``."""
        ...

    @abstractmethod
    def open_browser(self, path: Path) -> bool:
        ...


class LocalRawOperations(RawOperations):
    """Raw operations against the local machine."""

    def __init__(
        self,
        settings: Optional[DownloadSettings] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize LocalRawOperations.

        Args:
            settings: Download chunk size, timeout and user agent
            session: HTTP session to download with (a new one if omitted)
        """
        self.settings = settings or DownloadSettings()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.settings.user_agent})

    def ensure_dir_exists(self, path: Path, on_create: Callable[[Path], None]) -> bool:
        if is_directory(path):
            return False
        on_create(path)
        Path(path).mkdir(parents=True, exist_ok=True)
        return True

    def read_file(self, path: Path) -> str:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    def write_file(self, path: Path, contents: str) -> None:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(contents)

    def append_file(self, path: Path, line: str) -> None:
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def filter_file(self, src: Path, dest: Path, predicate: Callable[[str], bool]) -> int:
        written = 0
        with open(src, "r", encoding="utf-8") as reader, \
                open(dest, "w", encoding="utf-8") as writer:
            for line in reader:
                line = _strip_newline(line)
                if predicate(line):
                    writer.write(line + "\n")
                    written += 1
        return written

    def match_file(self, src: Path, mapper: Callable[[str], Optional[T]]) -> Optional[T]:
        with open(src, "r", encoding="utf-8") as reader:
            for line in reader:
                result = mapper(_strip_newline(line))
                if result is not None:
                    return result
        return None

    def symlink_file(self, src: Path, dest: Path) -> bool:
        try:
            os.symlink(src, dest)
        except (OSError, ValueError):
            return False
        return True

    def symlink_dir(self, src: Path, dest: Path) -> bool:
        try:
            os.symlink(src, dest, target_is_directory=True)
        except (OSError, ValueError):
            return False
        return True

    def hardlink(self, src: Path, dest: Path) -> bool:
        try:
            os.link(src, dest)
        except (OSError, ValueError):
            return False
        return True

    def copy_dir(self, src: Path, dest: Path) -> bool:
        try:
            shutil.copytree(src, dest, symlinks=True)
        except (OSError, ValueError):
            return False
        return True

    def download_file(self, url: str, path: Path, hasher=None) -> None:
        with self.session.get(url, stream=True, timeout=self.settings.timeout) as response:
            response.raise_for_status()
            # Wire bytes, not the Content-Encoding-decoded body.
            chunks = response.raw.stream(self.settings.chunk_size, decode_content=False)
            with open(path, "wb") as f:
                try:
                    for chunk in chunks:
                        if not chunk:
                            continue
                        f.write(chunk)
                        if hasher is not None:
                            hasher.update(chunk)
                except urllib3.exceptions.HTTPError as e:
                    raise requests.ConnectionError(e) from e

    def open_browser(self, path: Path) -> bool:
        try:
            return webbrowser.open(Path(path).resolve().as_uri())
        except (webbrowser.Error, OSError, ValueError):
            return False


def list_dir(path: Path) -> List[Path]:
    """Entries of ``path`` in name order."""
    return sorted(Path(path).iterdir())
