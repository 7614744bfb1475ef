"""
Operation errors for install-ops.

Every fallible resource operation fails with exactly one of the classes below.
Each class names the operation kind and carries the logical name and path(s)
involved. Most also keep the underlying cause in ``error`` (and ``__cause__``);
download, linking, copying, permission-setting, browser-open and home-location
errors report only the high-level fact.
"""

from pathlib import Path
from typing import Optional, Sequence


class OperationError(Exception):
    """Base class for all resource operation failures."""

    kind = "operation"

    def __init__(self, message: str, error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def __str__(self) -> str:
        return self.message


def _own(path) -> Path:
    # Errors keep their own copy of the caller's path.
    return Path(path)


# --- Single path, with cause ---

class CreatingDirectoryError(OperationError):
    kind = "creating_directory"

    def __init__(self, name: str, path: Path, error: BaseException):
        self.name = name
        self.path = _own(path)
        super().__init__(f"could not create {name} directory: '{self.path}'", error)


class ReadingFileError(OperationError):
    kind = "reading_file"

    def __init__(self, name: str, path: Path, error: BaseException):
        self.name = name
        self.path = _own(path)
        super().__init__(f"could not read {name} file: '{self.path}'", error)


class WritingFileError(OperationError):
    kind = "writing_file"

    def __init__(self, name: str, path: Path, error: BaseException):
        self.name = name
        self.path = _own(path)
        super().__init__(f"could not write {name} file: '{self.path}'", error)


class ReadingDirectoryError(OperationError):
    kind = "reading_directory"

    def __init__(self, name: str, path: Path, error: BaseException):
        self.name = name
        self.path = _own(path)
        super().__init__(f"could not read {name} directory: '{self.path}'", error)


class RemovingFileError(OperationError):
    kind = "removing_file"

    def __init__(self, name: str, path: Path, error: BaseException):
        self.name = name
        self.path = _own(path)
        super().__init__(f"could not remove {name} file: '{self.path}'", error)


class RemovingDirectoryError(OperationError):
    kind = "removing_directory"

    def __init__(self, name: str, path: Path, error: BaseException):
        self.name = name
        self.path = _own(path)
        super().__init__(f"could not remove {name} directory: '{self.path}'", error)


# --- Source and destination, with cause ---

class RenamingFileError(OperationError):
    kind = "renaming_file"

    def __init__(self, name: str, src: Path, dest: Path, error: BaseException):
        self.name = name
        self.src = _own(src)
        self.dest = _own(dest)
        super().__init__(
            f"could not rename {name} file from '{self.src}' to '{self.dest}'", error
        )


class RenamingDirectoryError(OperationError):
    kind = "renaming_directory"

    def __init__(self, name: str, src: Path, dest: Path, error: BaseException):
        self.name = name
        self.src = _own(src)
        self.dest = _own(dest)
        super().__init__(
            f"could not rename {name} directory from '{self.src}' to '{self.dest}'", error
        )


class FilteringFileError(OperationError):
    kind = "filtering_file"

    def __init__(self, name: str, src: Path, dest: Path, error: BaseException):
        self.name = name
        self.src = _own(src)
        self.dest = _own(dest)
        super().__init__(
            f"could not copy {name} file from '{self.src}' to '{self.dest}'", error
        )


# --- Source and destination, cause discarded ---

class LinkingFileError(OperationError):
    kind = "linking_file"

    def __init__(self, src: Path, dest: Path):
        self.src = _own(src)
        self.dest = _own(dest)
        super().__init__(f"could not create link from '{self.src}' to '{self.dest}'")


class LinkingDirectoryError(OperationError):
    kind = "linking_directory"

    def __init__(self, src: Path, dest: Path):
        self.src = _own(src)
        self.dest = _own(dest)
        super().__init__(f"could not create symlink from '{self.src}' to '{self.dest}'")


class CopyingFileError(OperationError):
    kind = "copying_file"

    def __init__(self, src: Path, dest: Path):
        self.src = _own(src)
        self.dest = _own(dest)
        super().__init__(f"could not copy file from '{self.src}' to '{self.dest}'")


class CopyingDirectoryError(OperationError):
    kind = "copying_directory"

    def __init__(self, src: Path, dest: Path):
        self.src = _own(src)
        self.dest = _own(dest)
        super().__init__(f"could not copy directory from '{self.src}' to '{self.dest}'")


class DownloadingFileError(OperationError):
    kind = "downloading_file"

    def __init__(self, url: str, path: Path):
        self.url = str(url)
        self.path = _own(path)
        super().__init__(f"could not download file from '{self.url}' to '{self.path}'")


# --- Processes ---

class RunningCommandError(OperationError):
    """The command could not be launched at all."""

    kind = "running_command"

    def __init__(self, name: str, error: BaseException):
        self.name = name
        super().__init__(f"could not run command: '{name}'", error)


class CommandStatusError(OperationError):
    """The command ran but did not exit with status 0."""

    kind = "command_status"

    def __init__(self, name: str, status: int, args: Optional[Sequence[str]] = None):
        self.name = name
        self.status = status
        self.command_args = list(args or [])
        super().__init__(f"command failed: '{name}' (exit status {status})")


# --- Verification and platform ---

class NotAFileError(OperationError):
    kind = "not_a_file"

    def __init__(self, path: Path):
        self.path = _own(path)
        super().__init__(f"not a file: '{self.path}'")


class NotADirError(OperationError):
    kind = "not_a_directory"

    def __init__(self, path: Path):
        self.path = _own(path)
        super().__init__(f"not a directory: '{self.path}'")


class SettingPermissionsError(OperationError):
    kind = "setting_permissions"

    def __init__(self, path: Path):
        self.path = _own(path)
        super().__init__(f"failed to set permissions for '{self.path}'")


class OpeningBrowserError(OperationError):
    kind = "opening_browser"

    def __init__(self):
        super().__init__("could not open browser")


class LocatingHomeError(OperationError):
    kind = "locating_home"

    def __init__(self):
        super().__init__("could not locate the home directory")
