from pathlib import Path

from flatdb import config


class FileReadError(config.FileError):
    """Raised when the backing storage cannot be read."""

    def __init__(self, *, path: Path, cause: Exception | str | None = None):
        self.path = path
        self.cause = cause

        super().__init__(f"Cannot read {path}: {cause}" if cause else f"Cannot read {path}")


class FileWriteError(config.FileError):
    """Raised when the backing storage cannot be written or replaced."""

    def __init__(self, *, path: Path, cause: Exception | str | None = None):
        self.path = path
        self.cause = cause

        super().__init__(f"Cannot write {path}: {cause}" if cause else f"Cannot write {path}")
