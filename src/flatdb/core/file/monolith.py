import logging
import os
from pathlib import Path
from typing import Final

from flatdb import interface
from flatdb.config.constants import TEMP_SUFFIX

from .errors import FileReadError, FileWriteError

logger = logging.getLogger(__name__)


class MonolithicFile(interface.File):
    """A single flat file on disk holding the whole store."""

    def __init__(self, path: Path | str, *, fsync: bool = True):
        """Initialize a monolithic file.

        Args:
            path (Path | str): Location of the store file. Its directory must already exist.
            fsync (bool, optional): Force written data to disk before replacing the target. Defaults to True.

        Raises:
            ValueError: If path names a directory.
            FileNotFoundError: If the parent directory does not exist.
            NotADirectoryError: If the parent path exists but is not a directory.
        """

        path = Path(path).resolve()

        if path.is_dir():
            raise ValueError(f"Path is a directory: {path}")

        directory = path.parent

        if not directory.exists():
            raise FileNotFoundError(f"Directory does not exist: {directory}")

        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")

        self._path: Final[Path] = path
        self._temp_path: Final[Path] = path.with_name(path.name + TEMP_SUFFIX)
        self._fsync: Final[bool] = fsync

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def create(self) -> None:
        """Create the file empty if it does not exist.

        Raises:
            FileWriteError: If the file cannot be created.
        """

        try:
            self._path.touch(exist_ok=True)
        except OSError as e:
            raise FileWriteError(path=self._path, cause=e) from e

    def read_all(self) -> bytes:
        """Read the whole file.

        Raises:
            FileReadError: If the file is missing or cannot be read.

        Returns:
            bytes: The file content.
        """

        try:
            with open(self._path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise FileReadError(path=self._path, cause=e) from e

        logger.debug("Read %d bytes from %s", len(data), self._path)

        return data

    def write_all(self, data: bytes) -> int:
        """Replace the file content.

        The data is written to a sibling temporary file which is then renamed
        over the target, so readers see either the old or the new content.

        Args:
            data (bytes): The new content.

        Raises:
            FileWriteError: If any step fails. The temporary file is removed and the target is left as it was.

        Returns:
            int: The number of bytes written.
        """

        try:
            with open(self._temp_path, "wb") as f:
                count = f.write(data)
                f.flush()

                if self._fsync:
                    os.fsync(f.fileno())

            os.replace(self._temp_path, self._path)
        except OSError as e:
            self._temp_path.unlink(missing_ok=True)

            raise FileWriteError(path=self._path, cause=e) from e

        logger.debug("Wrote %d bytes to %s", count, self._path)

        return count
