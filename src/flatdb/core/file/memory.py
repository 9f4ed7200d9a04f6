from pathlib import Path
from typing import Final

from flatdb import interface

from .errors import FileReadError


class InMemoryFile(interface.File):
    """Byte buffer standing in for a file, for embedding and tests."""

    def __init__(self, data: bytes | None = None, *, name: str = "memory") -> None:
        """Initialize the buffer.

        Args:
            data (bytes | None, optional): Initial content. None means the storage does not exist yet. Defaults to None.
            name (str, optional): Label reported as the path. Defaults to "memory".
        """

        self._path: Final[Path] = Path(name)
        self._data: bytes | None = None if data is None else bytes(data)
        self.writes = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def data(self) -> bytes | None:
        """Current content, or None if the storage was never created."""

        return self._data

    def exists(self) -> bool:
        return self._data is not None

    def create(self) -> None:
        if self._data is None:
            self._data = b""

    def read_all(self) -> bytes:
        if self._data is None:
            raise FileReadError(path=self._path, cause="does not exist")

        return self._data

    def write_all(self, data: bytes) -> int:
        self._data = bytes(data)
        self.writes += 1

        return len(self._data)
