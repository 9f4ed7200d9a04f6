from typing import Iterator

from flatdb import config, interface
from flatdb.core.record import Record


class InMemoryIndexError(config.IndexingError):
    """Base exception for in memory index errors."""


class InMemoryIndexKeyNotFoundError(InMemoryIndexError):
    """Raised when a key is not found in the record table."""

    def __init__(self, *, key: str):
        self.key = key

        super().__init__(f"Key not found: {key!r}")


class InMemoryIndex(interface.Index):
    """In-memory implementation of the Index interface using a dictionary."""

    def __init__(self) -> None:
        """Initialize an empty in-memory index."""
        self._record_table = dict[str, Record]()

    def has(self, key: str, /) -> bool:
        """Check if a key exists in the index.

        Args:
            key (str): The key to check.

        Returns:
            bool: True if the key exists, False otherwise.
        """

        return key in self._record_table

    def set(self, key: str, record: Record, /) -> None:
        """Insert a record, or replace the one held for the key.

        A replaced key keeps its original insertion position.

        Args:
            key (str): The key to set.
            record (Record): The record to store.
        """

        self._record_table[key] = record

    def get(self, key: str, /) -> Record:
        """Get the record for a key.

        Args:
            key (str): The key to retrieve.

        Raises:
            InMemoryIndexKeyNotFoundError: If the key is not found in the index.

        Returns:
            Record: The record held for the key.
        """

        record = self._record_table.get(key)

        if record is None:
            raise InMemoryIndexKeyNotFoundError(key=key)

        return record

    def clear(self) -> None:
        self._record_table.clear()

    def items(self) -> Iterator[tuple[str, Record]]:
        yield from self._record_table.items()

    def __len__(self) -> int:
        return len(self._record_table)
