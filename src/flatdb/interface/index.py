from abc import ABC, abstractmethod
from typing import Iterator

from flatdb.core.record import Record


class Index(ABC):
    """Abstract base class for the key to record mapping."""

    @abstractmethod
    def has(self, key: str, /) -> bool:
        """Check if a key exists in the index.

        Args:
            key (str): The key to check.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.

        Returns:
            bool: True if the key exists, False otherwise.
        """

        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, record: Record, /) -> None:
        """Insert a record, or replace the record already held for the key.

        Args:
            key (str): The key to set.
            record (Record): The record to store under the key.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.
        """

        raise NotImplementedError

    @abstractmethod
    def get(self, key: str, /) -> Record:
        """Get the record for a key.

        Args:
            key (str): The key to retrieve.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.

        Returns:
            Record: The record held for the key.
        """

        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Drop every record.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.
        """

        raise NotImplementedError

    @abstractmethod
    def items(self) -> Iterator[tuple[str, Record]]:
        """Iterate over (key, record) pairs in insertion order.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.

        Returns:
            Iterator[tuple[str, Record]]: The held pairs.
        """

        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError
