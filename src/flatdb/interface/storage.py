from abc import ABC, abstractmethod

from flatdb.core.codec import Value


class StorageEngine(ABC):
    """Abstract base class for storage engine implementations."""

    @abstractmethod
    def set(self, key: str, value: Value, /) -> None:
        """Store a typed value under a key.

        Args:
            key (str): The key to store.
            value (Value): The value to store.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.
        """

        raise NotImplementedError

    @abstractmethod
    def get(self, key: str, /) -> int | float | str:
        """Retrieve the value for a key from the storage engine.

        Args:
            key (str): The key to retrieve.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.

        Returns:
            int | float | str: The plain Python value associated with the key.
        """

        raise NotImplementedError

    @abstractmethod
    def sync(self) -> None:
        """Persist the whole in-memory state to the backing storage.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.
        """

        raise NotImplementedError
