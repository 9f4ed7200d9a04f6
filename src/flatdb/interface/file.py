from abc import ABC, abstractmethod
from pathlib import Path


class File(ABC):
    """Abstract base class for whole-file byte storage.

    A store is read and written wholesale, so implementations only need to
    hand back every byte at once and replace every byte at once.
    """

    @property
    @abstractmethod
    def path(self) -> Path:
        """Identifier of the backing storage.

        Raises:
            NotImplementedError: This property must be implemented by subclasses.

        Returns:
            Path: The location of the backing storage.
        """

        raise NotImplementedError

    @abstractmethod
    def exists(self) -> bool:
        """Check whether the backing storage exists.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.

        Returns:
            bool: True if the storage exists, False otherwise.
        """

        raise NotImplementedError

    @abstractmethod
    def create(self) -> None:
        """Create the backing storage empty if it is absent. Existing content is left untouched.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.
        """

        raise NotImplementedError

    @abstractmethod
    def read_all(self) -> bytes:
        """Read the full content of the backing storage.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.

        Returns:
            bytes: Every byte currently stored.
        """

        raise NotImplementedError

    @abstractmethod
    def write_all(self, data: bytes) -> int:
        """Replace the full content of the backing storage.

        Args:
            data (bytes): The new content.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.

        Returns:
            int: The number of bytes written.
        """

        raise NotImplementedError
