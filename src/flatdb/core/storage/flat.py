from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Self

from flatdb import config, interface
from flatdb.core import codec
from flatdb.core.file import MonolithicFile
from flatdb.core.index import InMemoryIndex
from flatdb.core.record import Record

from .layout import encode_key, pack_image, unpack_image

logger = logging.getLogger(__name__)


class FlatStorageError(config.StorageError):
    """Base exception for flat file storage errors."""


class KeyNotFoundError(FlatStorageError):
    """Raised when a key is not present in the store."""

    def __init__(self, *, key: str):
        self.key = key

        super().__init__(f"Key not found: {key!r}")


class FlatFileStorage(interface.StorageEngine):
    """Key-value store held in memory and persisted as one flat binary file.

    The file is read wholesale when the storage is created and rewritten
    wholesale by ``sync``. ``set`` and ``get`` never touch the file.

    Instances are not thread-safe. Concurrent users must serialise every
    call, including ``get``, behind one lock of their own.
    """

    def __init__(
        self,
        file: interface.File,
        index: interface.Index | None = None,
        settings: config.Settings | None = None,
    ) -> None:
        """Open the store, creating empty backing storage if it does not exist.

        Args:
            file (interface.File): The backing storage.
            index (interface.Index | None, optional): The key to record mapping. Defaults to a new InMemoryIndex.
            settings (config.Settings | None, optional): Load and save behaviour. Defaults to config.DEFAULT_SETTINGS.

        Raises:
            FileReadError: If the backing storage cannot be read.
            FileWriteError: If missing backing storage cannot be created.
            CorruptDirectoryError: If the stored image is malformed.
        """

        self._file = file
        self._index = index if index is not None else InMemoryIndex()
        self._settings = settings if settings is not None else config.DEFAULT_SETTINGS

        if not self._file.exists():
            logger.info("Creating empty store at %s", self._file.path)
            self._file.create()

        self._load()

    @classmethod
    def open(cls, path: Path | str, *, settings: config.Settings | None = None) -> Self:
        """Open a store file on disk.

        Args:
            path (Path | str): Location of the store file.
            settings (config.Settings | None, optional): Load and save behaviour. Defaults to config.DEFAULT_SETTINGS.

        Returns:
            Self: The opened storage.
        """

        settings = settings if settings is not None else config.DEFAULT_SETTINGS

        return cls(MonolithicFile(path, fsync=settings.fsync), settings=settings)

    @property
    def file(self) -> interface.File:
        return self._file

    @property
    def settings(self) -> config.Settings:
        return self._settings

    @property
    def entry_count(self) -> int:
        """Number of keys currently held, which is what the next sync writes as the header."""

        return len(self._index)

    def get(self, key: str, /) -> int | float | str:
        """Retrieve the plain value for a key.

        Args:
            key (str): The key to retrieve.

        Raises:
            KeyNotFoundError: If the key is not present.
            UnknownTypeTagError: If the key was loaded from a row with an unknown type tag.
            CorruptValueError: If the key was loaded from a size-mismatched row.

        Returns:
            int | float | str: The stored value.
        """

        return self.get_value(key).value

    def get_value(self, key: str, /) -> codec.Value:
        """Retrieve the typed value for a key.

        Args:
            key (str): The key to retrieve.

        Raises:
            KeyNotFoundError: If the key is not present.
            UnknownTypeTagError: If the key was loaded from a row with an unknown type tag.
            CorruptValueError: If the key was loaded from a size-mismatched row.

        Returns:
            codec.Value: The stored value variant.
        """

        return self.get_record(key).decode()

    def get_record(self, key: str, /) -> Record:
        """Retrieve the raw record for a key, without decoding it.

        Raises:
            KeyNotFoundError: If the key is not present.
        """

        if not self._index.has(key):
            raise KeyNotFoundError(key=key)

        try:
            return self._index.get(key)
        except config.IndexingError:
            raise KeyNotFoundError(key=key) from None

    def set(self, key: str, value: codec.Value, /) -> None:
        """Insert or replace the value for a key in memory.

        The record is replaced as a whole. Nothing is written until ``sync``.

        Args:
            key (str): The key to set.
            value (codec.Value): One of Int32, Int64, Float32, Float64 or String.

        Raises:
            InvalidKeyError: If the key is empty, not text or contains NUL.
            KeyTooLongError: If the key is longer than 50 bytes.
            UnsupportedTypeError: If value is not a storable variant.
        """

        encode_key(key)

        self._index.set(key, Record.from_value(value))

    def has(self, key: str, /) -> bool:
        return self._index.has(key)

    def keys(self) -> Iterator[str]:
        for key, _ in self._index.items():
            yield key

    def dump(self) -> bytes:
        """Build the exact file image ``sync`` would write, without writing it.

        Raises:
            InvalidKeyError: If a key is not storable.
            KeyTooLongError: If a key is longer than 50 bytes.

        Returns:
            bytes: Header, directory rows and value region.
        """

        data, _ = pack_image(self._entries())

        return data

    def sync(self) -> None:
        """Rewrite the backing storage with the full in-memory state.

        The image is built completely in memory before the single write, so a
        key or value error leaves the backing storage untouched.

        Raises:
            InvalidKeyError: If a key is not storable.
            KeyTooLongError: If a key is longer than 50 bytes.
            ValueRegionOverflowError: If the values exceed 32-bit offsets.
            FileWriteError: If the backing storage cannot be written.
        """

        data, placed = pack_image(self._entries())

        self._file.write_all(data)

        for key, record in placed:
            self._index.set(key, record)

        logger.debug("Synced %d entries (%d bytes) to %s", len(placed), len(data), self._file.path)

    def reload(self) -> None:
        """Discard the in-memory state and load the backing storage again.

        Raises:
            FileReadError: If the backing storage cannot be read.
            CorruptDirectoryError: If the stored image is malformed.
        """

        self._index.clear()
        self._load()

    def _load(self) -> None:
        """Populate the index from the backing storage."""

        data = self._file.read_all()

        for key, record in unpack_image(data, self._settings.load_policy):
            self._index.set(key, record)

        logger.debug("Loaded %d entries (%d bytes) from %s", len(self._index), len(data), self._file.path)

    def _entries(self) -> list[tuple[str, Record]]:
        entries = list(self._index.items())

        if self._settings.sort_keys:
            entries.sort(key=lambda item: encode_key(item[0]))

        return entries

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._index.has(key)

    def __len__(self) -> int:
        return len(self._index)
