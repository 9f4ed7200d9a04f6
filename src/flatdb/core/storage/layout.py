"""On-disk layout of a flat store file.

All integers are big-endian::

    [entry_count:4]
    [key:50][type:1][offset:4][size:4]   x entry_count   (directory rows)
    [value bytes ...]                                     (value region)

Keys are NUL-padded to 50 bytes. A row's offset is relative to the start of
the value region, which begins right after the last directory row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from struct import Struct
from typing import Iterable, Self

from flatdb import config
from flatdb.config.constants import DIRECTORY_ROW_SIZE, HEADER_SIZE, KEY_FIELD_SIZE, MAX_UINT32
from flatdb.core import codec
from flatdb.core.record import Record

logger = logging.getLogger(__name__)

TYPE_TAGS = frozenset(codec.ValueType)


class KeyConstraintError(config.StorageError):
    """Base exception for keys that cannot be stored in a directory row."""


class InvalidKeyError(KeyConstraintError):
    """Raised when a key is empty, not text, or contains NUL bytes."""

    def __init__(self, *, key: object, reason: str):
        self.key = key
        self.reason = reason

        super().__init__(f"Invalid key {key!r}: {reason}")


class KeyTooLongError(KeyConstraintError):
    """Raised when a key encodes to more bytes than the key field holds."""

    def __init__(self, *, key: str, size: int):
        self.key = key
        self.size = size

        super().__init__(f"Key {key!r} is {size} bytes long, the limit is {KEY_FIELD_SIZE}")


class CorruptDirectoryError(config.StorageError):
    """Raised when a file's header or directory cannot be trusted."""

    def __init__(self, *, offset: int, cause: str | Exception | None = None):
        self.offset = offset
        self.cause = cause

        message = f"Directory corrupted at offset {offset}"

        if cause:
            message += f": {cause}"

        super().__init__(message)


class ValueRegionOverflowError(config.StorageError):
    """Raised when the values no longer fit the 32-bit offsets of the directory."""

    def __init__(self, *, size: int):
        self.size = size

        super().__init__(f"Value region of {size} bytes exceeds the {MAX_UINT32} byte limit")


def encode_key(key: object, /) -> bytes:
    """Validate a key and return the bytes stored in its key field.

    Args:
        key (object): The candidate key.

    Raises:
        InvalidKeyError: If the key is not a str, is empty or contains NUL.
        KeyTooLongError: If the UTF-8 encoding is longer than 50 bytes.

    Returns:
        bytes: The UTF-8 encoded key, unpadded.
    """

    if not isinstance(key, str):
        raise InvalidKeyError(key=key, reason="keys must be str")

    if not key:
        raise InvalidKeyError(key=key, reason="keys cannot be empty")

    # NUL is the padding byte of the key field and would not survive a load.
    if "\x00" in key:
        raise InvalidKeyError(key=key, reason="keys cannot contain NUL")

    try:
        data = key.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidKeyError(key=key, reason=str(e)) from e

    if len(data) > KEY_FIELD_SIZE:
        raise KeyTooLongError(key=key, size=len(data))

    return data


@dataclass(frozen=True)
class FlatFileHeader:
    """The entry count that opens every non-empty file."""

    STRUCT = Struct("!I")

    entry_count: int

    def to_bytes(self) -> bytes:
        return self.STRUCT.pack(self.entry_count)

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        (entry_count,) = cls.STRUCT.unpack(data)

        return cls(entry_count=entry_count)


@dataclass(frozen=True)
class DirectoryRow:
    """One fixed-width directory row.

    Contains the key and the type, offset and size of its value.
    """

    STRUCT = Struct(f"!{KEY_FIELD_SIZE}sBII")

    key: str
    value_type: codec.ValueType | int
    offset: int
    size: int

    def to_bytes(self) -> bytes:
        """Serialize the row to bytes.

        Raises:
            InvalidKeyError: If the key is not storable.
            KeyTooLongError: If the key is longer than the key field.

        Returns:
            bytes: Exactly 59 bytes, the key NUL-padded to 50.
        """

        return self.STRUCT.pack(encode_key(self.key), int(self.value_type), self.offset, self.size)

    @classmethod
    def from_bytes(cls, data: bytes, *, position: int = 0) -> Self:
        """Deserialize a row.

        Args:
            data (bytes): Exactly 59 bytes.
            position (int, optional): File offset of the row, for error reports. Defaults to 0.

        A type tag outside the five kinds is kept as a plain int.

        Raises:
            CorruptDirectoryError: If the key is empty or not UTF-8.

        Returns:
            Self: The deserialized DirectoryRow.
        """

        key_field, type_tag, offset, size = cls.STRUCT.unpack(data)

        key_bytes = key_field.rstrip(b"\x00")

        if not key_bytes:
            raise CorruptDirectoryError(offset=position, cause="Empty key.")

        try:
            key = key_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptDirectoryError(offset=position, cause=e) from e

        value_type = codec.ValueType(type_tag) if type_tag in TYPE_TAGS else type_tag

        return cls(key=key, value_type=value_type, offset=offset, size=size)


def value_region_start(entry_count: int) -> int:
    """Absolute file offset where the value region begins for a given entry count."""

    return HEADER_SIZE + entry_count * DIRECTORY_ROW_SIZE


def pack_image(entries: Iterable[tuple[str, Record]]) -> tuple[bytes, list[tuple[str, Record]]]:
    """Serialize records into a complete file image.

    Offsets are assigned in iteration order with a running accumulator that
    starts at 0 and advances by each record's size. Records a permissive load
    could not decode are written back with their original tag and payload.

    Args:
        entries (Iterable[tuple[str, Record]]): The (key, record) pairs to write, in file order.

    Raises:
        InvalidKeyError: If a key is not storable.
        KeyTooLongError: If a key is longer than the key field.
        ValueRegionOverflowError: If an offset would not fit 32 bits.

    Returns:
        tuple[bytes, list[tuple[str, Record]]]: The image, and the records carrying the offsets they were written at.
    """

    rows = bytearray()
    values = bytearray()
    placed: list[tuple[str, Record]] = []

    next_offset = 0

    for key, record in entries:
        if next_offset + record.size > MAX_UINT32:
            raise ValueRegionOverflowError(size=next_offset + record.size)

        if not record.is_intact:
            logger.debug("Writing back undecodable value for key %r unchanged", key)

        row = DirectoryRow(key=key, value_type=record.value_type, offset=next_offset, size=record.size)

        rows += row.to_bytes()
        values += record.raw_value

        placed.append((key, record.placed_at(next_offset)))
        next_offset += record.size

    header = FlatFileHeader(entry_count=len(placed))

    return header.to_bytes() + bytes(rows) + bytes(values), placed


def _undecodable_cause(row: DirectoryRow) -> str | None:
    if not isinstance(row.value_type, codec.ValueType):
        return f"Unknown type tag {row.value_type} for key {row.key!r}."

    width = row.value_type.width

    if width is not None and row.size != width:
        return f"{row.value_type.name} value for key {row.key!r} has size {row.size}, expected {width}."

    return None


def unpack_image(data: bytes, policy: config.LoadPolicy = config.LoadPolicy.PERMISSIVE) -> list[tuple[str, Record]]:
    """Parse a complete file image into records.

    An empty image is an empty store. A row with an unknown type tag, or a
    fixed-width row whose size does not match its type, is handled by
    ``policy``: PERMISSIVE registers the key with its payload kept as opaque
    bytes, STRICT rejects the image.

    Args:
        data (bytes): The whole file content.
        policy (config.LoadPolicy, optional): Handling of undecodable rows. Defaults to PERMISSIVE.

    Raises:
        CorruptDirectoryError: If the image is truncated, a row is malformed, or STRICT rejects a row.

    Returns:
        list[tuple[str, Record]]: The (key, record) pairs in directory order.
    """

    if not data:
        return []

    if len(data) < HEADER_SIZE:
        raise CorruptDirectoryError(offset=0, cause="Truncated entry count header.")

    header = FlatFileHeader.from_bytes(data[:HEADER_SIZE])
    ref_start = value_region_start(header.entry_count)

    if ref_start > len(data):
        raise CorruptDirectoryError(
            offset=HEADER_SIZE,
            cause=f"Directory of {header.entry_count} rows needs {ref_start} bytes, file has {len(data)}.",
        )

    entries: list[tuple[str, Record]] = []

    for position in range(HEADER_SIZE, ref_start, DIRECTORY_ROW_SIZE):
        row = DirectoryRow.from_bytes(data[position : position + DIRECTORY_ROW_SIZE], position=position)

        start = ref_start + row.offset
        end = start + row.size

        if end > len(data):
            raise CorruptDirectoryError(
                offset=position,
                cause=f"Value for key {row.key!r} spans bytes {start}..{end}, file has {len(data)}.",
            )

        cause = _undecodable_cause(row)

        if cause is not None:
            if policy is config.LoadPolicy.STRICT:
                raise CorruptDirectoryError(offset=position, cause=cause)

            logger.warning("Keeping undecodable value at offset %d: %s", position, cause)

        entries.append((row.key, Record(row.value_type, row.offset, row.size, data[start:end])))

    return entries
