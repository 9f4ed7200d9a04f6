from .flat import FlatFileStorage, FlatStorageError, KeyNotFoundError
from .layout import (
    CorruptDirectoryError,
    DirectoryRow,
    FlatFileHeader,
    InvalidKeyError,
    KeyConstraintError,
    KeyTooLongError,
    ValueRegionOverflowError,
    encode_key,
    pack_image,
    unpack_image,
    value_region_start,
)

__all__ = [
    "CorruptDirectoryError",
    "DirectoryRow",
    "FlatFileHeader",
    "FlatFileStorage",
    "FlatStorageError",
    "InvalidKeyError",
    "KeyConstraintError",
    "KeyNotFoundError",
    "KeyTooLongError",
    "ValueRegionOverflowError",
    "encode_key",
    "pack_image",
    "unpack_image",
    "value_region_start",
]
