"""FlatDB - embedded typed key-value store persisted as one flat binary file."""

__version__ = "0.1.0"

from .config import FlatDBError, LoadPolicy, Settings
from .core.codec import (
    CorruptValueError,
    Float32,
    Float64,
    Int32,
    Int64,
    String,
    UnknownTypeTagError,
    UnsupportedTypeError,
    Value,
    ValueOutOfRangeError,
    ValueType,
)
from .core.file import FileReadError, FileWriteError, InMemoryFile, MonolithicFile
from .core.storage import (
    CorruptDirectoryError,
    FlatFileStorage,
    InvalidKeyError,
    KeyNotFoundError,
    KeyTooLongError,
)

# Left out of __all__ so star imports keep the builtin.
open = FlatFileStorage.open  # pylint: disable=W0622

__all__ = [
    "CorruptDirectoryError",
    "CorruptValueError",
    "FileReadError",
    "FileWriteError",
    "FlatDBError",
    "FlatFileStorage",
    "Float32",
    "Float64",
    "InMemoryFile",
    "Int32",
    "Int64",
    "InvalidKeyError",
    "KeyNotFoundError",
    "KeyTooLongError",
    "LoadPolicy",
    "MonolithicFile",
    "Settings",
    "String",
    "UnknownTypeTagError",
    "UnsupportedTypeError",
    "Value",
    "ValueOutOfRangeError",
    "ValueType",
]
