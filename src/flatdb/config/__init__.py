from . import constants
from .exceptions import CodecError, FileError, FlatDBError, IndexingError, StorageError
from .settings import DEFAULT_SETTINGS, LoadPolicy, Settings

__all__ = [
    "CodecError",
    "DEFAULT_SETTINGS",
    "FileError",
    "FlatDBError",
    "IndexingError",
    "LoadPolicy",
    "Settings",
    "StorageError",
    "constants",
]
