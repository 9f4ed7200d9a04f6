class FlatDBError(Exception):
    """Base exception for all FlatDB errors."""


class CodecError(FlatDBError):
    """Exception raised for value encoding and decoding errors in FlatDB."""


class FileError(FlatDBError):
    """Exception raised for file-related errors in FlatDB."""


class IndexingError(FlatDBError):
    """Exception raised for index-related errors in FlatDB."""


class StorageError(FlatDBError):
    """Exception raised for storage-related errors in FlatDB."""
