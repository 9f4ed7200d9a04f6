from .errors import FileReadError, FileWriteError
from .memory import InMemoryFile
from .monolith import MonolithicFile

__all__ = [
    "FileReadError",
    "FileWriteError",
    "InMemoryFile",
    "MonolithicFile",
]
