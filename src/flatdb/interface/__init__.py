from .file import File
from .index import Index
from .storage import StorageEngine

__all__ = [
    "File",
    "Index",
    "StorageEngine",
]
