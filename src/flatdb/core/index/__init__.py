from .in_memory import (
    InMemoryIndex,
    InMemoryIndexError,
    InMemoryIndexKeyNotFoundError,
)

__all__ = [
    "InMemoryIndex",
    "InMemoryIndexError",
    "InMemoryIndexKeyNotFoundError",
]
