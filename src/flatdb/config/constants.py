from typing import Final

HEADER_SIZE: Final[int] = 4
"""Size of the big-endian entry count that opens every file."""

KEY_FIELD_SIZE: Final[int] = 50
"""Width of the NUL-padded key field, and the longest key accepted."""

DIRECTORY_ROW_SIZE: Final[int] = 59
"""Key field (50) + type tag (1) + value offset (4) + value size (4)."""

MAX_UINT32: Final[int] = 2**32 - 1

TEMP_SUFFIX: Final[str] = ".tmp"
