from dataclasses import dataclass
from enum import Enum


class LoadPolicy(Enum):
    """How a load reacts to a fixed-width row whose size does not match its type."""

    PERMISSIVE = "permissive"
    """Register the key without a value; reading it later raises CorruptValueError."""

    STRICT = "strict"
    """Reject the whole file with CorruptDirectoryError."""


@dataclass(frozen=True)
class Settings:
    """Tunables for a FlatFileStorage instance.

    Attributes:
        load_policy (LoadPolicy): Handling of size-mismatched fixed-width rows.
        sort_keys (bool): Emit directory rows sorted by key bytes instead of insertion order.
        fsync (bool): Force the temporary file to disk before it replaces the target.
    """

    load_policy: LoadPolicy = LoadPolicy.PERMISSIVE
    sort_keys: bool = False
    fsync: bool = True


DEFAULT_SETTINGS = Settings()
