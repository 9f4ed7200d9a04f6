from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Self

from flatdb.core import codec


@dataclass(frozen=True)
class Record:
    """One key's entry: type tag, value-region offset, size and encoded payload.

    ``size`` is the single source of truth for the payload length. ``offset``
    only has meaning right after a load or a sync; a freshly set record
    carries 0 until the next sync places it.

    A permissive load can register a row whose tag is unknown or whose size
    does not match its fixed-width type. Its payload is kept as opaque bytes
    that ``decode`` refuses and a save writes back unchanged.
    """

    value_type: codec.ValueType | int
    offset: int
    size: int
    raw_value: bytes

    @classmethod
    def from_value(cls, value: codec.Value, /) -> Self:
        """Build an unplaced record from a value.

        Args:
            value (codec.Value): The value to encode.

        Raises:
            codec.UnsupportedTypeError: If value is not one of the storable kinds.

        Returns:
            Self: A record with offset 0 holding the encoded payload.
        """

        encoded = codec.encode(value)

        return cls(value_type=encoded.value_type, offset=0, size=encoded.size, raw_value=encoded.data)

    @property
    def is_intact(self) -> bool:
        """Whether the tag is known and the payload has the width the tag requires."""

        if not isinstance(self.value_type, codec.ValueType):
            return False

        width = self.value_type.width

        return width is None or width == self.size

    def decode(self) -> codec.Value:
        """Decode the payload into its value variant.

        Raises:
            codec.UnknownTypeTagError: If the tag is not one of the five kinds.
            codec.CorruptValueError: If the payload has the wrong width for its type.

        Returns:
            codec.Value: The stored value.
        """

        return codec.decode(self.value_type, self.raw_value)

    def placed_at(self, offset: int, /) -> Self:
        return replace(self, offset=offset)
