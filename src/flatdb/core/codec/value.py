from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from struct import Struct
from struct import error as StructError
from typing import ClassVar, Self, TypeAlias

from flatdb import config
from flatdb.config.constants import MAX_UINT32


class ValueType(IntEnum):
    """Type tags as stored in the directory row."""

    INT32 = 0
    INT64 = 1
    STRING = 2
    FLOAT32 = 3
    FLOAT64 = 4

    @property
    def width(self) -> int | None:
        """Canonical encoded width in bytes, or None for variable-length types.

        Returns:
            int | None: 4 or 8 for numeric types, None for STRING.
        """

        return _WIDTHS[self]


_WIDTHS: dict[ValueType, int | None] = {
    ValueType.INT32: 4,
    ValueType.INT64: 8,
    ValueType.STRING: None,
    ValueType.FLOAT32: 4,
    ValueType.FLOAT64: 8,
}


class UnsupportedTypeError(config.CodecError):
    """Raised when a value is not one of the five storable kinds."""

    def __init__(self, *, value: object, message: str | None = None):
        self.value = value

        super().__init__(message or f"Unsupported value type: {type(value).__name__}")


class UnknownTypeTagError(UnsupportedTypeError):
    """Raised when a stored type tag does not name any of the five kinds."""

    def __init__(self, *, tag: int):
        self.tag = tag

        super().__init__(value=tag, message=f"Unknown type tag: {tag}")


class ValueOutOfRangeError(config.CodecError):
    """Raised when a value cannot be represented by its declared type."""

    def __init__(self, *, value_type: ValueType, value: object):
        self.value_type = value_type
        self.value = value

        super().__init__(f"Value {value!r} is not representable as {value_type.name}")


class CorruptValueError(config.CodecError):
    """Raised when encoded bytes do not have the width their type requires."""

    def __init__(self, *, value_type: ValueType, expected: int, actual: int):
        self.value_type = value_type
        self.expected = expected
        self.actual = actual

        super().__init__(f"{value_type.name} value must be {expected} bytes, got {actual}")


def _check_integer(value: object, value_type: ValueType, lower: int, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnsupportedTypeError(value=value)

    if not lower <= value <= upper:
        raise ValueOutOfRangeError(value_type=value_type, value=value)

    return value


def _check_real(value: object, value_type: ValueType) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnsupportedTypeError(value=value)

    try:
        return float(value)
    except OverflowError as e:
        raise ValueOutOfRangeError(value_type=value_type, value=value) from e


@dataclass(frozen=True)
class Int32:
    """Signed 32-bit integer, stored big-endian two's complement."""

    TYPE: ClassVar[ValueType] = ValueType.INT32
    STRUCT: ClassVar[Struct] = Struct("!i")

    value: int

    def __post_init__(self) -> None:
        _check_integer(self.value, self.TYPE, -(2**31), 2**31 - 1)

    def to_bytes(self) -> bytes:
        return self.STRUCT.pack(self.value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls(cls.STRUCT.unpack(data)[0])


@dataclass(frozen=True)
class Int64:
    """Signed 64-bit integer, stored big-endian two's complement."""

    TYPE: ClassVar[ValueType] = ValueType.INT64
    STRUCT: ClassVar[Struct] = Struct("!q")

    value: int

    def __post_init__(self) -> None:
        _check_integer(self.value, self.TYPE, -(2**63), 2**63 - 1)

    def to_bytes(self) -> bytes:
        return self.STRUCT.pack(self.value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls(cls.STRUCT.unpack(data)[0])


@dataclass(frozen=True)
class Float32:
    """IEEE-754 single precision float, stored big-endian.

    The held value is rounded to the nearest single precision number on
    construction, so what is read back after a save is exactly what the
    instance holds.

    Widening to a Python float quiets signalling NaNs, so an instance built
    by ``from_bytes`` keeps the bytes it was decoded from in ``raw`` and
    encodes them unchanged.
    """

    TYPE: ClassVar[ValueType] = ValueType.FLOAT32
    STRUCT: ClassVar[Struct] = Struct("!f")

    value: float
    raw: bytes | None = field(default=None, repr=False, compare=False, kw_only=True)

    def __post_init__(self) -> None:
        value = _check_real(self.value, self.TYPE)

        try:
            rounded = self.STRUCT.unpack(self.STRUCT.pack(value))[0]
        except (OverflowError, StructError) as e:
            raise ValueOutOfRangeError(value_type=self.TYPE, value=value) from e

        object.__setattr__(self, "value", rounded)

    def to_bytes(self) -> bytes:
        if self.raw is not None:
            return self.raw

        return self.STRUCT.pack(self.value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        data = bytes(data)

        return cls(cls.STRUCT.unpack(data)[0], raw=data)

    def __eq__(self, other: object) -> bool:
        # Bit pattern equality, so NaN payloads and signed zeros compare as stored.
        if not isinstance(other, Float32):
            return NotImplemented

        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash((self.TYPE, self.to_bytes()))


@dataclass(frozen=True)
class Float64:
    """IEEE-754 double precision float, stored big-endian."""

    TYPE: ClassVar[ValueType] = ValueType.FLOAT64
    STRUCT: ClassVar[Struct] = Struct("!d")

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _check_real(self.value, self.TYPE))

    def to_bytes(self) -> bytes:
        return self.STRUCT.pack(self.value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls(cls.STRUCT.unpack(data)[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Float64):
            return NotImplemented

        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash((self.TYPE, self.to_bytes()))


@dataclass(frozen=True)
class String:
    """Variable-length text, stored as its UTF-8 bytes without a terminator.

    Arbitrary byte payloads are carried through ``surrogateescape`` so that
    bytes which are not valid UTF-8 survive a load/save cycle unchanged.
    """

    TYPE: ClassVar[ValueType] = ValueType.STRING
    ENCODING: ClassVar[str] = "utf-8"
    ERRORS: ClassVar[str] = "surrogateescape"

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise UnsupportedTypeError(value=self.value)

        try:
            size = len(self.to_bytes())
        except UnicodeEncodeError as e:
            raise ValueOutOfRangeError(value_type=self.TYPE, value=self.value) from e

        if size > MAX_UINT32:
            raise ValueOutOfRangeError(value_type=self.TYPE, value=f"<{size} bytes>")

    def to_bytes(self) -> bytes:
        return self.value.encode(self.ENCODING, self.ERRORS)

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls(bytes(data).decode(cls.ENCODING, cls.ERRORS))


Value: TypeAlias = Int32 | Int64 | Float32 | Float64 | String

VARIANTS: dict[ValueType, type[Value]] = {
    ValueType.INT32: Int32,
    ValueType.INT64: Int64,
    ValueType.STRING: String,
    ValueType.FLOAT32: Float32,
    ValueType.FLOAT64: Float64,
}


@dataclass(frozen=True)
class EncodedValue:
    """A value in its on-disk form: type tag, byte count and payload."""

    value_type: ValueType
    size: int
    data: bytes


def encode(value: Value) -> EncodedValue:
    """Encode a value into its canonical byte form.

    Args:
        value (Value): One of Int32, Int64, Float32, Float64 or String.

    Raises:
        UnsupportedTypeError: If value is any other object, including plain ints and floats.

    Returns:
        EncodedValue: The type tag, the payload size and the payload bytes.
    """

    if type(value) not in (Int32, Int64, Float32, Float64, String):
        raise UnsupportedTypeError(value=value)

    data = value.to_bytes()

    return EncodedValue(value_type=value.TYPE, size=len(data), data=data)


def decode(value_type: ValueType | int, data: bytes) -> Value:
    """Decode a payload according to its type tag.

    Args:
        value_type (ValueType | int): The tag read from the directory.
        data (bytes): The payload.

    Raises:
        UnknownTypeTagError: If the tag is not one of the five kinds.
        CorruptValueError: If a numeric payload has the wrong width.

    Returns:
        Value: The decoded variant.
    """

    try:
        value_type = ValueType(value_type)
    except ValueError as e:
        raise UnknownTypeTagError(tag=value_type) from e

    expected = value_type.width

    if expected is not None and len(data) != expected:
        raise CorruptValueError(value_type=value_type, expected=expected, actual=len(data))

    return VARIANTS[value_type].from_bytes(data)

