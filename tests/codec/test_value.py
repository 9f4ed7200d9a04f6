"""
Tests for flatdb.core.codec

This module contains tests for the value codec, which converts the five
storable value kinds to and from their big-endian byte encodings.

The test suite covers:
- Exact byte encodings for each kind
- Bit-exact decode of what was encoded, including negative integers and special floats
- Rejection of unsupported Python types and unrepresentable values
- Width checks when decoding fixed-width payloads
"""

import math
import struct

import pytest

from flatdb.core import codec
from flatdb.core.codec import Float32, Float64, Int32, Int64, String, ValueType

ENCODING_SCENARIOS = [
    # fmt: off

    # Negative integers are two's complement, most significant byte first.
    pytest.param(
        Int32(-5), ValueType.INT32, b"\xff\xff\xff\xfb",
        id="int32-negative",
    ),

    pytest.param(
        Int32(2**31 - 1), ValueType.INT32, b"\x7f\xff\xff\xff",
        id="int32-max",
    ),

    pytest.param(
        Int64(1), ValueType.INT64, b"\x00\x00\x00\x00\x00\x00\x00\x01",
        id="int64-one",
    ),

    pytest.param(
        Int64(-(2**63)), ValueType.INT64, b"\x80\x00\x00\x00\x00\x00\x00\x00",
        id="int64-min",
    ),

    # IEEE-754 single precision bit pattern of 1.0.
    pytest.param(
        Float32(1.0), ValueType.FLOAT32, b"\x3f\x80\x00\x00",
        id="float32-one",
    ),

    pytest.param(
        Float64(-2.0), ValueType.FLOAT64, b"\xc0\x00\x00\x00\x00\x00\x00\x00",
        id="float64-minus-two",
    ),

    # Strings are copied as UTF-8 with no terminator or length prefix.
    pytest.param(
        String("hi"), ValueType.STRING, b"hi",
        id="string-ascii",
    ),

    pytest.param(
        String("ação"), ValueType.STRING, "ação".encode("utf-8"),
        id="string-multibyte",
    ),

    pytest.param(
        String(""), ValueType.STRING, b"",
        id="string-empty",
    ),
]

ROUND_TRIP_SCENARIOS = [
    # fmt: off

    pytest.param(Int32(0), id="int32-zero"),
    pytest.param(Int32(-(2**31)), id="int32-min"),
    pytest.param(Int64(2**63 - 1), id="int64-max"),
    pytest.param(Int64(-666), id="int64-negative"),

    # Not exactly representable in single precision, stored as the nearest float32.
    pytest.param(Float32(42.42), id="float32-inexact-decimal"),

    pytest.param(Float32(-0.0), id="float32-negative-zero"),
    pytest.param(Float32(math.inf), id="float32-infinity"),
    pytest.param(Float64(666.666), id="float64-decimal"),
    pytest.param(Float64(5e-324), id="float64-smallest-subnormal"),
    # Signalling NaN payloads keep their quiet bit clear.
    pytest.param(Float32.from_bytes(b"\x7f\x80\x00\x01"), id="float32-signalling-nan"),

    pytest.param(Float64(math.nan), id="float64-nan"),
    pytest.param(String("Jesse"), id="string-name"),

    # Bytes that are not valid UTF-8 survive through surrogateescape.
    pytest.param(String.from_bytes(b"\xde\xad\xbe\xef"), id="string-raw-bytes"),
]


@pytest.mark.parametrize("value, value_type, expected", ENCODING_SCENARIOS)
def test_encode_produces_big_endian_bytes(value: codec.Value, value_type: ValueType, expected: bytes) -> None:
    """
    Test the exact encoding of each value kind.

    Given: A value of one of the five kinds
    When: The value is encoded
    Then: The tag, size and bytes match the on-disk format
    """

    # ACT
    encoded = codec.encode(value)

    # ASSERT
    assert encoded.value_type is value_type
    assert encoded.size == len(expected)
    assert encoded.data == expected


@pytest.mark.parametrize("value", ROUND_TRIP_SCENARIOS)
def test_decode_restores_encoded_value_exactly(value: codec.Value) -> None:
    """
    Test that decoding reverses encoding bit for bit.

    Given: An encoded value
    When: The payload is decoded with its tag
    Then: The decoded value has the same bit pattern as the original
    """

    # ARRANGE
    encoded = codec.encode(value)

    # ACT
    decoded = codec.decode(encoded.value_type, encoded.data)

    # ASSERT
    assert type(decoded) is type(value)
    assert decoded == value
    assert decoded.to_bytes() == encoded.data


@pytest.mark.parametrize(
    "value_type, width",
    [
        pytest.param(ValueType.INT32, 4, id="int32"),
        pytest.param(ValueType.INT64, 8, id="int64"),
        pytest.param(ValueType.STRING, None, id="string"),
        pytest.param(ValueType.FLOAT32, 4, id="float32"),
        pytest.param(ValueType.FLOAT64, 8, id="float64"),
    ],
)
def test_value_type_width(value_type: ValueType, width: int | None) -> None:
    assert value_type.width == width


def test_value_type_tags_match_file_format() -> None:
    assert [t.value for t in ValueType] == [0, 1, 2, 3, 4]
    assert [t.name for t in ValueType] == ["INT32", "INT64", "STRING", "FLOAT32", "FLOAT64"]


@pytest.mark.parametrize(
    "value",
    [
        pytest.param(5, id="plain-int"),
        pytest.param(1.5, id="plain-float"),
        pytest.param("text", id="plain-str"),
        pytest.param(b"bytes", id="plain-bytes"),
        pytest.param(None, id="none"),
        pytest.param(True, id="bool"),
        pytest.param([1, 2], id="list"),
    ],
)
def test_encode_rejects_unsupported_types(value: object) -> None:
    """
    Test that only the five value variants can be encoded.

    Given: A plain Python object that is not a value variant
    When: It is passed to encode
    Then: UnsupportedTypeError is raised carrying the object
    """

    # ACT & ASSERT
    with pytest.raises(codec.UnsupportedTypeError) as exc_info:
        codec.encode(value)  # type: ignore[arg-type]

    assert exc_info.value.value is value


@pytest.mark.parametrize(
    "factory, value",
    [
        pytest.param(Int32, True, id="int32-from-bool"),
        pytest.param(Int32, "1", id="int32-from-str"),
        pytest.param(Int64, 1.0, id="int64-from-float"),
        pytest.param(Float32, "1.0", id="float32-from-str"),
        pytest.param(Float64, None, id="float64-from-none"),
        pytest.param(String, b"hi", id="string-from-bytes"),
    ],
)
def test_variants_reject_wrong_python_types(factory: type, value: object) -> None:
    with pytest.raises(codec.UnsupportedTypeError):
        factory(value)


@pytest.mark.parametrize(
    "factory, value",
    [
        pytest.param(Int32, 2**31, id="int32-above-max"),
        pytest.param(Int32, -(2**31) - 1, id="int32-below-min"),
        pytest.param(Int64, 2**63, id="int64-above-max"),
        pytest.param(Int64, -(2**63) - 1, id="int64-below-min"),
        pytest.param(Float32, 1e40, id="float32-overflow"),
        pytest.param(Float32, 10**400, id="float32-from-huge-int"),
        pytest.param(Float64, 10**400, id="float64-from-huge-int"),
        pytest.param(Float64, -(10**400), id="float64-from-huge-negative-int"),
        pytest.param(String, "\ud800", id="string-lone-surrogate"),
    ],
)
def test_variants_reject_unrepresentable_values(factory: type, value: object) -> None:
    with pytest.raises(codec.ValueOutOfRangeError):
        factory(value)


def test_float32_rounds_to_single_precision() -> None:
    """
    Test that Float32 holds the value that will be read back.

    Given: A decimal with no exact single precision representation
    When: A Float32 is built from it
    Then: The held value is the nearest float32, not the original double
    """

    # ARRANGE
    expected = struct.unpack("!f", struct.pack("!f", 0.1))[0]

    # ACT
    value = Float32(0.1)

    # ASSERT
    assert value.value == expected
    assert value.value != 0.1
    assert codec.decode(ValueType.FLOAT32, value.to_bytes()).value == expected


def test_float32_decode_keeps_signalling_nan_bits() -> None:
    """
    Test that decoding a float32 NaN does not alter its payload.

    Given: The bytes of a signalling NaN
    When: They are decoded and encoded again
    Then: The same four bytes come back, distinct from the quiet NaN
    """

    # ARRANGE
    data = b"\x7f\x80\x00\x01"

    # ACT
    value = codec.decode(ValueType.FLOAT32, data)

    # ASSERT
    assert math.isnan(value.value)
    assert value.to_bytes() == data
    assert codec.encode(value).data == data
    assert value != Float32.from_bytes(b"\x7f\xc0\x00\x01")


def test_float_variants_accept_ints() -> None:
    assert Float64(3).value == 3.0
    assert isinstance(Float32(3).value, float)


@pytest.mark.parametrize(
    "value_type, data, expected",
    [
        pytest.param(ValueType.INT32, b"\x00\x00\x00", 4, id="int32-short"),
        pytest.param(ValueType.INT32, b"\x00" * 8, 4, id="int32-long"),
        pytest.param(ValueType.INT64, b"\x00" * 4, 8, id="int64-short"),
        pytest.param(ValueType.FLOAT32, b"", 4, id="float32-empty"),
        pytest.param(ValueType.FLOAT64, b"\x00" * 9, 8, id="float64-long"),
    ],
)
def test_decode_rejects_wrong_width(value_type: ValueType, data: bytes, expected: int) -> None:
    """
    Test width checks for fixed-width payloads.

    Given: A numeric type tag and a payload of the wrong length
    When: The payload is decoded
    Then: CorruptValueError is raised with the expected and actual widths
    """

    # ACT & ASSERT
    with pytest.raises(codec.CorruptValueError) as exc_info:
        codec.decode(value_type, data)

    assert exc_info.value.value_type is value_type
    assert exc_info.value.expected == expected
    assert exc_info.value.actual == len(data)


def test_decode_rejects_unknown_type_tag() -> None:
    with pytest.raises(codec.UnknownTypeTagError) as exc_info:
        codec.decode(9, b"\x00" * 4)

    assert exc_info.value.tag == 9
    assert isinstance(exc_info.value, codec.UnsupportedTypeError)


@pytest.mark.parametrize("size", [0, 1, 59, 4096])
def test_decode_accepts_any_string_length(size: int) -> None:
    decoded = codec.decode(ValueType.STRING, b"x" * size)

    assert decoded == String("x" * size)
