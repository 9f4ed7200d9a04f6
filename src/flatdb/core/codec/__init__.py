from .value import (
    VARIANTS,
    CorruptValueError,
    EncodedValue,
    Float32,
    Float64,
    Int32,
    Int64,
    String,
    UnknownTypeTagError,
    UnsupportedTypeError,
    Value,
    ValueOutOfRangeError,
    ValueType,
    decode,
    encode,
)

__all__ = [
    "CorruptValueError",
    "EncodedValue",
    "Float32",
    "Float64",
    "Int32",
    "Int64",
    "String",
    "UnknownTypeTagError",
    "UnsupportedTypeError",
    "VARIANTS",
    "Value",
    "ValueOutOfRangeError",
    "ValueType",
    "decode",
    "encode",
]
