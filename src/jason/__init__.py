"""Helpers for dynamic JSON.

jason names JSON's structural shapes (:data:`Object`, :data:`Array`), keeps
numbers at full precision (:class:`Number`), and carries encoded JSON around
undecoded (:class:`Value`) until a caller asks for a typed value. Encoding and
decoding are done by msgspec.

Examples
--------
>>> import jason
>>> v = jason.Value("false")
>>> jason.decode(bool, v)
False
>>> jason.encode({"n": jason.Number("12345678901234567890.5")})
Value('{"n":12345678901234567890.5}')
"""

from __future__ import annotations

from jason.codec import Codec, DecodeResult, default_codec
from jason.convert import can_decode, decode, encode, try_decode
from jason.errors import (
    DecodeError,
    EncodeError,
    ErrorCode,
    JasonError,
    NumberFormatError,
    SettingsError,
)
from jason.number import Number
from jason.settings import CodecSettings, load_settings
from jason.types import Array, JsonPrimitive, JsonValue, Object, ValueArray, ValueObject
from jason.value import Value

__all__ = [
    "Array",
    "Codec",
    "CodecSettings",
    "DecodeError",
    "DecodeResult",
    "EncodeError",
    "ErrorCode",
    "JasonError",
    "JsonPrimitive",
    "JsonValue",
    "Number",
    "NumberFormatError",
    "Object",
    "SettingsError",
    "Value",
    "ValueArray",
    "ValueObject",
    "can_decode",
    "decode",
    "default_codec",
    "encode",
    "load_settings",
    "try_decode",
]
