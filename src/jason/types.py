"""Type aliases for JSON shapes.

``Object`` and ``Array`` are ordinary generic aliases, so they can be
parameterized when every member shares one type (``Object[int]``) or used bare
for fully dynamic data. msgspec and type checkers treat them exactly like the
``dict``/``list`` types they stand for.

Examples
--------
>>> from jason.types import Array, Object
>>> scores: Object[int] = {"alice": 3, "bob": 5}
>>> flags: Array[bool] = [True, False]
"""

from __future__ import annotations

from typing import TypeAlias, TypeVar

from jason.value import Value

__all__ = [
    "Array",
    "JsonPrimitive",
    "JsonValue",
    "Object",
    "ValueArray",
    "ValueObject",
]

_T = TypeVar("_T")

# An unordered set of name/value pairs, e.g. ``Object[bool]`` or bare ``Object``.
Object: TypeAlias = dict[str, _T]

# An ordered collection of values, e.g. ``Array[int]`` or bare ``Array``.
Array: TypeAlias = list[_T]

# Members stay encoded until decoded individually.
ValueObject: TypeAlias = Object[Value]
ValueArray: TypeAlias = Array[Value]

# Primitive JSON types (leaf values)
type JsonPrimitive = str | int | float | bool | None

# JSON value can be primitive or nested (dict/list)
type JsonValue = JsonPrimitive | dict[str, JsonValue] | list[JsonValue]
