"""Arbitrary-precision JSON numbers.

A :class:`Number` keeps the exact text of a JSON number until the caller asks
for a conversion, so values such as ``12345678901234567890123`` or
``0.10000000000000000001`` survive a decode/encode cycle unchanged.

Examples
--------
>>> from jason.number import Number
>>> n = Number("10")
>>> int(n), float(n)
(10, 10.0)
>>> Number("1e400").as_decimal()
Decimal('1E+400')
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Final

from jason.errors import NumberFormatError

__all__ = [
    "Number",
]

_NUMBER_RE: Final = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_INTEGER_RE: Final = re.compile(r"-?(?:0|[1-9][0-9]*)")


class Number:
    """An encoded JSON number.

    Parameters
    ----------
    text : str | bytes
        RFC 8259 number literal, e.g. ``"-1.5e3"``.

    Raises
    ------
    NumberFormatError
        If ``text`` is not a JSON number literal.
    """

    __slots__ = ("_text",)

    def __init__(self, text: str | bytes) -> None:
        if isinstance(text, (bytes, bytearray, memoryview)):
            text = bytes(text).decode("utf-8", errors="replace")
        if not isinstance(text, str) or _NUMBER_RE.fullmatch(text) is None:
            msg = f"Not a JSON number: {text!r}"
            raise NumberFormatError(msg, context={"text": repr(text)})
        self._text = text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Number):
            return self._text == other._text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)

    def __int__(self) -> int:
        """Convert an integer literal to ``int``.

        Raises
        ------
        NumberFormatError
            If the literal has a fraction or exponent part.
        """
        if _INTEGER_RE.fullmatch(self._text) is None:
            msg = f"Number {self._text!r} is not an integer"
            raise NumberFormatError(msg, context={"text": self._text})
        return int(self._text)

    def __float__(self) -> float:
        """Convert to the nearest ``float``.

        Raises
        ------
        NumberFormatError
            If the magnitude is out of ``float`` range.
        """
        value = float(self._text)
        if math.isinf(value):
            msg = f"Number {self._text!r} is out of float range"
            raise NumberFormatError(msg, context={"text": self._text})
        return value

    def as_decimal(self) -> Decimal:
        """Return the exact value as a :class:`decimal.Decimal`."""
        return Decimal(self._text)

    def is_integer(self) -> bool:
        """Return whether the literal has neither fraction nor exponent."""
        return _INTEGER_RE.fullmatch(self._text) is not None

    def marshal_json(self) -> bytes:
        """Return the literal as its own JSON encoding."""
        return self._text.encode("ascii")
