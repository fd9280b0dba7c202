"""Deferred JSON values.

A :class:`Value` holds the encoded text of exactly one JSON value without
decoding it. It can be embedded verbatim when encoding a larger document,
captured from a larger document while decoding it, and decoded on demand
into any type msgspec understands.

An empty ``Value`` and one holding ``null`` are the same state: both
serialize, render and decode as JSON null.

Examples
--------
>>> from jason.value import Value
>>> v = Value("[1, 2, 3]")
>>> v.decode(list[int])
[1, 2, 3]
>>> v.can_decode(bool)
False
>>> bytes(Value())
b'null'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Self

if TYPE_CHECKING:
    from jason.codec import Codec, DecodeResult

__all__ = [
    "NULL",
    "Value",
]

NULL: Final = b"null"

type _Buffer = bytes | bytearray | memoryview


class Value:
    """An encoded JSON value.

    The wrapper owns its buffer: input is copied on construction and on
    :meth:`unmarshal_json`, and every read returns a fresh ``bytes`` object.
    No validation happens here; malformed content surfaces as a decode error.

    Parameters
    ----------
    data : bytes | bytearray | memoryview | str | None, optional
        Encoded JSON, e.g. ``Value("false")``. Defaults to empty (null).
    """

    __slots__ = ("_buf",)

    def __init__(self, data: _Buffer | str | None = None) -> None:
        self._buf = bytearray()
        if data is not None:
            self.unmarshal_json(data)

    @classmethod
    def encode(cls, obj: object, *, codec: Codec | None = None) -> Self:
        """Encode ``obj`` into a new Value.

        Parameters
        ----------
        obj : object
            Any object the codec can serialize.
        codec : Codec | None, optional
            Codec to use. Defaults to :func:`jason.codec.default_codec`.

        Returns
        -------
        Self
            Wrapper holding the encoding of ``obj``.

        Raises
        ------
        EncodeError
            If ``obj`` cannot be encoded.
        """
        return cls(_resolve(codec).encode_bytes(obj))

    def decode[T](self, type_: type[T], *, codec: Codec | None = None) -> T:
        """Decode into ``type_``, raising on failure.

        Raises
        ------
        DecodeError
            If the content is malformed or does not match ``type_``.
        """
        return _resolve(codec).decode(type_, self)

    def try_decode[T](self, type_: type[T], *, codec: Codec | None = None) -> DecodeResult[T]:
        """Decode into ``type_``, returning the error instead of raising."""
        return _resolve(codec).try_decode(type_, self)

    def can_decode(self, type_: type, *, codec: Codec | None = None) -> bool:
        """Return whether the content decodes into ``type_``."""
        return _resolve(codec).can_decode(type_, self)

    def marshal_json(self) -> bytes:
        """Return the content as its own JSON encoding.

        Returns
        -------
        bytes
            A copy of the stored bytes, or ``b"null"`` when empty.
        """
        if not self._buf:
            return NULL
        return bytes(self._buf)

    def unmarshal_json(self, data: _Buffer | str) -> None:
        """Replace the whole content with a copy of ``data``.

        Parameters
        ----------
        data : bytes | bytearray | memoryview | str
            Encoded JSON. Text is stored as UTF-8.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._buf[:] = data

    def is_null(self) -> bool:
        """Return whether the content is empty or the ``null`` literal."""
        return self.marshal_json().strip() == NULL

    def __bytes__(self) -> bytes:
        return self.marshal_json()

    def __str__(self) -> str:
        return self.marshal_json().decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Value):
            return self.marshal_json() == other.marshal_json()
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> Self:
        return type(self)(self._buf)

    def __deepcopy__(self, memo: dict[int, object]) -> Self:
        return type(self)(self._buf)


def _resolve(codec: Codec | None) -> Codec:
    if codec is not None:
        return codec
    from jason.codec import default_codec  # noqa: PLC0415  # codec imports this module

    return default_codec()
