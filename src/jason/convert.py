"""Package-level conversion helpers.

Each helper forwards to a :class:`~jason.codec.Codec`, by default the
process-wide one from :func:`~jason.codec.default_codec`, so call sites read
as "convert this to ``T``" with ``T`` spelled out.

Examples
--------
>>> import jason
>>> v = jason.encode({"name": "a", "count": 3})
>>> jason.decode(dict[str, int | str], v)
{'name': 'a', 'count': 3}
>>> jason.can_decode(bool, v)
False
>>> value, error = jason.try_decode(int, b"[1]")
>>> value is None and error is not None
True
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jason.codec import default_codec

if TYPE_CHECKING:
    from jason.codec import Codec, DecodeResult
    from jason.value import Value

__all__ = [
    "can_decode",
    "decode",
    "encode",
    "try_decode",
]

type _Input = Value | bytes | bytearray | memoryview | str


def encode(obj: object, *, codec: Codec | None = None) -> Value:
    """Encode ``obj`` into a :class:`~jason.value.Value`, raising on failure.

    Parameters
    ----------
    obj : object
        Any object the codec can serialize.
    codec : Codec | None, optional
        Codec to use. Defaults to the process-wide codec.

    Returns
    -------
    Value
        Wrapper holding the JSON encoding of ``obj``.

    Raises
    ------
    EncodeError
        If ``obj`` cannot be encoded, e.g. a function or an unsupported type.
    """
    return (codec or default_codec()).encode(obj)


def decode[T](type_: type[T], data: _Input, *, codec: Codec | None = None) -> T:
    """Decode ``data`` into ``type_``, raising on failure.

    Only for data whose shape is guaranteed, e.g. produced by :func:`encode`
    from a value of ``type_``. Use :func:`try_decode` for untrusted input.

    Parameters
    ----------
    type_ : type[T]
        Target type.
    data : Value | bytes | bytearray | memoryview | str
        Encoded JSON.
    codec : Codec | None, optional
        Codec to use. Defaults to the process-wide codec.

    Returns
    -------
    T
        The decoded value.

    Raises
    ------
    DecodeError
        If ``data`` is malformed or does not match ``type_``.
    """
    return (codec or default_codec()).decode(type_, data)


def try_decode[T](type_: type[T], data: _Input, *, codec: Codec | None = None) -> DecodeResult[T]:
    """Decode ``data`` into ``type_``, returning the error instead of raising.

    Parameters
    ----------
    type_ : type[T]
        Target type.
    data : Value | bytes | bytearray | memoryview | str
        Encoded JSON.
    codec : Codec | None, optional
        Codec to use. Defaults to the process-wide codec.

    Returns
    -------
    DecodeResult[T]
        Either the decoded value or the :class:`~jason.errors.DecodeError`.
    """
    return (codec or default_codec()).try_decode(type_, data)


def can_decode(type_: type, data: _Input, *, codec: Codec | None = None) -> bool:
    """Return whether ``data`` decodes into ``type_``."""
    return (codec or default_codec()).can_decode(type_, data)
