"""msgspec integration for deferred values and numbers.

:class:`Codec` wraps a ``msgspec.json.Encoder`` and a per-type cache of
``msgspec.json.Decoder`` instances, and teaches both about
:class:`~jason.value.Value` and :class:`~jason.number.Number`:

- encoding embeds their text verbatim through ``msgspec.Raw``;
- decoding into them through ``dict``/``list``/``tuple`` containers captures
  the exact byte span of each member as ``msgspec.Raw`` and copies it in;
- decoding into them from inside a ``msgspec.Struct``, dataclass or other
  user type goes through ``dec_hook``, which re-encodes the parsed span.
  Such decoders parse untyped floats with a ``float_hook`` that remembers
  the literal, so the re-encoded span keeps every digit.

Failures are classified by the variant called, never by their content:
:meth:`Codec.decode` raises :class:`~jason.errors.DecodeError`,
:meth:`Codec.try_decode` returns it inside a :class:`DecodeResult`.

Examples
--------
>>> from jason.codec import Codec
>>> from jason.value import Value
>>> codec = Codec()
>>> codec.decode(dict[str, Value], b'{"a": [1, 2]}')["a"]
Value('[1, 2]')
>>> codec.try_decode(int, b'"x"').ok
False
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from dataclasses import dataclass
from functools import cache
from types import UnionType
from typing import TYPE_CHECKING, Any, Literal, Self, Union, cast, get_args, get_origin

import msgspec
import msgspec.inspect

from jason.errors import DecodeError, EncodeError, NumberFormatError
from jason.logging import get_logger
from jason.number import Number
from jason.settings import load_settings
from jason.value import NULL, Value

if TYPE_CHECKING:
    from collections.abc import Iterator

    from jason.settings import CodecSettings

__all__ = [
    "Codec",
    "DecodeResult",
    "default_codec",
]

logger = get_logger(__name__)

_MAPPING_ORIGINS = frozenset({dict, Mapping, MutableMapping})
_SEQUENCE_ORIGINS = frozenset({list, Sequence, MutableSequence})

# Decoding into these types fails with one of these, whatever the input was.
_DECODE_FAILURES = (msgspec.DecodeError, NumberFormatError, NotImplementedError, TypeError)
_ENCODE_FAILURES = (msgspec.MsgspecError, NotImplementedError, OverflowError, TypeError, ValueError)

type _Input = Value | bytes | bytearray | memoryview | str


@dataclass(frozen=True, slots=True)
class DecodeResult[T]:
    """Outcome of a fallible decode.

    Exactly one of ``value`` and ``error`` is meaningful: when ``error`` is set,
    ``value`` is None. Unpacks as ``value, error``.

    Attributes
    ----------
    value : T | None
        Decoded value, or None on failure.
    error : DecodeError | None
        Failure, or None on success.
    """

    value: T | None = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        """Whether decoding succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure.

        Returns
        -------
        T
            The decoded value.

        Raises
        ------
        DecodeError
            If decoding failed.
        """
        if self.error is not None:
            raise self.error
        return cast("T", self.value)

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.error


class _FloatText(float):
    """Untyped JSON float that remembers its source literal."""

    def __new__(cls, text: str) -> Self:
        self = super().__new__(cls, text)
        self.text = text
        return self


def _is_deferred(tp: object) -> bool:
    return get_origin(tp) is None and isinstance(tp, type) and issubclass(tp, (Value, Number))


def _optional_deferred(tp: object) -> Any | None:
    """Return ``X`` when ``tp`` is ``X | None`` with ``X`` deferred, else None."""
    if get_origin(tp) not in (Union, UnionType):
        return None
    members = [arg for arg in get_args(tp) if arg is not type(None)]
    if len(members) == 1 and len(get_args(tp)) == 2 and _is_deferred(members[0]):
        return members[0]
    return None


def _type_name(tp: object) -> str:
    if isinstance(tp, type) and not get_args(tp):
        return tp.__qualname__
    return repr(tp)


def _capture_type(tp: Any) -> Any | None:
    """Return ``tp`` with reachable deferred types replaced by ``msgspec.Raw``.

    Only ``dict``/``list``/``tuple`` style containers and ``X | None`` are
    walked. Returns None when nothing was replaced.
    """
    if _is_deferred(tp) or _optional_deferred(tp) is not None:
        return msgspec.Raw
    origin = get_origin(tp)
    if origin in _MAPPING_ORIGINS or origin in _SEQUENCE_ORIGINS or origin is tuple:
        args = get_args(tp)
        replaced = tuple(
            arg if arg is Ellipsis else (_capture_type(arg) or arg) for arg in args
        )
        if replaced != args:
            return origin[replaced]
    return None


def _restore(tp: Any, obj: Any) -> Any:
    """Swap the ``msgspec.Raw`` spans in ``obj`` for instances of the types in ``tp``."""
    if _is_deferred(tp):
        return tp(bytes(obj))
    member = _optional_deferred(tp)
    if member is not None:
        span = bytes(obj)
        return None if span == NULL else member(span)
    origin = get_origin(tp)
    args = get_args(tp)
    if origin in _MAPPING_ORIGINS:
        return {key: _restore(args[1], item) for key, item in obj.items()}
    if origin in _SEQUENCE_ORIGINS:
        return [_restore(args[0], item) for item in obj]
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_restore(args[0], item) for item in obj)
        return tuple(_restore(arg, item) for arg, item in zip(args, obj, strict=True))
    return obj


def _reaches_deferred(info: msgspec.inspect.Type, seen: set[int]) -> bool:
    """Return whether a deferred type is left for ``dec_hook`` anywhere in ``info``."""
    if id(info) in seen:
        return False
    seen.add(id(info))
    if isinstance(info, msgspec.inspect.CustomType):
        return _is_deferred(info.cls)
    for name in info.__struct_fields__:
        child = getattr(info, name)
        for item in child if isinstance(child, tuple) else (child,):
            node = item.type if isinstance(item, msgspec.inspect.Field) else item
            if isinstance(node, msgspec.inspect.Type) and _reaches_deferred(node, seen):
                return True
    return False


def _with_float_text(obj: object) -> object:
    """Swap remembered float literals back in before re-encoding a hook span."""
    if isinstance(obj, _FloatText):
        return msgspec.Raw(obj.text)
    if isinstance(obj, dict):
        return {key: _with_float_text(item) for key, item in obj.items()}
    if isinstance(obj, list):
        return [_with_float_text(item) for item in obj]
    return obj


def _as_bytes(data: _Input) -> bytes | bytearray | memoryview | str:
    if isinstance(data, Value):
        return data.marshal_json()
    if not data:
        return NULL
    return data


class Codec:
    """JSON encoder/decoder pair aware of deferred values.

    Instances are safe to share: configuration is fixed at construction and
    the decoder cache only ever gains equivalent entries.

    Parameters
    ----------
    strict : bool, optional
        Reject lax coercions such as ``"1"`` into ``int``. Defaults to True.
    order : {"deterministic", "sorted"} | None, optional
        Key ordering used when encoding. Defaults to None (insertion order).
    """

    def __init__(
        self,
        *,
        strict: bool = True,
        order: Literal["deterministic", "sorted"] | None = None,
    ) -> None:
        self.strict = strict
        self.order = order
        self._encoder = msgspec.json.Encoder(enc_hook=self._enc_hook, order=order)
        self._raw_decoder = msgspec.json.Decoder(msgspec.Raw)
        self._decoders: dict[object, tuple[msgspec.json.Decoder[Any], Any | None]] = {}
        logger.debug(
            "Codec created",
            extra={"operation": "codec_init", "strict": strict, "order": order or "insertion"},
        )

    @classmethod
    def from_settings(cls, settings: CodecSettings) -> Self:
        """Build a codec from :class:`~jason.settings.CodecSettings`."""
        return cls(strict=settings.strict, order=settings.order)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strict={self.strict!r}, order={self.order!r})"

    def _enc_hook(self, obj: object) -> object:
        if isinstance(obj, Value):
            data = obj.marshal_json()
            try:
                self._raw_decoder.decode(data)
            except msgspec.DecodeError as exc:
                msg = f"Value holds malformed JSON: {exc}"
                raise ValueError(msg) from exc
            return msgspec.Raw(data)
        if isinstance(obj, Number):
            return msgspec.Raw(obj.marshal_json())
        msg = f"Objects of type {type(obj).__name__} are not supported"
        raise NotImplementedError(msg)

    def _dec_hook(self, tp: type, obj: object) -> object:
        if _is_deferred(tp):
            return tp(self._encoder.encode(_with_float_text(obj)))
        msg = f"Objects of type {_type_name(tp)} are not supported"
        raise NotImplementedError(msg)

    def _decoder_for(self, tp: object) -> tuple[msgspec.json.Decoder[Any], Any | None]:
        try:
            return self._decoders[tp]
        except KeyError:
            pass
        except TypeError:
            # Unhashable type expression; build without caching.
            return self._build_decoder(tp)
        entry = self._build_decoder(tp)
        self._decoders[tp] = entry
        return entry

    def _build_decoder(self, tp: object) -> tuple[msgspec.json.Decoder[Any], Any | None]:
        captured = _capture_type(tp)
        target = captured if captured is not None else tp
        hooked = _reaches_deferred(msgspec.inspect.type_info(target), set())
        decoder = msgspec.json.Decoder(
            target,
            strict=self.strict,
            dec_hook=self._dec_hook,
            float_hook=_FloatText if hooked else None,
        )
        logger.debug(
            "Built decoder",
            extra={
                "operation": "build_decoder",
                "target": _type_name(tp),
                "captures_raw": captured is not None,
                "keeps_float_text": hooked,
            },
        )
        return decoder, captured

    def encode_bytes(self, obj: object) -> bytes:
        """Encode ``obj`` as JSON bytes.

        Parameters
        ----------
        obj : object
            Any object msgspec can serialize, including values and numbers.
            Each embedded :class:`Value` is parsed once more to check it
            holds exactly one JSON value.

        Returns
        -------
        bytes
            The JSON encoding.

        Raises
        ------
        EncodeError
            If ``obj`` cannot be encoded.
        """
        try:
            return self._encoder.encode(obj)
        except _ENCODE_FAILURES as exc:
            msg = f"Cannot encode {type(obj).__name__} as JSON: {exc}"
            raise EncodeError(msg, cause=exc, context={"source": type(obj).__name__}) from exc

    def encode(self, obj: object) -> Value:
        """Encode ``obj`` into a :class:`~jason.value.Value`.

        Raises
        ------
        EncodeError
            If ``obj`` cannot be encoded.
        """
        return Value(self.encode_bytes(obj))

    def try_decode[T](self, type_: type[T], data: _Input) -> DecodeResult[T]:
        """Decode ``data`` into ``type_``, returning failures.

        Parameters
        ----------
        type_ : type[T]
            Any type msgspec can decode into, including :class:`Value`,
            :class:`Number` and containers of them.
        data : Value | bytes | bytearray | memoryview | str
            Encoded JSON. Empty input decodes as ``null``.

        Returns
        -------
        DecodeResult[T]
            The decoded value, or the :class:`DecodeError` describing why
            decoding failed.
        """
        try:
            decoder, captured = self._decoder_for(type_)
            result = decoder.decode(_as_bytes(data))
            if captured is not None:
                result = _restore(type_, result)
        except _DECODE_FAILURES as exc:
            name = _type_name(type_)
            msg = f"Cannot decode JSON into {name}: {exc}"
            return DecodeResult(error=DecodeError(msg, cause=exc, context={"target": name}))
        return DecodeResult(value=cast("T", result))

    def decode[T](self, type_: type[T], data: _Input) -> T:
        """Decode ``data`` into ``type_``, raising on failure.

        Use where failure means a broken invariant, e.g. data this process
        encoded itself. Untrusted input belongs with :meth:`try_decode`.

        Raises
        ------
        DecodeError
            If ``data`` is malformed or does not match ``type_``.
        """
        return self.try_decode(type_, data).unwrap()

    def can_decode(self, type_: type, data: _Input) -> bool:
        """Return whether ``data`` decodes into ``type_``.

        This performs the full decode and discards the result.
        """
        return self.try_decode(type_, data).ok


@cache
def default_codec() -> Codec:
    """Return the process-wide codec built from environment settings.

    Raises
    ------
    SettingsError
        If the ``JASON_*`` environment variables fail validation.
    """
    settings = load_settings()
    if settings.log_level is not None:
        logging.getLogger("jason").setLevel(settings.log_level)
    return Codec.from_settings(settings)
