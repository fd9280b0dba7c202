"""Typed exception hierarchy for jason.

All jason exceptions inherit from :class:`JasonError`, which carries a stable
:class:`~jason.errors.codes.ErrorCode`, a human-readable message and a
context mapping suitable for structured logging.

Examples
--------
>>> from jason.errors import DecodeError, ErrorCode
>>> try:
...     raise DecodeError("Cannot decode into int", context={"target": "int"})
... except DecodeError as e:
...     assert e.code == ErrorCode.DECODE_ERROR
...     assert e.to_dict()["context"] == {"target": "int"}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from jason.errors.codes import ErrorCode

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "DecodeError",
    "EncodeError",
    "JasonError",
    "NumberFormatError",
    "SettingsError",
]


class JasonError(Exception):
    """Base exception for all jason errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode | None, optional
        Error code. Defaults to the class-level ``default_code``.
    cause : BaseException | None, optional
        Underlying exception, attached as ``__cause__``. Defaults to None.
    context : Mapping[str, object] | None, optional
        Extra structured details about the failure. Defaults to None.

    Attributes
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode
        Error code enum value.
    context : dict[str, object]
        Additional context for error details.
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        cause: BaseException | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.context: dict[str, object] = dict(context) if context else {}
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """Return the message prefixed with the error code."""
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict[str, object]:
        """Render the error as a plain mapping for structured logs.

        Returns
        -------
        dict[str, object]
            Mapping with ``type``, ``code``, ``message`` and, when present,
            ``context`` and ``cause`` entries.
        """
        data: dict[str, object] = {
            "type": type(self).__name__,
            "code": self.code.value,
            "message": self.message,
        }
        if self.context:
            data["context"] = dict(self.context)
        if self.__cause__ is not None:
            data["cause"] = repr(self.__cause__)
        return data


class EncodeError(JasonError):
    """Raised when a value cannot be encoded as JSON."""

    default_code = ErrorCode.ENCODE_ERROR


class DecodeError(JasonError):
    """Raised when JSON cannot be decoded into the requested type."""

    default_code = ErrorCode.DECODE_ERROR


class NumberFormatError(JasonError, ValueError):
    """Raised for text that is not a JSON number, or a number that cannot convert."""

    default_code = ErrorCode.INVALID_NUMBER


class SettingsError(JasonError):
    """Raised when codec settings fail validation."""

    default_code = ErrorCode.CONFIGURATION_ERROR
