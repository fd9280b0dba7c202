"""Stable error codes for jason exceptions.

Codes are kebab-case strings and stay stable across releases so that
structured logs and downstream error handlers can match on them.

Examples
--------
>>> from jason.errors.codes import ErrorCode
>>> code = ErrorCode.DECODE_ERROR
>>> assert code == "decode-error"
"""

from __future__ import annotations

from enum import StrEnum

__all__ = [
    "ErrorCode",
]


class ErrorCode(StrEnum):
    """Stable error codes for jason exceptions.

    Attributes
    ----------
    RUNTIME_ERROR
        Unclassified failure.
    ENCODE_ERROR
        A value could not be encoded as JSON.
    DECODE_ERROR
        JSON could not be decoded into the requested type.
    INVALID_NUMBER
        Text is not a valid JSON number, or cannot convert as requested.
    CONFIGURATION_ERROR
        Codec settings failed validation.
    """

    RUNTIME_ERROR = "runtime-error"

    # Conversion
    ENCODE_ERROR = "encode-error"
    DECODE_ERROR = "decode-error"
    INVALID_NUMBER = "invalid-number"

    # Configuration
    CONFIGURATION_ERROR = "configuration-error"
