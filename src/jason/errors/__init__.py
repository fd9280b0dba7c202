"""Exception hierarchy and error codes.

Examples
--------
>>> from jason.errors import EncodeError, ErrorCode
>>> error = EncodeError("Cannot encode function")
>>> assert error.code == ErrorCode.ENCODE_ERROR
"""

from __future__ import annotations

from jason.errors.codes import ErrorCode
from jason.errors.exceptions import (
    DecodeError,
    EncodeError,
    JasonError,
    NumberFormatError,
    SettingsError,
)

__all__ = [
    "DecodeError",
    "EncodeError",
    "ErrorCode",
    "JasonError",
    "NumberFormatError",
    "SettingsError",
]
