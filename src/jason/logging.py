"""Structured logging helpers.

Library modules obtain loggers through :func:`get_logger`, which attaches a
``NullHandler`` so that importing jason never configures output on its own.
Applications that want jason's records as JSON lines call
:func:`setup_logging` once at startup.

Examples
--------
>>> from jason.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.debug("Decoder built", extra={"operation": "decode", "target": "int"})
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import msgspec

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

    from jason.types import JsonValue

__all__ = [
    "JsonFormatter",
    "LoggerAdapter",
    "get_logger",
    "setup_logging",
]

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

_json_encoder = msgspec.json.Encoder()


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    The object holds ``ts``, ``level``, ``name`` and ``message`` plus every
    ``extra`` field whose value is a JSON scalar, list or dict. Exceptions are
    rendered under ``exc_info``.

    Examples
    --------
    >>> import logging
    >>> handler = logging.StreamHandler()
    >>> handler.setFormatter(JsonFormatter())
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format.

        Returns
        -------
        str
            JSON-encoded log entry.
        """
        data: dict[str, JsonValue] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S") + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if (
                key not in _RECORD_ATTRIBUTES
                and key not in data
                and not key.startswith("_")
                and value is not None
                and isinstance(value, (str, int, float, bool, list, dict))
            ):
                data[key] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return _json_encoder.encode(data).decode("utf-8")


class LoggerAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that merges adapter-level fields into every record.

    Fields passed per call through ``extra`` win over the adapter's own
    fields. ``operation`` and ``status`` are always present on the record.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Inject structured fields into the call's ``extra`` mapping.

        Parameters
        ----------
        msg : Any
            Log message.
        kwargs : MutableMapping[str, Any]
            Keyword arguments of the logging call.

        Returns
        -------
        tuple[Any, MutableMapping[str, Any]]
            Message and keyword arguments with the merged ``extra`` mapping.
        """
        extra = dict(kwargs.get("extra") or {})
        if self.extra:
            for key, value in self.extra.items():
                extra.setdefault(key, value)
        extra.setdefault("operation", "unknown")
        extra.setdefault("status", "success")
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **fields: object) -> LoggerAdapter:
        """Return a new adapter with ``fields`` added to the adapter's own.

        Parameters
        ----------
        **fields : object
            Structured fields to attach to every record.

        Returns
        -------
        LoggerAdapter
            Adapter over the same logger.
        """
        merged: dict[str, object] = dict(self.extra or {})
        merged.update(fields)
        return LoggerAdapter(self.logger, merged)


def get_logger(name: str, **fields: object) -> LoggerAdapter:
    """Get a logger adapter with structured logging support.

    Parameters
    ----------
    name : str
        Logger name (typically ``__name__`` of the calling module).
    **fields : object
        Structured fields attached to every record from this adapter.

    Returns
    -------
    LoggerAdapter
        Adapter over ``logging.getLogger(name)``.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    extra: Mapping[str, object] = dict(fields)
    return LoggerAdapter(logger, extra)


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger to write JSON lines to stdout.

    Parameters
    ----------
    level : int | str, optional
        Logging level threshold, as a number or a level name.
        Defaults to ``logging.INFO``.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)
