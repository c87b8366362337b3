r"""Opt-in logging setup for the ``bitpagos`` logger hierarchy.

The SDK only emits records through module-level loggers. Applications can
route them wherever they like, or call ``configure_logging`` with the SDK
settings to get the conventional setup:

- ``log.LogEnabled``: ``"true"``/``"false"`` (default ``"false"``).
- ``log.LogLevel``: ``DEBUG``, ``INFO``, ``WARNING``, ``ERROR`` (default
  ``INFO``). Request and response bodies are only logged at ``DEBUG``.
- ``log.FileName``: log to this file instead of stderr.
- ``log.Format``: ``"json"`` for ``StructuredFormatter`` output, anything
  else for plain text.

Example:
    ```python
    from bitpagos.utils.structured_logging import configure_logging, set_correlation_id

    configure_logging({"log.LogEnabled": "true", "log.LogLevel": "DEBUG", "log.Format": "json"})
    set_correlation_id("order-42")
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

ROOT_LOGGER_NAME = "bitpagos"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "bitpagos_correlation_id", default=None
)

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context.

    Example:
        ```pycon
        >>> from bitpagos.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("order-42")
        >>> get_correlation_id()
        'order-42'
        >>> clear_correlation_id()

        ```
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    r"""Format log records as single-line JSON objects.

    The output carries ``timestamp``, ``level``, ``logger``, ``message``,
    ``module``, ``function`` and ``line``, the correlation ID when one is
    set, the formatted exception when present, and any field passed
    through ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value
        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        # ISO 8601, UTC, millisecond precision
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def configure_logging(settings: Mapping[str, Any]) -> logging.Logger:
    """Configure the ``bitpagos`` logger from the SDK settings.

    Calling it again replaces the handler installed by the previous call.

    Args:
        settings: The SDK settings, see the module documentation.

    Returns:
        The ``bitpagos`` logger.

    Raises:
        ValueError: If ``log.LogLevel`` is not a known level name.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in [h for h in root.handlers if getattr(h, "_bitpagos_handler", False)]:
        root.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    if str(settings.get("log.LogEnabled", "false")).lower() in ("1", "true", "yes", "on"):
        level_name = str(settings.get("log.LogLevel", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            msg = f"log.LogLevel must be a logging level name, got {level_name!r}"
            raise ValueError(msg)

        filename = settings.get("log.FileName")
        handler = (
            logging.FileHandler(filename, encoding="utf-8") if filename else logging.StreamHandler()
        )
        if str(settings.get("log.Format", "")).lower() == "json":
            handler.setFormatter(StructuredFormatter())
        else:
            handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        root.setLevel(level)
    else:
        handler = logging.NullHandler()

    handler._bitpagos_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root
