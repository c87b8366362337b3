r"""Exception types raised by the BitPagos SDK core.

``ConnectionError`` intentionally reuses the SDK's historical name. It is
not related to the builtin of the same name, so import it explicitly from
this module (or use the ``BitPagosConnectionError`` alias).
"""

from __future__ import annotations

__all__ = [
    "BitPagosConnectionError",
    "BitPagosError",
    "ConfigurationError",
    "ConnectionError",
]

from typing import Any


class BitPagosError(Exception):
    r"""Base class of all exceptions raised by the SDK."""


class ConfigurationError(BitPagosError):
    r"""Raised when the runtime environment or the supplied configuration
    cannot support the requested operation.

    Args:
        message: Human-readable description of the problem.

    Example:
        ```pycon
        >>> from bitpagos.exceptions import ConfigurationError
        >>> err = ConfigurationError("h2 package is not installed")
        >>> str(err)
        'h2 package is not installed'

        ```
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConnectionError(BitPagosError):  # noqa: A001
    r"""Raised when an HTTP request fails at the transport level or ends
    with a non-successful status code.

    Args:
        url: The URL that was requested.
        message: Human-readable description of the failure.
        code: The transport error code, or the HTTP status code for
            status failures. ``0`` when not applicable.

    Example:
        ```pycon
        >>> from bitpagos.exceptions import ConnectionError
        >>> err = ConnectionError("https://api.example.com", "boom", 7)
        >>> err.url, err.code
        ('https://api.example.com', 7)
        >>> err.set_data('{"error": "x"}')
        >>> err.data
        '{"error": "x"}'

        ```
    """

    def __init__(self, url: str, message: str, code: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.message = message
        self.code = code
        self._data: Any = None

    @property
    def data(self) -> Any:
        r"""The auxiliary payload attached to the error, usually the
        response body."""
        return self._data

    def set_data(self, data: Any) -> None:
        self._data = data

    def get_data(self) -> Any:
        return self._data

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(url={self.url!r}, message={self.message!r}, "
            f"code={self.code})"
        )


BitPagosConnectionError = ConnectionError
