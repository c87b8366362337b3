r"""Classification of httpx transport exceptions into stable numeric
codes.

The codes follow libcurl numbering, which is what BitPagos SDK consumers
have historically matched against in ``ConnectionError.code``.
"""

from __future__ import annotations

__all__ = [
    "TRANSPORT_ERROR_CODES",
    "describe_transport_error",
    "is_certificate_error",
    "transport_error_code",
]

import ssl

import httpx

from bitpagos.core.config import CERTIFICATE_ERROR_CODE

CERTIFICATE_VERIFY_FAILED = "CERTIFICATE_VERIFY_FAILED"

TRANSPORT_ERROR_CODES: dict[type[Exception], int] = {
    httpx.UnsupportedProtocol: 1,
    httpx.InvalidURL: 3,
    httpx.ProxyError: 5,
    httpx.ConnectError: 7,
    httpx.RemoteProtocolError: 8,
    httpx.LocalProtocolError: 16,
    httpx.TimeoutException: 28,
    httpx.TooManyRedirects: 47,
    httpx.WriteError: 55,
    httpx.ReadError: 56,
    httpx.CloseError: 56,
    httpx.DecodingError: 61,
}


def is_certificate_error(exc: BaseException) -> bool:
    """Indicate if an exception was caused by a failed TLS certificate
    verification.

    The whole ``__cause__``/``__context__`` chain is inspected because
    httpx wraps the underlying ``ssl`` error.

    Example:
        ```pycon
        >>> import ssl
        >>> import httpx
        >>> from bitpagos.utils.transport_errors import is_certificate_error
        >>> is_certificate_error(httpx.ConnectError("[SSL: CERTIFICATE_VERIFY_FAILED]"))
        True
        >>> is_certificate_error(httpx.ConnectError("Connection refused"))
        False

        ```
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ssl.SSLCertVerificationError):
            return True
        if CERTIFICATE_VERIFY_FAILED in str(current):
            return True
        current = current.__cause__ or current.__context__
    return False


def transport_error_code(exc: BaseException) -> int:
    """Return the numeric code of a transport exception.

    Args:
        exc: The exception raised by httpx.

    Returns:
        ``CERTIFICATE_ERROR_CODE`` for certificate failures, otherwise the
        code of the most specific known exception class, or ``0``.

    Example:
        ```pycon
        >>> import httpx
        >>> from bitpagos.utils.transport_errors import transport_error_code
        >>> transport_error_code(httpx.ReadTimeout("timed out"))
        28
        >>> transport_error_code(httpx.ConnectError("refused"))
        7

        ```
    """
    if is_certificate_error(exc):
        return CERTIFICATE_ERROR_CODE
    for cls in type(exc).__mro__:
        code = TRANSPORT_ERROR_CODES.get(cls)
        if code is not None:
            return code
    return 0


def describe_transport_error(exc: BaseException) -> str:
    """Return a human-readable message for a transport exception."""
    return str(exc) or type(exc).__name__
