r"""bitpagos - HTTP transport core of the BitPagos payment-gateway SDK.

This package sends the signed REST requests built by the SDK's API
resources and hands back the raw response body. Built on top of httpx, it
retries transient status codes (408, 502, 503, 504) up to a configured
bound, falls back once to a bundled CA trust store when certificate
verification fails, and reports failures as typed exceptions.

Example:
    ```pycon
    >>> from bitpagos import HttpConfig, HttpConnection
    >>> config = HttpConfig(
    ...     url="https://api.example.com/v1/checkout",
    ...     method="POST",
    ...     headers={"Content-Type": "application/json"},
    ...     http_retry_count=3,
    ... )
    >>> body = HttpConnection(config, {}).execute('{"amount": 10}')  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_STATUS_CODES",
    "BitPagosError",
    "ConfigurationError",
    "ConnectionError",
    "ExecutionResult",
    "HttpConfig",
    "HttpConnection",
    "HttpResult",
    "StatusFailure",
    "Success",
    "TransportFailure",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from bitpagos.core import (
    RETRY_STATUS_CODES,
    ExecutionResult,
    HttpConfig,
    HttpConnection,
    HttpResult,
    StatusFailure,
    Success,
    TransportFailure,
)
from bitpagos.exceptions import BitPagosError, ConfigurationError, ConnectionError  # noqa: A004

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
