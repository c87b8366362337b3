r"""HTTP transport core: request configuration, the executor and its
result types."""

from __future__ import annotations

__all__ = [
    "CERTIFICATE_ERROR_CODE",
    "RETRY_STATUS_CODES",
    "ExecutionResult",
    "HttpConfig",
    "HttpConnection",
    "HttpResult",
    "StatusFailure",
    "Success",
    "TransportFailure",
]

from bitpagos.core.config import CERTIFICATE_ERROR_CODE, RETRY_STATUS_CODES
from bitpagos.core.http_config import HttpConfig
from bitpagos.core.http_connection import HttpConnection
from bitpagos.core.result import (
    ExecutionResult,
    HttpResult,
    StatusFailure,
    Success,
    TransportFailure,
)
