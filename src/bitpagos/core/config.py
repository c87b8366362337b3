r"""Constants shared by the HTTP transport layer."""

from __future__ import annotations

__all__ = [
    "CA_BUNDLE_ERROR_CODE",
    "CERTIFICATE_ERROR_CODE",
    "DEFAULT_TIMEOUT",
    "FORM_CONTENT_TYPE",
    "HTTP_METHODS",
    "RETRY_STATUS_CODES",
    "SENSITIVE_HEADERS",
    "SUCCESS_STATUS_RANGE",
]

# HTTP status codes for which the request is sent again
# 408: Request Timeout
# 502: Bad Gateway
# 503: Service Unavailable
# 504: Gateway Timeout
RETRY_STATUS_CODES: frozenset[int] = frozenset({408, 502, 503, 504})

SUCCESS_STATUS_RANGE = range(200, 300)

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

# Read, write and pool timeout in seconds when only a connection timeout is set
DEFAULT_TIMEOUT = 30.0

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Transport error code for "certificate authority not found or invalid".
# Numbering follows libcurl.
CERTIFICATE_ERROR_CODE = 60

# Transport error code for "problem with reading the CA certificates file"
CA_BUNDLE_ERROR_CODE = 77

# Lower-cased header names whose values are masked before logging
SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
        "x-api-secret",
    }
)
