r"""Helper functions for header handling, transport error classification
and logging setup."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "configure_logging",
    "flatten_header_block",
    "format_header_lines",
    "is_certificate_error",
    "redact_headers",
    "render_request_block",
    "render_response_block",
    "split_raw_response",
    "transport_error_code",
]

from bitpagos.utils.headers import (
    flatten_header_block,
    format_header_lines,
    redact_headers,
    render_request_block,
    render_response_block,
    split_raw_response,
)
from bitpagos.utils.structured_logging import StructuredFormatter, configure_logging
from bitpagos.utils.transport_errors import is_certificate_error, transport_error_code
