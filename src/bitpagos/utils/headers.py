r"""Helpers to build, render, split and redact raw HTTP header blocks."""

from __future__ import annotations

__all__ = [
    "flatten_header_block",
    "format_header_lines",
    "redact_headers",
    "render_request_block",
    "render_response_block",
    "split_raw_response",
]

from typing import TYPE_CHECKING

import httpx

from bitpagos.core.config import SENSITIVE_HEADERS

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

REDACTED = "****"
CRLF = "\r\n"


def format_header_lines(headers: Mapping[str, str]) -> list[str]:
    """Format a header mapping as ``"Name: Value"`` lines.

    Example:
        ```pycon
        >>> from bitpagos.utils.headers import format_header_lines
        >>> format_header_lines({"Accept": "application/json", "X-Id": "1"})
        ['Accept: application/json', 'X-Id: 1']

        ```
    """
    return [f"{name}: {value}" for name, value in headers.items()]


def redact_headers(lines: Iterable[str]) -> list[str]:
    """Mask the value of sensitive header lines.

    Example:
        ```pycon
        >>> from bitpagos.utils.headers import redact_headers
        >>> redact_headers(["Authorization: Bearer abc", "Accept: */*"])
        ['Authorization: ****', 'Accept: */*']

        ```
    """
    redacted = []
    for line in lines:
        name, sep, _ = line.partition(":")
        if sep and name.strip().lower() in SENSITIVE_HEADERS:
            redacted.append(f"{name}: {REDACTED}")
        else:
            redacted.append(line)
    return redacted


def _render_block(first_line: str, headers: httpx.Headers) -> str:
    # raw keeps the header names as sent on the wire
    lines = [first_line]
    lines.extend(
        f"{name.decode(headers.encoding)}: {value.decode(headers.encoding)}"
        for name, value in headers.raw
    )
    return CRLF.join(lines) + CRLF + CRLF


def render_request_block(request: httpx.Request) -> str:
    r"""Render the outgoing header block of a request in wire format.

    Example:
        ```pycon
        >>> import httpx
        >>> from bitpagos.utils.headers import render_request_block
        >>> request = httpx.Request("GET", "https://api.example.com/v1?x=1", headers={"X-A": "1"})
        >>> render_request_block(request).splitlines()[0]
        'GET /v1?x=1 HTTP/1.1'

        ```
    """
    target = request.url.raw_path.decode("ascii")
    return _render_block(f"{request.method} {target} HTTP/1.1", request.headers)


def render_response_block(response: httpx.Response) -> str:
    r"""Render the incoming header block of a response in wire format,
    status line included."""
    reason = response.reason_phrase or httpx.codes.get_reason_phrase(response.status_code)
    status_line = f"{response.http_version} {response.status_code} {reason}".rstrip()
    return _render_block(status_line, response.headers)


def split_raw_response(raw: str, body_length: int) -> tuple[str, str]:
    r"""Split a raw response into its header block and its body.

    The header size is derived from the total length minus the body
    length because a reported header size is unreliable behind proxies.

    Args:
        raw: The raw response, header block followed by body.
        body_length: The length of the body.

    Returns:
        The tuple ``(header_block, body)``.

    Example:
        ```pycon
        >>> from bitpagos.utils.headers import split_raw_response
        >>> split_raw_response("HTTP/1.1 200 OK\r\n\r\n{}", 2)
        ('HTTP/1.1 200 OK\r\n\r\n', '{}')

        ```
    """
    body_length = min(max(body_length, 0), len(raw))
    header_size = len(raw) - body_length
    return raw[:header_size], raw[header_size:]


def flatten_header_block(block: str, redact: bool = True) -> str:
    r"""Join the lines of a header block with ``", "`` for single-line
    logs.

    Args:
        block: The raw header block.
        redact: If ``True``, sensitive header values are masked.

    Example:
        ```pycon
        >>> from bitpagos.utils.headers import flatten_header_block
        >>> flatten_header_block("GET / HTTP/1.1\r\nAuthorization: Basic x\r\nAccept: */*\r\n\r\n")
        'GET / HTTP/1.1, Authorization: ****, Accept: */*'

        ```
    """
    lines = block.strip(CRLF).split(CRLF)
    if redact:
        lines = redact_headers(lines)
    return ", ".join(lines)
