r"""Parameter validation helpers for the HTTP configuration."""

from __future__ import annotations

__all__ = ["validate_method", "validate_retry_count", "validate_timeout"]

from bitpagos.core.config import HTTP_METHODS


def validate_method(method: str) -> str:
    """Validate and normalize an HTTP method.

    Args:
        method: The HTTP method. An empty string means "transport default"
            and is accepted as is.

    Returns:
        The upper-cased method.

    Raises:
        ValueError: If the method is not empty and not supported.

    Example:
        ```pycon
        >>> from bitpagos.core.validation import validate_method
        >>> validate_method("patch")
        'PATCH'
        >>> validate_method("")
        ''

        ```
    """
    normalized = method.upper()
    if normalized and normalized not in HTTP_METHODS:
        msg = f"method must be one of {', '.join(HTTP_METHODS)} or empty, got {method!r}"
        raise ValueError(msg)
    return normalized


def validate_retry_count(retry_count: int | None) -> None:
    """Validate the HTTP status retry count.

    Args:
        retry_count: Maximum number of retries, or ``None`` to disable
            status-based retries.

    Raises:
        ValueError: If retry_count is negative.
    """
    if retry_count is not None and retry_count < 0:
        msg = f"http_retry_count must be >= 0, got {retry_count}"
        raise ValueError(msg)


def validate_timeout(timeout: float) -> None:
    """Validate a timeout value in seconds.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from bitpagos.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)
