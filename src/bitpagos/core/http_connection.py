r"""HTTP executor used by the BitPagos API resources.

``HttpConnection`` sends the request described by an ``HttpConfig``,
retries transient status codes up to the configured bound, falls back once
to the bundled CA trust store when certificate verification fails, and
either returns the raw response body or raises ``ConnectionError``.
"""

from __future__ import annotations

__all__ = ["HttpConnection", "check_transport_capabilities"]

import importlib.util
import logging
import ssl
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import certifi
import httpx

from bitpagos.core.config import (
    CA_BUNDLE_ERROR_CODE,
    FORM_CONTENT_TYPE,
    RETRY_STATUS_CODES,
    SUCCESS_STATUS_RANGE,
)
from bitpagos.core.result import (
    ExecutionResult,
    HttpResult,
    StatusFailure,
    Success,
    TransportFailure,
)
from bitpagos.exceptions import ConfigurationError
from bitpagos.utils.headers import (
    flatten_header_block,
    format_header_lines,
    redact_headers,
    render_request_block,
    render_response_block,
    split_raw_response,
)
from bitpagos.utils.transport_errors import (
    describe_transport_error,
    is_certificate_error,
    transport_error_code,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bitpagos.core.http_config import HttpConfig

logger: logging.Logger = logging.getLogger(__name__)

CA_CERT_PATH_SETTING = "http.CACertPath"
SEPARATOR_WIDTH = 128


def check_transport_capabilities(options: Mapping[str, Any]) -> None:
    """Check that the runtime can honour the requested transport options.

    Args:
        options: The keyword arguments destined to ``httpx.Client``.

    Raises:
        ConfigurationError: If HTTP/2 is requested without the ``h2``
            package, or a SOCKS proxy without the ``socksio`` package.
    """
    if options.get("http2") and importlib.util.find_spec("h2") is None:
        msg = "HTTP/2 support requires the 'h2' package, which is not available on this system"
        raise ConfigurationError(msg)
    proxy = options.get("proxy")
    if (
        proxy is not None
        and str(proxy).lower().startswith("socks5")
        and importlib.util.find_spec("socksio") is None
    ):
        msg = "SOCKS proxy support requires the 'socksio' package, which is not available on this system"
        raise ConfigurationError(msg)


@dataclass(frozen=True)
class _Attempt:
    response: httpx.Response | None = None
    error: Exception | None = None

    @property
    def status(self) -> int:
        return 0 if self.response is None else self.response.status_code


class HttpConnection:
    r"""Execute HTTP requests described by an ``HttpConfig``.

    The connection can be reused for several calls. Each call opens its own
    ``httpx.Client`` and closes it before returning or raising. The outcome
    of the last call is available through ``last_result`` and the
    ``http_status``, ``request_headers``, ``response_headers`` and
    ``response_body`` properties. Share an instance across threads only if
    calls are serialized by the caller.

    Args:
        http_config: The request configuration.
        config: The SDK settings. ``http.CACertPath`` overrides the bundled
            CA file used by the certificate fallback.

    Raises:
        ConfigurationError: If the transport options need a capability that
            is not available in this environment.

    Example:
        ```pycon
        >>> from bitpagos.core import HttpConfig, HttpConnection
        >>> connection = HttpConnection(
        ...     HttpConfig(url="https://api.example.com/v1/checkout", method="POST", http_retry_count=3),
        ...     {},
        ... )
        >>> body = connection.execute('{"amount": 10}')  # doctest: +SKIP

        ```
    """

    def __init__(self, http_config: HttpConfig, config: Mapping[str, Any] | None = None) -> None:
        check_transport_capabilities(http_config.get_transport_options())
        self._http_config = http_config
        self._config: dict[str, Any] = dict(config or {})
        self._last_result = ExecutionResult()

    @property
    def last_result(self) -> ExecutionResult:
        r"""The outcome of the last call.

        Before the first call, and after a transport failure, this is the
        empty ``ExecutionResult`` whose status is ``0``.
        """
        return self._last_result

    @property
    def http_status(self) -> int:
        r"""The HTTP status code of the last call, ``0`` if none."""
        return self._last_result.status

    @property
    def request_headers(self) -> str:
        r"""The raw header block sent by the last call."""
        return self._last_result.request_headers

    @property
    def response_headers(self) -> str:
        r"""The raw header block received by the last call, status line
        included."""
        return self._last_result.response_headers

    @property
    def response_body(self) -> str:
        r"""The body of the last call."""
        return self._last_result.body

    def execute(self, payload: str = "") -> str:
        r"""Send the request and return the response body.

        Args:
            payload: The request body for POST, PUT, PATCH and DELETE.
                Ignored for GET.

        Returns:
            The response body.

        Raises:
            ConnectionError: If the transport fails, or if the final status
                code is not in ``[200, 300)``. For status failures the body
                is attached to the error with ``set_data``.
        """
        return self.send(payload).unwrap()

    def send(self, payload: str = "") -> HttpResult:
        r"""Send the request and return its outcome without raising.

        Args:
            payload: The request body for POST, PUT, PATCH and DELETE.
                Ignored for GET.

        Returns:
            ``Success``, ``StatusFailure`` or ``TransportFailure``.
        """
        url = self._http_config.get_url()
        method = self._http_config.get_method() or "GET"
        headers = self._http_config.get_headers()
        retry_count = self._http_config.get_http_retry_count()
        request_kwargs = self._prepare_body(method, payload, headers)

        logger.info(f"{method} {url}")

        options = self._client_options()
        client = self._create_client(options)
        try:
            attempt = self._dispatch(client, method, url, headers, request_kwargs)

            if attempt.error is not None and is_certificate_error(attempt.error):
                logger.info(
                    "Invalid or no certificate authority found - Retrying using bundled CA certs file"
                )
                client.close()
                cafile = self._config.get(CA_CERT_PATH_SETTING) or certifi.where()
                try:
                    verify = ssl.create_default_context(cafile=cafile)
                except OSError as exc:
                    return self._transport_failure(
                        url,
                        headers,
                        exc,
                        message=f"Unable to load CA certificates from {cafile}: {exc}",
                        code=CA_BUNDLE_ERROR_CODE,
                    )
                client = self._create_client({**options, "verify": verify})
                attempt = self._dispatch(client, method, url, headers, request_kwargs)

            retries = 0
            if retry_count and attempt.status in RETRY_STATUS_CODES:
                logger.info(f"Got {attempt.status} response from server. Retrying")
                while attempt.status in RETRY_STATUS_CODES and retries < retry_count:
                    retries += 1
                    attempt = self._dispatch(client, method, url, headers, request_kwargs)
        finally:
            client.close()

        if attempt.response is None:
            return self._transport_failure(url, headers, attempt.error)

        result = self._build_result(attempt.response, retries)
        self._last_result = result
        logger.debug(f"Request Headers \t: {flatten_header_block(result.request_headers)}")
        logger.debug(
            (f"Request Data\t\t: {payload}" if payload else "No Request Payload")
            + "\n"
            + "-" * SEPARATOR_WIDTH
        )
        logger.info(f"Response Status \t: {result.status}")
        logger.debug(f"Response Headers\t: {flatten_header_block(result.response_headers)}")

        if result.status in RETRY_STATUS_CODES:
            failure = StatusFailure(url=url, result=result, exhausted=True)
            logger.error(f"{failure.message} {result.body}")
            return failure
        if result.status not in SUCCESS_STATUS_RANGE:
            failure = StatusFailure(url=url, result=result)
            logger.error(f"{failure.message} {result.body}")
            return failure

        logger.debug(
            (f"Response Data \t: {result.body}" if result.body else "No Response Body")
            + "\n"
            + "=" * SEPARATOR_WIDTH
        )
        return Success(url=url, result=result)

    def _client_options(self) -> dict[str, Any]:
        options = self._http_config.get_transport_options()
        if options.pop("headers", None) is not None:
            logger.debug("Ignoring the 'headers' transport option, configured headers are used")
        return options

    def _create_client(self, options: Mapping[str, Any]) -> httpx.Client:
        return httpx.Client(**options)

    @staticmethod
    def _prepare_body(method: str, payload: str, headers: dict[str, str]) -> dict[str, Any]:
        if method == "POST":
            if not any(name.lower() == "content-type" for name in headers):
                headers["Content-Type"] = FORM_CONTENT_TYPE
            return {"content": payload}
        if method in ("PUT", "PATCH", "DELETE"):
            return {"content": payload}
        return {}

    @staticmethod
    def _dispatch(
        client: httpx.Client,
        method: str,
        url: str,
        headers: Mapping[str, str],
        request_kwargs: Mapping[str, Any],
    ) -> _Attempt:
        try:
            response = client.request(method, url, headers=headers, **request_kwargs)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.debug(f"{method} request to {url} failed with {type(exc).__name__}: {exc}")
            return _Attempt(error=exc)
        return _Attempt(response=response)

    def _transport_failure(
        self,
        url: str,
        headers: Mapping[str, str],
        error: Exception | None,
        message: str | None = None,
        code: int | None = None,
    ) -> TransportFailure:
        self._last_result = ExecutionResult()
        failure = TransportFailure(
            url=url,
            message=message if message is not None else describe_transport_error(error),
            code=code if code is not None else transport_error_code(error),
            cause=error,
        )
        # No request block was rendered, so log the configured header list instead
        logger.debug(f"Request Headers \t: {', '.join(redact_headers(format_header_lines(headers)))}")
        logger.error(
            f"Request to {url} failed at the transport level: {failure.message} "
            f"(code {failure.code})"
        )
        return failure

    @staticmethod
    def _build_result(response: httpx.Response, retries: int) -> ExecutionResult:
        # httpx exposes no raw byte stream, so the raw response is rebuilt
        # from the rendered header block and the decoded body.
        body = response.text
        raw = render_response_block(response) + body
        response_headers, body = split_raw_response(raw, len(body))
        return ExecutionResult(
            status=response.status_code,
            request_headers=render_request_block(response.request),
            response_headers=response_headers,
            body=body,
            retries=retries,
        )
