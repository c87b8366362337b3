from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import pytest

from bitpagos.core import HttpConfig, HttpConnection

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Mapping

    Outcome = tuple[int, str] | Exception

TEST_URL = "https://api.example.com/v1/checkout"


class RecordingHandler:
    r"""``httpx.MockTransport`` handler that replays a list of outcomes.

    Each outcome is either ``(status_code, body)`` or an exception to
    raise. The last outcome is repeated once the list is exhausted.
    """

    def __init__(self, outcomes: list[Outcome]) -> None:
        self._outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        status_code, body = outcome
        return httpx.Response(
            status_code, text=body, headers={"Content-Type": "application/json"}
        )


class SpyConnection(HttpConnection):
    r"""``HttpConnection`` that keeps every client it creates."""

    def __init__(self, http_config: HttpConfig, config: Mapping[str, Any] | None = None) -> None:
        super().__init__(http_config, config)
        self.clients: list[tuple[httpx.Client, dict[str, Any]]] = []

    def _create_client(self, options: Mapping[str, Any]) -> httpx.Client:
        client = super()._create_client(options)
        self.clients.append((client, dict(options)))
        return client


@pytest.fixture
def make_connection() -> Generator[Callable[..., tuple[SpyConnection, RecordingHandler]], None, None]:
    """Create a connection backed by an in-process mock transport."""

    def _make(
        outcomes: list[Outcome],
        *,
        method: str = "GET",
        url: str = TEST_URL,
        headers: dict[str, str] | None = None,
        http_retry_count: int | None = None,
        settings: Mapping[str, Any] | None = None,
        **transport_options: Any,
    ) -> tuple[SpyConnection, RecordingHandler]:
        handler = RecordingHandler(outcomes)
        config = HttpConfig(
            url=url,
            method=method,
            headers=headers or {},
            transport_options={"transport": httpx.MockTransport(handler), **transport_options},
            http_retry_count=http_retry_count,
        )
        return SpyConnection(config, settings or {}), handler

    yield _make
