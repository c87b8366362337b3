r"""Result values returned by ``HttpConnection.send``.

A call ends in exactly one of three variants:

- ``Success``: the final status is in ``[200, 300)``.
- ``StatusFailure``: the final status is outside the success range,
  either a transient status left after the retries ran out or any other
  non-success status.
- ``TransportFailure``: the request never produced a usable response.

``unwrap`` turns a variant back into the raising contract of
``HttpConnection.execute``.
"""

from __future__ import annotations

__all__ = [
    "ExecutionResult",
    "HttpResult",
    "StatusFailure",
    "Success",
    "TransportFailure",
]

from abc import ABC, abstractmethod
from dataclasses import dataclass

from bitpagos.exceptions import ConnectionError


@dataclass(frozen=True)
class ExecutionResult:
    r"""What the last attempt of a call produced.

    Args:
        status: The HTTP status code of the last attempt.
        request_headers: The raw outgoing header block.
        response_headers: The raw incoming header block.
        body: The response body.
        retries: The number of status-based retries performed.
    """

    status: int = 0
    request_headers: str = ""
    response_headers: str = ""
    body: str = ""
    retries: int = 0


class HttpResult(ABC):
    r"""Base class of the three outcomes of an HTTP call."""

    @property
    @abstractmethod
    def ok(self) -> bool:
        r"""Indicate if the call succeeded."""

    @abstractmethod
    def unwrap(self) -> str:
        r"""Return the response body or raise the matching error.

        Raises:
            ConnectionError: If the call failed.
        """


@dataclass(frozen=True)
class Success(HttpResult):
    url: str
    result: ExecutionResult

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> str:
        return self.result.body


@dataclass(frozen=True)
class StatusFailure(HttpResult):
    r"""A response was received but its status is not a success.

    Args:
        url: The requested URL.
        result: The last attempt.
        exhausted: ``True`` if the status is still transient after the
            retries ran out.
    """

    url: str
    result: ExecutionResult
    exhausted: bool = False

    @property
    def ok(self) -> bool:
        return False

    @property
    def status(self) -> int:
        return self.result.status

    @property
    def body(self) -> str:
        return self.result.body

    @property
    def message(self) -> str:
        msg = f"Got Http response code {self.status} when accessing {self.url}."
        if self.exhausted:
            msg = f"{msg} Retried {self.result.retries} times."
        return msg

    def to_exception(self) -> ConnectionError:
        code = 0 if self.exhausted else self.status
        error = ConnectionError(self.url, self.message, code)
        error.set_data(self.body)
        return error

    def unwrap(self) -> str:
        raise self.to_exception()


@dataclass(frozen=True)
class TransportFailure(HttpResult):
    r"""The transport failed before a usable response was received.

    Args:
        url: The requested URL.
        message: The transport error message.
        code: The transport error code.
        cause: The original exception, chained when unwrapped.
    """

    url: str
    message: str
    code: int
    cause: BaseException | None = None

    @property
    def ok(self) -> bool:
        return False

    def to_exception(self) -> ConnectionError:
        return ConnectionError(self.url, self.message, self.code)

    def unwrap(self) -> str:
        raise self.to_exception() from self.cause
