# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for the SparkPost client.

Every error raised by the library derives from :class:`SparkPostError`.
Formatting, encoding and configuration errors are raised before any
request leaves the process. :class:`ClientError` is the only error that
reports a failed exchange with the remote service.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .request import Request


class SparkPostError(Exception):
    """Base class for all errors raised by the client."""


class ConfigurationError(SparkPostError, ValueError):
    """Missing or blank API key, invalid option value, or unusable transport."""


class InvalidAddressFormat(SparkPostError, ValueError):
    """A shorthand address matched neither ``email`` nor ``Name <email>``.

    Attributes:
        address: The offending address string.
    """

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid address format: {address}")


class JsonEncodingError(SparkPostError, ValueError):
    """The request payload could not be serialized to JSON."""


class UnsupportedOperation(SparkPostError, NotImplementedError):
    """The configured transport cannot perform the requested dispatch mode."""


class ClientError(SparkPostError):
    """Failed exchange with the remote service.

    Wraps the exception raised by the transport. When the transport failed
    with an HTTP response attached (see :class:`~sparkpost_client.transport.HttpError`),
    the status code and decoded JSON error body are exposed as well.

    Attributes:
        status_code: HTTP status of the failed response, or None.
        body: JSON-decoded error body, or None when absent or undecodable.
        request: Originating request, attached only in debug mode.
        exception: The wrapped transport exception.
    """

    def __init__(self, exception: BaseException, request: Request | None = None):
        self.exception = exception
        self.request = request
        self.status_code: int | None = None
        self.body: Any = None

        message = str(exception)
        response = getattr(exception, "response", None)
        if response is not None and getattr(response, "status_code", None) is not None:
            self.status_code = response.status_code
            message = _response_text(response)
            self.body = _decode_json(message)

        super().__init__(message)
        self.__cause__ = exception

    @property
    def code(self) -> int | None:
        """Alias of :attr:`status_code`."""
        return self.status_code

    def __repr__(self) -> str:
        return f"ClientError(status_code={self.status_code!r}, message={str(self)[:60]!r})"


def _response_text(response: Any) -> str:
    content = getattr(response, "content", b"")
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return str(content or "")


def _decode_json(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None
