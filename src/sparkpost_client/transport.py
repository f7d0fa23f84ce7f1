# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP transports used by the client.

A transport exposes one or both capabilities:

- ``send(request)``: blocking, returns a response or raises.
- ``send_async(request)``: returns an awaitable resolving to a response.

Responses only need ``status_code``, ``headers`` and ``content`` attributes,
so a ``requests.Response`` is accepted as well as :class:`TransportResponse`.

The bundled :class:`HttpTransport` uses ``requests`` for blocking calls and
``aiohttp`` for asynchronous ones.

Example:
    Plugging a custom transport::

        class RecordingTransport:
            def __init__(self):
                self.sent = []

            def send(self, request):
                self.sent.append(request)
                return TransportResponse(200, {}, b'{"results": {}}')

        client = SparkPost("API_KEY", transport=RecordingTransport())
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, Union, runtime_checkable

import aiohttp
import requests

from .request import Request


@dataclass(frozen=True)
class TransportResponse:
    """Library-neutral HTTP response.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers.
        content: Raw response body.
        reason: HTTP reason phrase, when known.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""
    reason: str | None = None


class HttpError(Exception):
    """Transport-level failure carrying the HTTP response that caused it."""

    def __init__(self, response: Any):
        self.response = response
        super().__init__(f"HTTP {response.status_code}")


@runtime_checkable
class SyncTransport(Protocol):
    def send(self, request: Request) -> Any: ...


@runtime_checkable
class AsyncTransport(Protocol):
    def send_async(self, request: Request) -> Awaitable[Any]: ...


Transport = Union[SyncTransport, AsyncTransport]


def supports_sync(transport: Any) -> bool:
    """Return True if ``transport`` can send blocking requests."""
    return callable(getattr(transport, "send", None))


def supports_async(transport: Any) -> bool:
    """Return True if ``transport`` can send non-blocking requests."""
    return callable(getattr(transport, "send_async", None))


class HttpTransport:
    """Transport backed by ``requests`` (blocking) and ``aiohttp`` (async).

    Attributes:
        timeout: Per-request timeout in seconds.
        raise_for_status: Raise :class:`HttpError` for statuses >= 400 instead
            of returning the response. Such failures are never retried.
    """

    def __init__(
        self,
        timeout: float = 30,
        raise_for_status: bool = False,
        session: requests.Session | None = None,
    ):
        """Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds.
            raise_for_status: Turn error statuses into ``HttpError``.
            session: Optional ``requests.Session`` reused for blocking calls.
        """
        self.timeout = timeout
        self.raise_for_status = raise_for_status
        self._session = session

    def send(self, request: Request) -> TransportResponse:
        """Send ``request`` and block until the response arrives.

        Raises:
            HttpError: On an error status when ``raise_for_status`` is set.
            requests.RequestException: On connection failures and timeouts.
        """
        http = self._session or requests
        resp = http.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
            timeout=self.timeout,
        )
        return self._finish(
            TransportResponse(
                status_code=resp.status_code,
                headers=dict(resp.headers),
                content=resp.content,
                reason=resp.reason,
            )
        )

    async def send_async(self, request: Request) -> TransportResponse:
        """Send ``request`` without blocking the event loop.

        Raises:
            HttpError: On an error status when ``raise_for_status`` is set.
            aiohttp.ClientError: On connection failures.
            asyncio.TimeoutError: When the timeout expires.
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
            ) as response:
                content = await response.read()
                return self._finish(
                    TransportResponse(
                        status_code=response.status,
                        headers=dict(response.headers),
                        content=content,
                        reason=response.reason,
                    )
                )

    def _finish(self, response: TransportResponse) -> TransportResponse:
        if self.raise_for_status and response.status_code >= 400:
            raise HttpError(response)
        return response
