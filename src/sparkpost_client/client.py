# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SparkPost API client and request dispatcher.

The client builds requests from its current options and sends them through
an injected transport, either blocking or asynchronously depending on the
``async`` option. Responses with a 5xx status are retried back-to-back up to
``retries`` extra times; transport failures are never retried.

Every outcome is wrapped: a :class:`~sparkpost_client.response.Response` on
success, a :class:`~sparkpost_client.exceptions.ClientError` on failure.
Both carry the originating request when ``debug`` is enabled.

Usage:
    >>> from sparkpost_client import SparkPost
    >>> sp = SparkPost({"key": "API_KEY", "async": False, "retries": 2})
    >>> response = sp.transmissions.post({
    ...     "content": {"from": "Sender <sender@example.com>", "subject": "Hi", "text": "Hello"},
    ...     "recipients": [{"address": "jane@example.com"}],
    ... })
    >>> response.status_code
    200

Example:
    Asynchronous dispatch::

        sp = SparkPost("API_KEY")
        response = await sp.transmissions.get({"campaign_id": "thanksgiving"})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from .config import DEFAULT_OPTIONS, Options, OptionsLike
from .exceptions import ClientError, ConfigurationError, UnsupportedOperation
from .logger import get_logger
from .promise import PendingRequest
from .request import Request, RequestBuilder
from .resources import Transmission
from .response import Response
from .transport import HttpTransport, Transport, supports_async, supports_sync

logger = get_logger("client")

Result = Union[Response, PendingRequest]


def is_server_error(status_code: int) -> bool:
    """Return True for statuses eligible for a retry (500-599)."""
    return 500 <= status_code <= 599


class SparkPost:
    """Client for the SparkPost REST API.

    Attributes:
        options: Current immutable options; replaced by :meth:`set_options`.
        transport: Object performing the HTTP exchange.
        transmissions: Transmissions endpoint.
    """

    def __init__(self, options: OptionsLike, transport: Transport | None = None):
        """Initialize the client.

        Args:
            options: Option mapping, ``Options`` value, or an API key string.
            transport: Object with ``send`` and/or ``send_async``. Defaults
                to :class:`~sparkpost_client.transport.HttpTransport`.

        Raises:
            ConfigurationError: On a missing API key or an unusable transport.
        """
        self.options: Options = DEFAULT_OPTIONS
        self.set_options(options)
        self.set_transport(transport if transport is not None else HttpTransport())

        self.transmissions = Transmission(self)

    def set_options(self, options: OptionsLike) -> SparkPost:
        """Merge ``options`` over the current ones and replace them.

        Raises:
            ConfigurationError: If the merged options are invalid.
        """
        self.options = self.options.merged(options)
        return self

    def set_transport(self, transport: Transport) -> SparkPost:
        """Replace the transport.

        Raises:
            ConfigurationError: If ``transport`` has neither ``send`` nor ``send_async``.
        """
        if not supports_sync(transport) and not supports_async(transport):
            raise ConfigurationError(
                f"Transport must provide send() or send_async(), got {type(transport).__name__}"
            )
        self.transport = transport
        return self

    def request(
        self,
        method: str = "GET",
        uri: str = "",
        payload: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Result:
        """Send a request in the mode selected by the ``async`` option.

        Returns:
            A ``PendingRequest`` in async mode, a ``Response`` otherwise.
        """
        if self.options.async_:
            return self.async_request(method, uri, payload, headers)
        return self.sync_request(method, uri, payload, headers)

    def build_request(
        self,
        method: str,
        uri: str,
        payload: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Build the request that would be sent, without sending it.

        Raises:
            JsonEncodingError: If the payload cannot be serialized.
        """
        return RequestBuilder(self.options).build(method, uri, payload, headers)

    def sync_request(
        self,
        method: str = "GET",
        uri: str = "",
        payload: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Send a request and block until it completes.

        Raises:
            UnsupportedOperation: If the transport has no ``send``.
            JsonEncodingError: If the payload cannot be serialized.
            ClientError: If the transport fails.
        """
        if not supports_sync(self.transport):
            raise UnsupportedOperation(
                "Your transport does not support synchronous requests. "
                "Please use a different transport or use asynchronous requests."
            )

        options = self.options
        request = self.build_request(method, uri, payload, headers)
        debug_request = request if options.debug else None

        try:
            response = self._send_with_retry(request, options.retries)
        except Exception as exc:
            logger.debug(f"{request.method} {request.url} failed: {exc!r}")
            raise ClientError(exc, debug_request) from exc
        return Response(response, debug_request)

    def async_request(
        self,
        method: str = "GET",
        uri: str = "",
        payload: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> PendingRequest:
        """Start a request without blocking.

        Returns:
            A ``PendingRequest`` resolving to a ``Response`` or rejecting
            with a ``ClientError``.

        Raises:
            UnsupportedOperation: If the transport has no ``send_async``.
            JsonEncodingError: If the payload cannot be serialized.
        """
        if not supports_async(self.transport):
            raise UnsupportedOperation(
                "Your transport does not support asynchronous requests. "
                "Please use a different transport or use synchronous requests."
            )

        options = self.options
        request = self.build_request(method, uri, payload, headers)
        debug_request = request if options.debug else None

        return PendingRequest(
            self._dispatch_async(request, options.retries, debug_request),
            debug_request,
        )

    def _send_with_retry(self, request: Request, retries: int) -> Any:
        attempt = 1
        while True:
            logger.debug(f"{request.method} {request.url} (attempt {attempt})")
            response = self.transport.send(request)
            if not is_server_error(response.status_code) or attempt > retries:
                return response
            logger.warning(
                f"{request.method} {request.url} returned {response.status_code}, "
                f"retrying ({attempt}/{retries})"
            )
            attempt += 1

    async def _dispatch_async(
        self, request: Request, retries: int, debug_request: Request | None
    ) -> Response:
        try:
            response = await self._send_async_with_retry(request, retries)
        except Exception as exc:
            logger.debug(f"{request.method} {request.url} failed: {exc!r}")
            raise ClientError(exc, debug_request) from exc
        return Response(response, debug_request)

    async def _send_async_with_retry(self, request: Request, retries: int) -> Any:
        attempt = 1
        while True:
            logger.debug(f"{request.method} {request.url} (attempt {attempt})")
            response = await self.transport.send_async(request)
            if not is_server_error(response.status_code) or attempt > retries:
                return response
            logger.warning(
                f"{request.method} {request.url} returned {response.status_code}, "
                f"retrying ({attempt}/{retries})"
            )
            attempt += 1

    def __repr__(self) -> str:
        mode = "async" if self.options.async_ else "sync"
        return f"<SparkPost {self.options.host} ({mode})>"
