# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Construction of transport-ready requests.

``RequestBuilder`` turns a method, an API path, a payload and optional
headers into an immutable :class:`Request`:

- GET payloads become the query string; other methods send the payload as
  a JSON body.
- List values in the query string are joined with commas and inserted
  verbatim, without percent-encoding.
- ``Authorization``, ``Content-Type`` and ``User-Agent`` are always set and
  cannot be overridden by custom headers.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from . import __version__
from .config import Options
from .exceptions import JsonEncodingError

USER_AGENT = f"sparkpost-client/{__version__}"


@dataclass(frozen=True)
class Request:
    """A fully built HTTP request.

    Attributes:
        method: Uppercase HTTP method.
        url: Absolute URL including the query string.
        headers: Header names to values.
        body: Encoded JSON body, or None when the request has no body.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def json(self) -> Any:
        """Decode the JSON body, or None when there is none."""
        if not self.body:
            return None
        return json.loads(self.body)


class RequestBuilder:
    """Builds :class:`Request` objects from a client's options.

    Args:
        options: Options supplying host, protocol, port, version and API key.
        user_agent: Value of the ``User-Agent`` header.
    """

    def __init__(self, options: Options, user_agent: str = USER_AGENT):
        self.options = options
        self.user_agent = user_agent

    def build(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Build values and the request instance in one step."""
        return self.build_instance(**self.build_values(method, path, payload, headers))

    def build_values(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Compute method, URL, headers and encoded body.

        Args:
            method: HTTP method, case-insensitive.
            path: Path below ``/api/<version>/``.
            payload: Query parameters for GET, JSON body otherwise.
            headers: Custom headers merged under the constant ones.

        Returns:
            A dict with ``method``, ``url``, ``headers`` and ``body`` keys.

        Raises:
            JsonEncodingError: If the payload cannot be serialized.
        """
        method = method.strip().upper()
        payload = payload or {}

        if method == "GET":
            params: Mapping[str, Any] = payload
            body = b""
        else:
            params = {}
            body = self._encode_body(payload)

        return {
            "method": method,
            "url": self.build_url(path, params),
            "headers": self.build_headers(headers),
            "body": body,
        }

    def build_url(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        """Build ``{protocol}://{host}[:{port}]/api/{version}/{path}[?{query}]``."""
        options = self.options
        port = f":{options.port}" if options.port else ""
        url = f"{options.protocol}://{options.host}{port}/api/{options.version}/{path}"

        query = "&".join(f"{key}={_query_value(value)}" for key, value in (params or {}).items())
        if query:
            url = f"{url}?{query}"
        return url

    def build_headers(self, custom: Mapping[str, str] | None = None) -> dict[str, str]:
        """Merge custom headers with the constant client headers."""
        constant = {
            "Authorization": self.options.key,
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
        reserved = {name.lower() for name in constant}

        headers = {
            name: value for name, value in (custom or {}).items() if name.lower() not in reserved
        }
        headers.update(constant)
        return headers

    @staticmethod
    def build_instance(
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | str | None = None,
    ) -> Request:
        """Create the immutable request; an empty body is not attached."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        return Request(method=method, url=url, headers=dict(headers), body=body or None)

    @staticmethod
    def _encode_body(payload: Mapping[str, Any]) -> bytes:
        if not payload:
            return b""
        try:
            return json.dumps(payload, separators=(",", ":"), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise JsonEncodingError(f"JSON encoding error: {exc}") from exc


def _query_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(item) for item in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
