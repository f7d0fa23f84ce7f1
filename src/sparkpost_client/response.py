# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Response wrapper returned by every successful dispatch."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .exceptions import ClientError
from .request import Request
from .transport import HttpError

_UNSET = object()


class Response:
    """HTTP response from the API with a lazily decoded JSON body.

    Attributes:
        request: Originating request, attached only in debug mode.
    """

    def __init__(self, response: Any, request: Request | None = None):
        self._response = response
        self.request = request
        self._decoded: Any = _UNSET

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason(self) -> str | None:
        return getattr(self._response, "reason", None)

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    @property
    def content(self) -> bytes:
        return self._response.content or b""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    @property
    def body_decoded(self) -> Any:
        """JSON-decoded body; None for an empty or non-JSON body."""
        if self._decoded is _UNSET:
            try:
                self._decoded = json.loads(self.content) if self.content else None
            except ValueError:
                self._decoded = None
        return self._decoded

    def json(self) -> Any:
        return self.body_decoded

    def raise_for_status(self) -> None:
        """Raise :class:`ClientError` if the status is 400 or above."""
        if not self.ok:
            raise ClientError(HttpError(self._response), self.request)

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
