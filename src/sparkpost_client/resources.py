# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""API resources scoped to an endpoint prefix.

``ResourceBase`` maps HTTP verbs onto :meth:`SparkPost.request` below a
fixed endpoint. ``Transmission`` additionally normalizes cc/bcc lists and
shorthand addresses before posting.

Example:
    >>> sp.transmissions.get({"campaign_id": "thanksgiving"})
    >>> sp.transmissions.delete("11668787484950529")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .formatting import format_payload, uses_recipient_list

if TYPE_CHECKING:
    from .client import Result, SparkPost

PathOrPayload = Any


class ResourceBase:
    """Verb helpers for a single API endpoint.

    Attributes:
        endpoint: Path prefix prepended to every request, e.g. ``transmissions``.
    """

    def __init__(self, sparkpost: SparkPost, endpoint: str):
        self._client = sparkpost
        self.endpoint = endpoint

    def get(self, uri: PathOrPayload = "", payload: Mapping[str, Any] | None = None,
            headers: Mapping[str, str] | None = None) -> Result:
        """Send a GET request; ``payload`` becomes the query string."""
        return self.request("GET", uri, payload, headers)

    def put(self, uri: PathOrPayload = "", payload: Mapping[str, Any] | None = None,
            headers: Mapping[str, str] | None = None) -> Result:
        """Send a PUT request."""
        return self.request("PUT", uri, payload, headers)

    def post(self, payload: Mapping[str, Any] | None = None,
             headers: Mapping[str, str] | None = None) -> Result:
        """Send a POST request to the endpoint root."""
        return self.request("POST", "", payload, headers)

    def delete(self, uri: PathOrPayload = "", payload: Mapping[str, Any] | None = None,
               headers: Mapping[str, str] | None = None) -> Result:
        """Send a DELETE request."""
        return self.request("DELETE", uri, payload, headers)

    def request(self, method: str = "GET", uri: PathOrPayload = "",
                payload: Mapping[str, Any] | None = None,
                headers: Mapping[str, str] | None = None) -> Result:
        """Send a request below the endpoint.

        When ``uri`` is a mapping it is taken as the payload and ``payload``
        as the headers, so ``get({"campaign_id": "x"})`` works.
        """
        if isinstance(uri, Mapping):
            headers = payload
            payload = uri
            uri = ""

        path = f"{self.endpoint}/{uri}" if uri else self.endpoint
        return self._client.request(method, path, payload, headers)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} /{self.endpoint}>"


class Transmission(ResourceBase):
    """The ``transmissions`` endpoint."""

    def __init__(self, sparkpost: SparkPost):
        super().__init__(sparkpost, "transmissions")

    def post(self, payload: Mapping[str, Any] | None = None,
             headers: Mapping[str, str] | None = None) -> Result:
        """Format the payload (cc, bcc, shorthand addresses) and post it.

        Raises:
            InvalidAddressFormat: Before any request is sent, if an address
                is malformed.
        """
        if payload is not None and uses_recipient_list(payload):
            payload = self.format_payload(payload)
        return super().post(payload, headers)

    @staticmethod
    def format_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
        """Return the normalized wire payload without sending anything."""
        return format_payload(payload)
