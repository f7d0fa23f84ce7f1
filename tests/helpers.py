"""Helpers shared by the test modules."""

import json

from sparkpost_client.transport import TransportResponse

API_KEY = "SPARKPOST_API_KEY"


def make_response(status_code=200, body=None, headers=None):
    """Build a TransportResponse with a JSON body."""
    content = json.dumps(body).encode() if body is not None else b""
    return TransportResponse(
        status_code=status_code,
        headers=headers or {"Content-Type": "application/json"},
        content=content,
    )
