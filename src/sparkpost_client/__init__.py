# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Client library for the SparkPost transactional email API.

Features:
    - Synchronous and asynchronous dispatch over a pluggable transport
    - Bounded retry on 5xx responses
    - cc/bcc folding and shorthand address expansion for transmissions
    - Typed responses and errors with optional request attachment for debugging

Example::

    from sparkpost_client import SparkPost

    sp = SparkPost({"key": "API_KEY", "async": False})
    response = sp.transmissions.post({
        "content": {"from": "sender@example.com", "subject": "Hello", "text": "Hi!"},
        "recipients": [{"address": '"Jane Doe" <jane@example.com>'}],
        "cc": [{"address": "copy@example.com"}],
    })
    print(response.body_decoded)
"""

__version__ = "2.3.0"

from .client import SparkPost  # noqa: E402
from .config import DEFAULT_OPTIONS, Options, load_options  # noqa: E402
from .exceptions import (  # noqa: E402
    ClientError,
    ConfigurationError,
    InvalidAddressFormat,
    JsonEncodingError,
    SparkPostError,
    UnsupportedOperation,
)
from .promise import PendingRequest  # noqa: E402
from .request import Request, RequestBuilder  # noqa: E402
from .resources import ResourceBase, Transmission  # noqa: E402
from .response import Response  # noqa: E402
from .transport import HttpError, HttpTransport, TransportResponse  # noqa: E402

__all__ = [
    "ClientError",
    "ConfigurationError",
    "DEFAULT_OPTIONS",
    "HttpError",
    "HttpTransport",
    "InvalidAddressFormat",
    "JsonEncodingError",
    "Options",
    "PendingRequest",
    "Request",
    "RequestBuilder",
    "ResourceBase",
    "Response",
    "SparkPost",
    "SparkPostError",
    "Transmission",
    "TransportResponse",
    "UnsupportedOperation",
    "load_options",
]
