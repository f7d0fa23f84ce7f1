"""Shared fixtures for the client test-suite."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from helpers import API_KEY, make_response
from sparkpost_client import SparkPost
from sparkpost_client.transport import HttpError


@pytest.fixture
def ok_response():
    return make_response(200, {"results": "yay"})


@pytest.fixture
def bad_response():
    return make_response(503, {"errors": []})


@pytest.fixture
def http_error():
    """Transport failure carrying a 500 response."""
    return HttpError(make_response(500, {"results": "failed"}))


@pytest.fixture
def sync_transport():
    """Transport with blocking send only."""
    return MagicMock(spec=["send"])


@pytest.fixture
def async_transport():
    """Transport with both capabilities; send_async is an AsyncMock."""
    transport = MagicMock(spec=["send", "send_async"])
    transport.send_async = AsyncMock()
    return transport


@pytest.fixture
def sync_client(sync_transport):
    return SparkPost({"key": API_KEY, "async": False}, transport=sync_transport)


@pytest.fixture
def async_client(async_transport):
    return SparkPost({"key": API_KEY}, transport=async_transport)


@pytest.fixture
def transmission_payload():
    return {
        "content": {
            "from": {"name": "Sparkpost Team", "email": "postmaster@sendmailfor.me"},
            "subject": "First Mailing From Python",
            "text": "Congratulations, {{name}}!! You just sent your very first mailing!",
        },
        "substitution_data": {"name": "Avi"},
        "recipients": [
            {"address": "avi.goldman@sparkpost.com"},
        ],
    }
