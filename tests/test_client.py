"""Tests for the SparkPost client and synchronous dispatch."""

import logging
from unittest.mock import MagicMock

import pytest

from helpers import API_KEY, make_response
from sparkpost_client import SparkPost
from sparkpost_client.client import is_server_error
from sparkpost_client.exceptions import (
    ClientError,
    ConfigurationError,
    InvalidAddressFormat,
    JsonEncodingError,
    UnsupportedOperation,
)
from sparkpost_client.promise import PendingRequest
from sparkpost_client.resources import Transmission
from sparkpost_client.response import Response
from sparkpost_client.transport import HttpTransport


class TestClientInitialization:
    """Tests for client construction and configuration."""

    def test_options_and_endpoints(self, sync_transport):
        client = SparkPost({"key": API_KEY}, transport=sync_transport)

        assert client.options.key == API_KEY
        assert client.transport is sync_transport
        assert isinstance(client.transmissions, Transmission)

    def test_string_options_is_key(self, sync_transport):
        client = SparkPost(API_KEY, transport=sync_transport)
        assert client.options.key == API_KEY

    def test_missing_key(self, sync_transport):
        with pytest.raises(ConfigurationError, match="API key"):
            SparkPost({"host": "api.sparkpost.com"}, transport=sync_transport)

    def test_string_async_flag_rejected(self, sync_transport):
        """Only a real boolean selects the dispatch mode."""
        with pytest.raises(ConfigurationError, match="async must be a boolean"):
            SparkPost({"key": API_KEY, "async": "false"}, transport=sync_transport)

    def test_default_transport(self):
        client = SparkPost(API_KEY)
        assert isinstance(client.transport, HttpTransport)

    def test_invalid_transport(self):
        with pytest.raises(ConfigurationError, match="send"):
            SparkPost(API_KEY, transport=object())

    def test_set_transport(self, sync_client):
        async_only = MagicMock(spec=["send_async"])
        sync_client.set_transport(async_only)
        assert sync_client.transport is async_only

    def test_set_transport_rejects_invalid(self, sync_client):
        with pytest.raises(ConfigurationError):
            sync_client.set_transport(object())

    def test_set_options_replaces_value(self, sync_client):
        before = sync_client.options

        sync_client.set_options({"retries": 3})

        assert sync_client.options is not before
        assert sync_client.options.retries == 3
        assert before.retries == 0
        assert sync_client.options.key == API_KEY

    def test_set_options_validates_key(self, sync_client):
        with pytest.raises(ConfigurationError):
            sync_client.set_options({"key": " "})

    def test_repr(self, sync_client):
        assert repr(sync_client) == "<SparkPost api.sparkpost.com (sync)>"


class TestRequestModeSelection:
    """Tests for sync/async selection by the async option."""

    def test_sync_mode_returns_response(self, sync_client, sync_transport, ok_response, transmission_payload):
        sync_transport.send.return_value = ok_response

        result = sync_client.request("POST", "transmissions", transmission_payload)

        assert isinstance(result, Response)

    def test_async_mode_returns_pending(self, async_client, async_transport, ok_response):
        async_transport.send_async.return_value = ok_response

        result = async_client.request("GET", "transmissions", {"campaign_id": "thanksgiving"})

        assert isinstance(result, PendingRequest)
        assert result.wait().status_code == 200


class TestSyncRequest:
    """Tests for blocking dispatch."""

    def test_successful_request(self, sync_client, sync_transport, ok_response, transmission_payload):
        sync_transport.send.return_value = ok_response

        response = sync_client.sync_request("POST", "transmissions", transmission_payload)

        assert response.status_code == 200
        assert response.body_decoded == {"results": "yay"}
        sync_transport.send.assert_called_once()
        request = sync_transport.send.call_args[0][0]
        assert request.method == "POST"
        assert request.url == "https://api.sparkpost.com:443/api/v1/transmissions"
        assert request.json() == transmission_payload

    def test_unsuccessful_request(self, sync_client, sync_transport, http_error, transmission_payload):
        sync_transport.send.side_effect = http_error

        with pytest.raises(ClientError) as exc_info:
            sync_client.sync_request("POST", "transmissions", transmission_payload)

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == {"results": "failed"}
        assert exc_info.value.__cause__ is http_error

    def test_connection_failure_wrapped(self, sync_client, sync_transport):
        sync_transport.send.side_effect = ConnectionError("refused")

        with pytest.raises(ClientError, match="refused") as exc_info:
            sync_client.sync_request("GET", "transmissions")

        assert exc_info.value.status_code is None
        assert exc_info.value.body is None

    def test_retries_until_success(self, sync_client, sync_transport, ok_response, bad_response,
                                   transmission_payload):
        sync_transport.send.side_effect = [bad_response, bad_response, ok_response]
        sync_client.set_options({"retries": 2})

        response = sync_client.sync_request("POST", "transmissions", transmission_payload)

        assert response.status_code == 200
        assert response.body_decoded == {"results": "yay"}
        assert sync_transport.send.call_count == 3

    def test_retries_resend_same_request(self, sync_client, sync_transport, ok_response, bad_response):
        sync_transport.send.side_effect = [bad_response, ok_response]
        sync_client.set_options({"retries": 1})

        sync_client.sync_request("DELETE", "transmissions/123")

        first, second = (c[0][0] for c in sync_transport.send.call_args_list)
        assert first is second

    def test_retries_exhausted_returns_last_5xx(self, sync_client, sync_transport, bad_response):
        sync_transport.send.return_value = bad_response
        sync_client.set_options({"retries": 2})

        response = sync_client.sync_request("GET", "transmissions")

        assert response.status_code == 503
        assert response.body_decoded == {"errors": []}
        assert sync_transport.send.call_count == 3

    def test_no_retry_without_budget(self, sync_client, sync_transport, bad_response):
        sync_transport.send.return_value = bad_response

        response = sync_client.sync_request("GET", "transmissions")

        assert response.status_code == 503
        assert sync_transport.send.call_count == 1

    def test_client_errors_not_retried(self, sync_client, sync_transport):
        sync_transport.send.return_value = make_response(400, {"errors": [{"message": "bad"}]})
        sync_client.set_options({"retries": 3})

        response = sync_client.sync_request("POST", "transmissions", {"a": 1})

        assert response.status_code == 400
        assert sync_transport.send.call_count == 1

    def test_transport_failure_not_retried(self, sync_client, sync_transport, http_error,
                                           transmission_payload):
        sync_transport.send.side_effect = http_error
        sync_client.set_options({"retries": 2})

        with pytest.raises(ClientError) as exc_info:
            sync_client.sync_request("POST", "transmissions", transmission_payload)

        assert exc_info.value.status_code == 500
        assert sync_transport.send.call_count == 1

    def test_retry_logged(self, sync_client, sync_transport, ok_response, bad_response, caplog):
        sync_transport.send.side_effect = [bad_response, ok_response]
        sync_client.set_options({"retries": 1})

        with caplog.at_level(logging.WARNING, logger="sparkpost_client.client"):
            sync_client.sync_request("GET", "transmissions")

        assert "returned 503, retrying (1/1)" in caplog.text
        assert API_KEY not in caplog.text

    def test_json_error_before_send(self, sync_client, sync_transport):
        with pytest.raises(JsonEncodingError):
            sync_client.sync_request("POST", "transmissions", {"invalid": b"\xb1\x31"})

        sync_transport.send.assert_not_called()

    def test_async_only_transport(self, sync_client):
        transport = MagicMock(spec=["send_async"])
        sync_client.set_transport(transport)

        with pytest.raises(UnsupportedOperation, match="synchronous"):
            sync_client.sync_request("GET", "transmissions")


class TestDebugOption:
    """Tests for request attachment in debug mode."""

    def test_debug_off(self, sync_client, sync_transport, ok_response, transmission_payload):
        sync_transport.send.return_value = ok_response
        sync_client.set_options({"debug": False})

        response = sync_client.request("POST", "transmissions", transmission_payload)

        assert response.request is None

    def test_debug_off_error(self, sync_client, sync_transport, http_error):
        sync_transport.send.side_effect = http_error

        with pytest.raises(ClientError) as exc_info:
            sync_client.request("POST", "transmissions", {"a": 1})

        assert exc_info.value.request is None

    def test_debug_on(self, sync_client, sync_transport, ok_response, http_error, transmission_payload):
        sync_client.set_options({"debug": True})

        sync_transport.send.return_value = ok_response
        response = sync_client.request("POST", "transmissions", transmission_payload)
        assert response.request.json() == transmission_payload

        sync_transport.send.side_effect = http_error
        with pytest.raises(ClientError) as exc_info:
            sync_client.request("POST", "transmissions", transmission_payload)
        assert exc_info.value.request.json() == transmission_payload


class TestBuildRequest:
    """Tests for building requests without sending them."""

    def test_build_request(self, sync_client, sync_transport, transmission_payload):
        request = sync_client.build_request("POST", "transmissions", transmission_payload, {})

        assert request.json() == transmission_payload
        assert request.headers["Authorization"] == API_KEY
        sync_transport.send.assert_not_called()

    def test_build_request_json_error(self, sync_client):
        with pytest.raises(JsonEncodingError, match="JSON encoding error"):
            sync_client.build_request("POST", "test", {"invalid": b"\xb1\x31"}, {})

    def test_build_request_follows_options(self, sync_client):
        sync_client.set_options({"host": "api.eu.sparkpost.com", "port": 0})

        request = sync_client.build_request("GET", "transmissions")

        assert request.url == "https://api.eu.sparkpost.com/api/v1/transmissions"


class TestTransmissionDispatch:
    """Tests for transmission posts going through the client."""

    def test_invalid_address_raised_before_send(self, sync_client, sync_transport, transmission_payload):
        transmission_payload["recipients"].append({"address": "invalid email format"})

        with pytest.raises(InvalidAddressFormat):
            sync_client.transmissions.post(transmission_payload)

        sync_transport.send.assert_not_called()


@pytest.mark.parametrize("status,expected", [
    (499, False), (500, True), (503, True), (599, True), (600, False), (200, False),
])
def test_is_server_error(status, expected):
    assert is_server_error(status) is expected
