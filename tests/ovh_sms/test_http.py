"""Unit tests for the ovh_sms HTTP layer.

This module tests the signed HTTP layer defined in ovh_sms/_http.py.
The tests verify:

1. Helper Functions:
   - resolve_endpoint: endpoint names and URLs
   - sign_request: OVH signature format
   - _parse_error_response: extracting error info from OVH responses
   - _raise_for_status: mapping HTTP status codes to exception types

2. SignedHTTPClient:
   - Initialization and context manager support
   - Clock synchronisation and request signing
   - Error handling and exception mapping

Note: These tests use httpx's mock transport to avoid real network calls.
"""

import hashlib
import json
import time

import httpx
import pytest

from ovh_sms._http import (
    ENDPOINTS,
    SignedHTTPClient,
    _parse_error_response,
    _raise_for_status,
    resolve_endpoint,
    sign_request,
)
from ovh_sms.exceptions import (
    APIError,
    AuthenticationError,
    BadParametersError,
    ConflictError,
    ConnectionError,
    InvalidParameterException,
    NotFoundError,
    NotGrantedCallError,
    ServerError,
    TimeoutError,
)


def make_client(handler, **kwargs) -> SignedHTTPClient:
    """Build a SignedHTTPClient whose requests go to handler."""
    options = {
        "application_key": "app-key",
        "application_secret": "app-secret",
        "endpoint": "ovh-eu",
        "consumer_key": "consumer-key",
    }
    options.update(kwargs)
    return SignedHTTPClient(transport=httpx.MockTransport(handler), **options)


# =============================================================================
# Helper Function Tests: resolve_endpoint / sign_request
# =============================================================================


class TestResolveEndpoint:
    """Tests for resolve_endpoint."""

    @pytest.mark.parametrize("name", sorted(ENDPOINTS))
    def test_named_endpoints(self, name: str) -> None:
        """Every known name resolves to its base URL."""
        assert resolve_endpoint(name) == ENDPOINTS[name]

    def test_url_endpoint(self) -> None:
        """A URL is used as is, without trailing slash."""
        assert resolve_endpoint("https://api.example.com/1.0/") == "https://api.example.com/1.0"

    @pytest.mark.parametrize("endpoint", [None, ""])
    def test_empty_endpoint(self, endpoint) -> None:
        with pytest.raises(InvalidParameterException, match="Endpoint parameter is empty"):
            resolve_endpoint(endpoint)

    def test_unknown_endpoint(self) -> None:
        with pytest.raises(InvalidParameterException, match="not a known endpoint"):
            resolve_endpoint("eu.api.ovh.com")


class TestSignRequest:
    """Tests for sign_request."""

    def test_signature_format(self) -> None:
        """The signature is "$1$" and the SHA1 of the "+"-joined fields."""
        expected = hashlib.sha1(
            b"secret+consumer+GET+https://eu.api.ovh.com/1.0/sms++1700000000"
        ).hexdigest()

        signature = sign_request(
            "secret", "consumer", "GET", "https://eu.api.ovh.com/1.0/sms", "", 1700000000
        )

        assert signature == "$1$" + expected

    def test_body_changes_signature(self) -> None:
        url = "https://eu.api.ovh.com/1.0/sms/a/jobs"
        assert sign_request("s", "c", "POST", url, "{}", 1) != sign_request(
            "s", "c", "POST", url, '{"message":"x"}', 1
        )


# =============================================================================
# Helper Function Tests: error parsing
# =============================================================================


class TestParseErrorResponse:
    """Tests for _parse_error_response."""

    def test_parse_ovh_error(self) -> None:
        """OVH errors carry a message and an errorCode."""
        response = httpx.Response(
            status_code=403,
            json={
                "errorCode": "INVALID_CREDENTIAL",
                "httpCode": "403 Forbidden",
                "message": "This credential is not valid",
            },
        )
        assert _parse_error_response(response) == (
            "This credential is not valid",
            "INVALID_CREDENTIAL",
        )

    def test_parse_message_only(self) -> None:
        response = httpx.Response(status_code=404, json={"message": "Not found"})
        assert _parse_error_response(response) == ("Not found", None)

    def test_parse_plain_text(self) -> None:
        response = httpx.Response(status_code=502, text="Bad Gateway")
        assert _parse_error_response(response) == ("Bad Gateway", None)

    def test_parse_empty_body(self) -> None:
        response = httpx.Response(status_code=500)
        assert _parse_error_response(response) == ("HTTP 500 error", None)

    def test_parse_unexpected_json(self) -> None:
        response = httpx.Response(status_code=400, json=["oops"])
        message, error_code = _parse_error_response(response)
        assert message == "['oops']"
        assert error_code is None


class TestRaiseForStatus:
    """Tests for _raise_for_status."""

    def test_success_does_not_raise(self) -> None:
        _raise_for_status(httpx.Response(200, json={}))

    @pytest.mark.parametrize(
        ("status_code", "body", "exception"),
        [
            (400, {"message": "Invalid receiver"}, BadParametersError),
            (401, {"message": "You must login first"}, AuthenticationError),
            (403, {"message": "Invalid key", "errorCode": "INVALID_KEY"}, AuthenticationError),
            (403, {"message": "Bad cred", "errorCode": "INVALID_CREDENTIAL"}, AuthenticationError),
            (403, {"message": "No cred", "errorCode": "NOT_CREDENTIAL"}, AuthenticationError),
            (403, {"message": "Denied", "errorCode": "NOT_GRANTED_CALL"}, NotGrantedCallError),
            (403, {"message": "Forbidden"}, NotGrantedCallError),
            (404, {"message": "Account does not exist"}, NotFoundError),
            (409, {"message": "Sender already exists"}, ConflictError),
            (500, {"message": "Internal error"}, ServerError),
            (503, {"message": "Maintenance"}, ServerError),
            (429, {"message": "Too many requests"}, APIError),
        ],
    )
    def test_status_mapping(self, status_code: int, body: dict, exception: type) -> None:
        """Each status code maps to its exception type."""
        response = httpx.Response(status_code, json=body)

        with pytest.raises(exception) as exc_info:
            _raise_for_status(response)

        assert exc_info.value.status_code == status_code
        assert exc_info.value.message == body["message"]
        assert exc_info.value.response_body == body

    def test_query_id_is_kept(self) -> None:
        """The X-Ovh-QueryID header is attached to the error."""
        response = httpx.Response(
            404,
            json={"message": "Not found"},
            headers={"X-Ovh-QueryID": "EU.ext-1.abc"},
        )

        with pytest.raises(NotFoundError) as exc_info:
            _raise_for_status(response)

        assert exc_info.value.query_id == "EU.ext-1.abc"
        assert "EU.ext-1.abc" in str(exc_info.value)


# =============================================================================
# SignedHTTPClient Tests
# =============================================================================


class TestSignedHTTPClientInit:
    """Tests for SignedHTTPClient initialization."""

    def test_resolves_endpoint(self) -> None:
        client = SignedHTTPClient("ak", "as", "ovh-ca", "ck")
        assert client.base_url == "https://ca.api.ovh.com/1.0"
        assert client.timeout == 30.0
        client.close()

    def test_missing_endpoint(self) -> None:
        with pytest.raises(InvalidParameterException, match="Endpoint"):
            SignedHTTPClient("ak", "as", None, "ck")

    def test_context_manager(self) -> None:
        with SignedHTTPClient("ak", "as", "ovh-eu", "ck") as client:
            inner = client._client
        assert inner.is_closed


class TestSignedHTTPClientRequests:
    """Tests for SignedHTTPClient.call() and its shortcuts."""

    def test_unauthenticated_call_is_not_signed(self) -> None:
        """need_auth=False sends only the application key."""
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["X-Ovh-Application"] == "app-key"
            assert "X-Ovh-Signature" not in request.headers
            assert "X-Ovh-Consumer" not in request.headers
            return httpx.Response(200, json=1700000000)

        client = make_client(handler)
        assert client.call("GET", "/auth/time", need_auth=False) == 1700000000
        client.close()

    def test_signed_get(self) -> None:
        """Authenticated calls carry consumer key, timestamp and signature."""
        server_offset = 100
        signed_requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/1.0/auth/time":
                return httpx.Response(200, json=int(time.time()) + server_offset)
            signed_requests.append(request)
            return httpx.Response(200, json=["sms-ab12345-1"])

        client = make_client(handler)
        before = int(time.time())
        result = client.get("/sms")
        after = int(time.time())

        assert result == ["sms-ab12345-1"]
        request, = signed_requests
        timestamp = int(request.headers["X-Ovh-Timestamp"])
        assert before + server_offset - 1 <= timestamp <= after + server_offset + 1
        assert request.headers["X-Ovh-Consumer"] == "consumer-key"
        assert request.headers["X-Ovh-Signature"] == sign_request(
            "app-secret",
            "consumer-key",
            "GET",
            "https://eu.api.ovh.com/1.0/sms",
            "",
            timestamp,
        )
        client.close()

    def test_time_delta_fetched_once(self) -> None:
        """The server clock is only asked for on the first signed call."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            if request.url.path == "/1.0/auth/time":
                return httpx.Response(200, json=int(time.time()))
            return httpx.Response(200, json=[])

        client = make_client(handler)
        client.get("/sms")
        client.get("/sms")

        assert calls == ["/1.0/auth/time", "/1.0/sms", "/1.0/sms"]
        client.close()

    def test_signed_post_signs_exact_body(self) -> None:
        """The body bytes sent are the ones signed."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/1.0/auth/time":
                return httpx.Response(200, json=int(time.time()))
            captured["request"] = request
            return httpx.Response(200, json={"ids": [1]})

        client = make_client(handler)
        result = client.post("/sms/sms-ab12345-1/jobs", json={"message": "Hé", "receivers": ["+33612345678"]})

        request = captured["request"]
        body = request.content.decode("utf-8")
        assert json.loads(body) == {"message": "Hé", "receivers": ["+33612345678"]}
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["X-Ovh-Signature"] == sign_request(
            "app-secret",
            "consumer-key",
            "POST",
            str(request.url),
            body,
            int(request.headers["X-Ovh-Timestamp"]),
        )
        assert result == {"ids": [1]}
        client.close()

    def test_query_params_are_signed(self) -> None:
        """Query parameters are part of the signed URL; None values are dropped."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/1.0/auth/time":
                return httpx.Response(200, json=int(time.time()))
            captured["request"] = request
            return httpx.Response(200, json=[])

        client = make_client(handler)
        client.get("/sms/a/outgoing", params={"sender": "MyCompany", "tag": None})

        request = captured["request"]
        assert request.url.params.get("sender") == "MyCompany"
        assert "tag" not in request.url.params
        assert request.headers["X-Ovh-Signature"] == sign_request(
            "app-secret",
            "consumer-key",
            "GET",
            str(request.url),
            "",
            int(request.headers["X-Ovh-Timestamp"]),
        )
        client.close()

    def test_delete_empty_response(self) -> None:
        """An empty body is returned as None."""
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/1.0/auth/time":
                return httpx.Response(200, json=int(time.time()))
            assert request.method == "DELETE"
            return httpx.Response(200)

        client = make_client(handler)
        assert client.delete("/sms/a/jobs/1") is None
        client.close()

    def test_missing_consumer_key(self) -> None:
        """Signed calls need a consumer key; nothing is sent without one."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = make_client(handler, consumer_key=None)
        with pytest.raises(InvalidParameterException, match="Consumer key parameter is empty"):
            client.get("/sms")
        client.close()

    def test_missing_application_secret(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = make_client(handler, application_secret="")
        with pytest.raises(InvalidParameterException, match="Application secret"):
            client.get("/sms")
        client.close()

    def test_api_error_is_raised(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/1.0/auth/time":
                return httpx.Response(200, json=int(time.time()))
            return httpx.Response(
                404,
                json={"message": "The requested object (serviceName = x) does not exist"},
            )

        client = make_client(handler)
        with pytest.raises(NotFoundError, match="does not exist"):
            client.get("/sms/x/senders")
        client.close()

    def test_invalid_json_response(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        client = make_client(handler)
        with pytest.raises(APIError, match="Failed to decode API response"):
            client.call("GET", "/auth/time", need_auth=False)
        client.close()

    def test_connection_error(self) -> None:
        """Connection errors raise ConnectionError with the URL."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused")

        client = make_client(handler)
        with pytest.raises(ConnectionError) as exc_info:
            client.call("GET", "/auth/time", need_auth=False)

        assert exc_info.value.url == "https://eu.api.ovh.com/1.0/auth/time"
        assert isinstance(exc_info.value.cause, httpx.ConnectError)
        client.close()

    def test_timeout_error(self) -> None:
        """Timeouts raise TimeoutError with the configured timeout."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("Request timed out")

        client = make_client(handler, timeout=5.0)
        with pytest.raises(TimeoutError) as exc_info:
            client.call("GET", "/auth/time", need_auth=False)

        assert exc_info.value.timeout == 5.0
        client.close()

    def test_supplied_client_left_open(self) -> None:
        """close() doesn't close a caller-supplied httpx.Client."""
        inner = httpx.Client()
        client = SignedHTTPClient("ak", "as", "ovh-eu", "ck", client=inner)

        client.close()

        assert not inner.is_closed
        inner.close()
