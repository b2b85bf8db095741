"""Internal HTTP handling utilities for the OVH SMS client.

This module provides the signed HTTP communication layer shared by SmsApi,
Message and Sms. It handles:
- Resolving OVH endpoint names to API base URLs
- Signing authenticated requests with the application/consumer keys
- Synchronising the signature timestamp with the server clock
- Response parsing and error handling

This is an internal module. Import from `ovh_sms` instead.
"""

import hashlib
import json as jsonlib
import logging
import time
from typing import Any, Literal

import httpx

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

logger = logging.getLogger(__name__)


# HTTP methods supported by the client
HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Named OVH API endpoints
ENDPOINTS = {
    "ovh-eu": "https://eu.api.ovh.com/1.0",
    "ovh-ca": "https://ca.api.ovh.com/1.0",
    "ovh-us": "https://api.us.ovhcloud.com/1.0",
    "kimsufi-eu": "https://eu.api.kimsufi.com/1.0",
    "kimsufi-ca": "https://ca.api.kimsufi.com/1.0",
    "soyoustart-eu": "https://eu.api.soyoustart.com/1.0",
    "soyoustart-ca": "https://ca.api.soyoustart.com/1.0",
}

DEFAULT_TIMEOUT = 30.0

# 403 error codes that mean the credentials themselves are wrong
AUTHENTICATION_ERROR_CODES = {"INVALID_KEY", "INVALID_CREDENTIAL", "NOT_CREDENTIAL"}


def resolve_endpoint(endpoint: str | None) -> str:
    """Turn an endpoint name or URL into an API base URL.

    Args:
        endpoint: An OVH endpoint name (e.g. "ovh-eu") or an absolute
            http(s) URL.

    Returns:
        The base URL without trailing slash.

    Raises:
        InvalidParameterException: If the endpoint is empty or unknown.
    """
    if not endpoint:
        raise InvalidParameterException("Endpoint parameter is empty")
    if endpoint in ENDPOINTS:
        return ENDPOINTS[endpoint]
    if endpoint.startswith(("http://", "https://")):
        return endpoint.rstrip("/")
    raise InvalidParameterException(
        f"Endpoint parameter is not a known endpoint name or URL: {endpoint}"
    )


def sign_request(
    application_secret: str,
    consumer_key: str,
    method: str,
    url: str,
    body: str,
    timestamp: int,
) -> str:
    """Compute the X-Ovh-Signature header value for a request.

    The signature is the SHA1 hex digest of the secret, consumer key, method,
    full URL, body and timestamp joined with "+", prefixed with "$1$".
    """
    raw = "+".join([application_secret, consumer_key, method, url, body, str(timestamp)])
    return "$1$" + hashlib.sha1(raw.encode("utf-8")).hexdigest()


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None]:
    """Parse an error response to extract the message and OVH error code.

    OVH answers errors with ``{"message": ..., "errorCode": ...}``. Falls
    back to the raw response text if the body isn't JSON.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_code).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return text, None
        return f"HTTP {response.status_code} error", None

    if isinstance(body, dict):
        if "message" in body:
            return str(body["message"]), body.get("errorCode")
        if "errorCode" in body:
            return str(body["errorCode"]), body["errorCode"]

    return str(body), None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise an appropriate exception for error status codes.

    Args:
        response: The HTTP response to check.

    Raises:
        BadParametersError: For HTTP 400 responses.
        AuthenticationError: For HTTP 401 and credential-related 403 responses.
        NotGrantedCallError: For other HTTP 403 responses.
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    message, error_code = _parse_error_response(response)
    status_code = response.status_code
    query_id = response.headers.get("X-Ovh-QueryID")

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    common = {
        "error_code": error_code,
        "query_id": query_id,
        "response_body": response_body,
    }

    if status_code == 400:
        raise BadParametersError(message=message, **common)
    elif status_code == 401:
        raise AuthenticationError(message=message, status_code=401, **common)
    elif status_code == 403:
        if error_code in AUTHENTICATION_ERROR_CODES:
            raise AuthenticationError(message=message, status_code=403, **common)
        raise NotGrantedCallError(message=message, **common)
    elif status_code == 404:
        raise NotFoundError(message=message, **common)
    elif status_code == 409:
        raise ConflictError(message=message, **common)
    elif status_code >= 500:
        raise ServerError(message=message, status_code=status_code, **common)
    else:
        raise APIError(message=message, status_code=status_code, **common)


class SignedHTTPClient:
    """Synchronous HTTP client for signed OVH API requests.

    Wraps httpx.Client with request signing, clock synchronisation and
    error handling.

    Attributes:
        base_url: The base URL for all API requests.
        application_key: The OVH application key.
        consumer_key: The OVH consumer key authorising the calls.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        application_key: str | None,
        application_secret: str | None,
        endpoint: str | None,
        consumer_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            application_key: The OVH application key.
            application_secret: The OVH application secret.
            endpoint: An OVH endpoint name or API base URL.
            consumer_key: The OVH consumer key.
            timeout: Request timeout in seconds.
            client: An existing httpx.Client to send requests with. It is
                left open by close().
            transport: Custom transport (e.g., MockTransport for testing).

        Raises:
            InvalidParameterException: If the endpoint is empty or unknown.
        """
        self.base_url = resolve_endpoint(endpoint)
        self.application_key = application_key
        self._application_secret = application_secret
        self.consumer_key = consumer_key
        self.timeout = timeout
        self._time_delta: int | None = None

        self._owns_client = client is None
        if client is None:
            client = httpx.Client(timeout=timeout, transport=transport)
        self._client = client

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SignedHTTPClient":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close client."""
        self.close()

    @property
    def time_delta(self) -> int:
        """Seconds between the OVH server clock and the local clock.

        Fetched from /auth/time on first use and cached afterwards.
        """
        if self._time_delta is None:
            server_time = self.call("GET", "/auth/time", need_auth=False)
            self._time_delta = int(server_time) - int(time.time())
            logger.debug("OVH clock delta is %s seconds", self._time_delta)
        return self._time_delta

    def call(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        need_auth: bool = True,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        Args:
            method: The HTTP method (GET, POST, etc.).
            path: The URL path (will be appended to base_url).
            params: Query parameters to include in the URL.
            json: JSON body to send with the request.
            need_auth: Whether the request must be signed.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            InvalidParameterException: If signing credentials are missing.
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        url = f"{self.base_url}{path}"

        # Filter out None values from params
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        headers = {"X-Ovh-Application": self.application_key or ""}
        body = ""
        if json is not None:
            # Serialized once so the signed body is the body sent
            body = jsonlib.dumps(json, separators=(",", ":"))
            headers["Content-Type"] = "application/json"

        request = self._client.build_request(
            method,
            url,
            params=params or None,
            content=body or None,
            headers=headers,
        )

        if need_auth:
            if not self._application_secret:
                raise InvalidParameterException("Application secret parameter is empty")
            if not self.consumer_key:
                raise InvalidParameterException("Consumer key parameter is empty")
            timestamp = int(time.time()) + self.time_delta
            request.headers["X-Ovh-Consumer"] = self.consumer_key
            request.headers["X-Ovh-Timestamp"] = str(timestamp)
            request.headers["X-Ovh-Signature"] = sign_request(
                self._application_secret,
                self.consumer_key,
                method,
                str(request.url),
                body,
                timestamp,
            )

        logger.debug("%s %s", method, path)
        try:
            response = self._client.send(request)
        except httpx.ConnectError as e:
            raise ConnectionError(
                message=f"Failed to connect to {url}",
                url=url,
                cause=e,
            ) from e
        except httpx.TimeoutException as e:
            raise TimeoutError(
                message=f"Request to {url} timed out",
                timeout=self.timeout,
                url=url,
            ) from e

        _raise_for_status(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                message="Failed to decode API response",
                status_code=response.status_code,
                query_id=response.headers.get("X-Ovh-QueryID"),
                response_body=response.text,
            ) from e

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a signed GET request."""
        return self.call("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a signed POST request."""
        return self.call("POST", path, params=params, json=json)

    def put(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a signed PUT request."""
        return self.call("PUT", path, params=params, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a signed DELETE request."""
        return self.call("DELETE", path, params=params)
