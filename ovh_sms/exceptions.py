"""Exception hierarchy for the OVH SMS client.

This module defines all exceptions that can be raised by the ovh_sms library.
The hierarchy is designed to allow catching specific error types or broader
categories as needed.

Exception Hierarchy:
    OvhSmsError (base)
    ├── InvalidParameterException - Client-side parameter validation
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - OVH returned an error response
        ├── BadParametersError (HTTP 400)
        ├── AuthenticationError (HTTP 401, invalid key/credential)
        ├── NotGrantedCallError (HTTP 403)
        ├── NotFoundError (HTTP 404)
        ├── ConflictError (HTTP 409)
        └── ServerError (HTTP 5xx)

Example:
    Catching validation errors::

        try:
            message.add_receiver("0612345678")
        except InvalidParameterException as e:
            print(f"Invalid receiver: {e.message}")

    Catching all API errors::

        try:
            message.send()
        except APIError as e:
            print(f"API error {e.status_code}: {e.message}")
"""

from typing import Any


class OvhSmsError(Exception):
    """Base exception for all ovh_sms errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class InvalidParameterException(OvhSmsError):
    """A parameter given to the SDK failed client-side validation.

    Raised synchronously by constructors and setters before any request
    is made. The message is fixed per rule so callers can match on it.
    """


class ConnectionError(OvhSmsError):
    """Failed to connect to the OVH API.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            url: The URL that failed to connect.
            cause: The underlying exception that caused the failure.
        """
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including URL if available."""
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(OvhSmsError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including timeout if available."""
        extras = []
        if self.timeout is not None:
            extras.append(f"timeout: {self.timeout}s")
        if self.url:
            extras.append(f"url: {self.url}")
        if not extras:
            return self.message
        return f"{self.message} ({', '.join(extras)})"


class APIError(OvhSmsError):
    """OVH returned an error response.

    Base class for all API-level errors, raised when the server answers
    with an HTTP error status code (4xx or 5xx).

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the server.
        error_code: OVH ``errorCode`` from the response body (if available).
        query_id: OVH ``X-Ovh-QueryID`` header, useful for support requests.
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str | None = None,
        query_id: str | None = None,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from the server.
            error_code: OVH error code from the response body.
            query_id: OVH query identifier from the response headers.
            response_body: Raw response body for debugging.
        """
        self.status_code = status_code
        self.error_code = error_code
        self.query_id = query_id
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including status code."""
        base = f"[HTTP {self.status_code}] {self.message}"
        if self.error_code:
            base = f"[HTTP {self.status_code}] [{self.error_code}] {self.message}"
        if self.query_id:
            base = f"{base} (OVH-Query-ID: {self.query_id})"
        return base


class BadParametersError(APIError):
    """OVH rejected the request parameters (HTTP 400)."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        query_id: str | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            query_id=query_id,
            response_body=response_body,
        )


class AuthenticationError(APIError):
    """Application key or consumer key is missing, invalid or expired.

    Raised for HTTP 401, and for HTTP 403 responses whose error code is
    ``INVALID_KEY``, ``INVALID_CREDENTIAL`` or ``NOT_CREDENTIAL``.
    """


class NotGrantedCallError(APIError):
    """The consumer key is valid but not allowed to call this route (HTTP 403)."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        query_id: str | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code=error_code,
            query_id=query_id,
            response_body=response_body,
        )


class NotFoundError(APIError):
    """Resource not found (HTTP 404).

    Raised when the account, sender or message doesn't exist.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        query_id: str | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            error_code=error_code,
            query_id=query_id,
            response_body=response_body,
        )


class ConflictError(APIError):
    """State conflict (HTTP 409), e.g. registering a sender twice."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        query_id: str | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code=error_code,
            query_id=query_id,
            response_body=response_body,
        )


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    These errors are not recoverable by the client and are never retried.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str | None = None,
        query_id: str | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
            query_id=query_id,
            response_body=response_body,
        )
