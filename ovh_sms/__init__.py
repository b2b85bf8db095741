"""OVH SMS API Client Library.

This module provides a Python client for composing and sending SMS through
the OVH SMS REST API: sender registration, message composition, receiver
lists, scheduled delivery, and access to incoming and outgoing messages.

Example:
    Sending a scheduled message::

        from datetime import datetime, timedelta
        from ovh_sms import SmsApi

        with SmsApi(app_key, app_secret, "ovh-eu", consumer_key) as api:
            api.set_account("sms-ab12345-1")
            message = api.create_message()
            message.set_sender("MyCompany")
            message.add_receiver("+33612345678")
            message.set_text("See you tomorrow")
            message.set_delivery_date(datetime.now() + timedelta(hours=1))
            message.send()

Exports:
    SmsApi: Client for the OVH SMS REST API.
    Message: Outbound SMS builder.
    MessageForResponse: Outbound SMS the receiver can reply to.
    Sms: An incoming, outgoing or planned SMS.
    SignedHTTPClient: The signed connection used by SmsApi.

    Exceptions:
        OvhSmsError: Base exception for all client errors.
        InvalidParameterException: Client-side parameter validation failed.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: OVH returned an error response.
        BadParametersError: Request parameters rejected (HTTP 400).
        AuthenticationError: Invalid or missing credentials.
        NotGrantedCallError: Call not allowed for this consumer key (HTTP 403).
        NotFoundError: Resource not found (HTTP 404).
        ConflictError: State conflict (HTTP 409).
        ServerError: Server-side error (HTTP 5xx).
"""

from ovh_sms._http import ENDPOINTS, SignedHTTPClient
from ovh_sms._message import Message, MessageForResponse
from ovh_sms._sms import Sms
from ovh_sms.client import SmsApi
from ovh_sms.config import Settings, get_settings
from ovh_sms.exceptions import (
    APIError,
    AuthenticationError,
    BadParametersError,
    ConflictError,
    ConnectionError,
    InvalidParameterException,
    NotFoundError,
    NotGrantedCallError,
    OvhSmsError,
    ServerError,
    TimeoutError,
)
from ovh_sms.models import SendResult, SmsProperties

__all__ = [
    # Main client
    "SmsApi",
    # Resources
    "Message",
    "MessageForResponse",
    "Sms",
    # Connection
    "ENDPOINTS",
    "SignedHTTPClient",
    # Configuration
    "Settings",
    "get_settings",
    # Response models
    "SendResult",
    "SmsProperties",
    # Exceptions
    "OvhSmsError",
    "InvalidParameterException",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "BadParametersError",
    "AuthenticationError",
    "NotGrantedCallError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
]
