"""Main OVH SMS client class.

This module provides SmsApi, the entry point for the OVH SMS REST API. It
owns the signed connection, remembers which SMS account is selected, and
creates the Message and Sms objects that share that connection.

Example:
    Sending a message::

        from ovh_sms import SmsApi

        with SmsApi(app_key, app_secret, "ovh-eu", consumer_key) as api:
            api.set_account(api.get_accounts()[0])
            message = api.create_message()
            message.add_receiver("+33612345678")
            message.set_text("Hello")
            message.send()

    Building from the environment::

        api = SmsApi.from_settings()
"""

import logging
from datetime import datetime
from typing import Any

import httpx

from ovh_sms._http import DEFAULT_TIMEOUT, SignedHTTPClient
from ovh_sms._message import Message, MessageForResponse
from ovh_sms._sms import Sms
from ovh_sms.config import Settings, get_settings
from ovh_sms.exceptions import InvalidParameterException

logger = logging.getLogger(__name__)


class SmsApi:
    """Client for the OVH SMS REST API.

    Attributes:
        application_key: The OVH application key.
        endpoint: The endpoint name or URL given at construction.
        consumer_key: The OVH consumer key.
        current_account: The selected SMS account, or None.
    """

    def __init__(
        self,
        application_key: str | None,
        application_secret: str | None,
        endpoint: str | None,
        consumer_key: str | None,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            application_key: The OVH application key.
            application_secret: The OVH application secret.
            endpoint: An OVH endpoint name (e.g. "ovh-eu") or API base URL.
            consumer_key: The OVH consumer key.
            client: An existing httpx.Client to reuse for requests.
            timeout: Request timeout in seconds (default: 30.0).
            transport: Custom HTTP transport (e.g., MockTransport for testing).

        Raises:
            InvalidParameterException: If the endpoint is empty or unknown.
        """
        if not endpoint:
            raise InvalidParameterException("Endpoint parameter is empty")

        self.application_key = application_key
        self.endpoint = endpoint
        self.consumer_key = consumer_key
        self.current_account: str | None = None

        self._connection = SignedHTTPClient(
            application_key=application_key,
            application_secret=application_secret,
            endpoint=endpoint,
            consumer_key=consumer_key,
            timeout=timeout,
            client=client,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> "SmsApi":
        """Build a client from environment settings.

        Selects ``settings.account`` when it is set.
        """
        if settings is None:
            settings = get_settings()
        api = cls(
            settings.application_key,
            settings.application_secret,
            settings.endpoint,
            settings.consumer_key,
            client=client,
            timeout=settings.timeout,
        )
        if settings.account:
            api.set_account(settings.account)
        return api

    def __enter__(self) -> "SmsApi":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close the connection."""
        self.close()

    def close(self) -> None:
        """Close the connection and release resources."""
        self._connection.close()

    def get_connection(self) -> SignedHTTPClient:
        """Return the signed connection shared by every object of this client."""
        return self._connection

    # Account selection

    def set_account(self, account: str) -> None:
        """Select the SMS account used by account-scoped calls."""
        if not account:
            raise InvalidParameterException("Account parameter is empty")
        self.current_account = account
        logger.info("Selected SMS account %s", account)

    def get_account(self) -> str | None:
        return self.current_account

    def _account_path(self, suffix: str = "") -> str:
        if not self.current_account:
            raise InvalidParameterException("Please set account before using this function")
        return f"/sms/{self.current_account}{suffix}"

    def get_accounts(self) -> list[str]:
        """List the SMS accounts the consumer key can access."""
        return self._connection.get("/sms")

    # Senders

    def get_senders(self) -> list[str]:
        """List the senders registered on the current account."""
        return self._connection.get(self._account_path("/senders"))

    def add_sender(self, sender: str, reason: str, description: str = "") -> Any:
        """Ask OVH to register a new sender on the current account.

        Args:
            sender: The sender name or number to register.
            reason: Why the sender is needed (reviewed by OVH).
            description: Optional free-form description.

        Raises:
            InvalidParameterException: If no account is selected, or sender
                or reason is empty.
            APIError: If OVH rejects the request.
        """
        path = self._account_path("/senders")
        if not sender:
            raise InvalidParameterException("Sender parameter is empty")
        if not reason:
            raise InvalidParameterException("Reason parameter is empty")

        result = self._connection.post(
            path,
            json={"sender": sender, "reason": reason, "description": description},
        )
        logger.info("Requested sender %s on account %s", sender, self.current_account)
        return result

    # Messages

    def create_message(self, for_response: bool = False) -> Message:
        """Create a new outbound message bound to this client.

        Args:
            for_response: Create a MessageForResponse, which the receiver
                can reply to.
        """
        if for_response:
            return MessageForResponse(self)
        return Message(self)

    def get_outgoing_messages(
        self,
        sender: str | None = None,
        receiver: str | None = None,
        tag: str | None = None,
        date_start: datetime | None = None,
        date_end: datetime | None = None,
    ) -> list[Sms]:
        """List sent messages on the current account, optionally filtered."""
        params = {
            "sender": sender,
            "receiver": receiver,
            "tag": tag,
            "creationDatetime.from": date_start.isoformat() if date_start else None,
            "creationDatetime.to": date_end.isoformat() if date_end else None,
        }
        ids = self._connection.get(self._account_path("/outgoing"), params=params)
        return [Sms(self, "outgoing", sms_id) for sms_id in ids or []]

    def get_incoming_messages(
        self,
        sender: str | None = None,
        tag: str | None = None,
        date_start: datetime | None = None,
        date_end: datetime | None = None,
    ) -> list[Sms]:
        """List received messages on the current account, optionally filtered."""
        params = {
            "sender": sender,
            "tag": tag,
            "creationDatetime.from": date_start.isoformat() if date_start else None,
            "creationDatetime.to": date_end.isoformat() if date_end else None,
        }
        ids = self._connection.get(self._account_path("/incoming"), params=params)
        return [Sms(self, "incoming", sms_id) for sms_id in ids or []]

    def get_planned_messages(self) -> list[Sms]:
        """List messages scheduled but not sent yet."""
        ids = self._connection.get(self._account_path("/jobs"))
        return [Sms(self, "planned", sms_id) for sms_id in ids or []]
