"""Outbound message builders.

This module provides Message and MessageForResponse, the objects returned by
``SmsApi.create_message()``. Every setter validates its argument and raises
InvalidParameterException immediately, so a Message is always in a sendable
shape apart from its receivers and text.

This is an internal module. Import from `ovh_sms` instead.
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Literal

from ovh_sms._base import BaseResource
from ovh_sms.exceptions import InvalidParameterException
from ovh_sms.models import SendResult

if TYPE_CHECKING:
    from ovh_sms.client import SmsApi

logger = logging.getLogger(__name__)


Priority = Literal["high", "low", "medium", "veryLow"]
MessageClass = Literal["flash", "phoneDisplay", "sim", "toolkit"]
Coding = Literal["7bit", "8bit"]

PRIORITIES = ("high", "low", "medium", "veryLow")
MESSAGE_CLASSES = ("flash", "phoneDisplay", "sim", "toolkit")
CODINGS = ("7bit", "8bit")

DEFAULT_VALIDITY_PERIOD = 2880  # minutes
MAX_TAG_LENGTH = 128

PHONE_NUMBER_PATTERN = re.compile(r"\+[0-9]+")


def is_international_number(value: Any) -> bool:
    """Return True if value is a "+" followed by digits only."""
    return isinstance(value, str) and PHONE_NUMBER_PATTERN.fullmatch(value) is not None


class Message(BaseResource):
    """An SMS to be sent through the OVH API.

    Example:
        with SmsApi(app_key, app_secret, "ovh-eu", consumer_key) as api:
            api.set_account("sms-ab12345-1")
            message = api.create_message()
            message.set_sender("MyCompany")
            message.add_receiver("+33612345678")
            message.set_text("Your parcel has shipped")
            result = message.send()
            print(result.ids)
    """

    is_response_message = False

    def __init__(self, sms_api: "SmsApi") -> None:
        super().__init__(sms_api)
        self._sender: str | None = None
        self._receivers: list[str] = []
        self._text: str | None = None
        self._copy_to_sender = False
        self._priority: Priority = "high"
        self._class: MessageClass = "phoneDisplay"
        self._coding: Coding = "7bit"
        self._delivery_date: datetime | None = None
        self._validity_period = DEFAULT_VALIDITY_PERIOD
        self._tag: str | None = None
        self._no_stop_clause = False

    # Sender

    def set_sender(self, sender: str) -> None:
        """Set the sender the message appears to come from.

        The sender must already be registered on the account; OVH checks
        that when the message is sent.
        """
        if not sender:
            raise InvalidParameterException("Sender parameter is empty")
        self._sender = sender

    def get_sender(self) -> str | None:
        return self._sender

    # Receivers

    def add_receiver(self, phone_number: str) -> None:
        """Add a receiver in international format (e.g. "+33612345678").

        Raises:
            InvalidParameterException: If the number isn't in international
                format or was already added.
        """
        if not is_international_number(phone_number):
            raise InvalidParameterException(
                "Receiver parameter must be a valid international phone number"
            )
        if phone_number in self._receivers:
            raise InvalidParameterException(
                "Receiver parameter has already been added to the receivers of this message"
            )
        self._receivers.append(phone_number)

    def remove_receiver(self, phone_number: str) -> None:
        if phone_number not in self._receivers:
            raise InvalidParameterException(
                "Receiver parameter is not in the receivers of this message"
            )
        self._receivers.remove(phone_number)

    def get_receivers(self) -> list[str]:
        """Return the receivers in the order they were added."""
        return list(self._receivers)

    # Content

    def set_text(self, text: str) -> None:
        if not text:
            raise InvalidParameterException("Text parameter is empty")
        self._text = text

    def get_text(self) -> str | None:
        return self._text

    # Scheduling

    def set_delivery_date(self, date: datetime) -> None:
        """Schedule the message for later delivery.

        Naive datetimes are compared with local time, aware ones with UTC.

        Raises:
            InvalidParameterException: If date is not a datetime or is not
                strictly in the future.
        """
        if not isinstance(date, datetime):
            raise InvalidParameterException("Date parameter must be a datetime")
        if date <= _now_like(date):
            raise InvalidParameterException("Date parameter can't be in the past")
        self._delivery_date = date

    def get_delivery_date(self) -> datetime | None:
        return self._delivery_date

    def set_validity_period(self, minutes: int) -> None:
        """Set how long, in minutes, the operator keeps trying to deliver."""
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
            raise InvalidParameterException(
                "Validity period parameter must be a positive number of minutes"
            )
        self._validity_period = minutes

    def get_validity_period(self) -> int:
        return self._validity_period

    # Delivery options

    def set_priority(self, priority: Priority) -> None:
        if priority not in PRIORITIES:
            raise InvalidParameterException(
                f"Priority parameter must be one of {', '.join(PRIORITIES)}"
            )
        self._priority = priority

    def get_priority(self) -> Priority:
        return self._priority

    def set_class(self, message_class: MessageClass) -> None:
        """Set the SMS class ("flash" messages are displayed, not stored)."""
        if message_class not in MESSAGE_CLASSES:
            raise InvalidParameterException(
                f"Class parameter must be one of {', '.join(MESSAGE_CLASSES)}"
            )
        self._class = message_class

    def get_class(self) -> MessageClass:
        return self._class

    def set_coding(self, coding: Coding) -> None:
        if coding not in CODINGS:
            raise InvalidParameterException(
                f"Coding parameter must be one of {', '.join(CODINGS)}"
            )
        self._coding = coding

    def get_coding(self) -> Coding:
        return self._coding

    def set_tag(self, tag: str) -> None:
        if not tag:
            raise InvalidParameterException("Tag parameter is empty")
        if len(tag) > MAX_TAG_LENGTH:
            raise InvalidParameterException(
                f"Tag parameter can't be longer than {MAX_TAG_LENGTH} characters"
            )
        self._tag = tag

    def get_tag(self) -> str | None:
        return self._tag

    def set_no_stop_clause(self, enabled: bool) -> None:
        """Omit the "STOP" opt-out clause (non-marketing messages only)."""
        self._no_stop_clause = bool(enabled)

    def is_no_stop_clause(self) -> bool:
        return self._no_stop_clause

    def set_copy_to_sender(self, enabled: bool) -> None:
        """Also deliver the message to the sender's own number."""
        self._copy_to_sender = bool(enabled)

    def is_copy_to_sender_enabled(self) -> bool:
        return self._copy_to_sender

    # Sending

    def to_payload(self) -> dict[str, Any]:
        """Build the request body for POST /sms/{account}/jobs.

        Raises:
            InvalidParameterException: If a copy to the sender is requested
                but the sender isn't a phone number.
        """
        receivers = list(self._receivers)
        if self._copy_to_sender and self._sender is not None:
            if not is_international_number(self._sender):
                raise InvalidParameterException(
                    "Sender must be a valid international phone number to receive a copy"
                )
            if self._sender not in receivers:
                receivers.append(self._sender)

        payload: dict[str, Any] = {
            "message": self._text,
            "receivers": receivers,
            "priority": self._priority,
            "class": self._class,
            "coding": self._coding,
            "validityPeriod": self._validity_period,
            "noStopClause": self._no_stop_clause,
            "senderForResponse": self.is_response_message,
        }

        if self._sender is not None:
            payload["sender"] = self._sender
        if self._tag is not None:
            payload["tag"] = self._tag
        if self._delivery_date is not None:
            payload["differedPeriod"] = _minutes_until(self._delivery_date)

        return payload

    def send(self) -> SendResult:
        """Create the SMS job on the current account.

        Returns:
            The job ids and the receivers OVH accepted or rejected.

        Raises:
            InvalidParameterException: If no account is selected, or the
                message has no receivers or no text.
            APIError: If OVH rejects the request.
        """
        path = self._sms_api._account_path("/jobs")
        if not self._receivers:
            raise InvalidParameterException("Message has no receivers")
        if not self._text:
            raise InvalidParameterException("Text parameter is empty")

        data = self._post(path, json=self.to_payload())
        result = SendResult.model_validate(data or {})

        logger.info(
            "Sent SMS to %d receiver(s) on %s, job ids: %s",
            len(result.valid_receivers),
            self._sms_api.get_account(),
            result.ids,
        )
        if result.invalid_receivers:
            logger.warning("OVH rejected receivers: %s", ", ".join(result.invalid_receivers))
        return result


class MessageForResponse(Message):
    """An SMS the receiver can answer.

    OVH picks a sender that supports replies, so no explicit sender can be
    set on this kind of message.
    """

    is_response_message = True

    def set_sender(self, sender: str) -> None:
        raise InvalidParameterException("Sender is incompatible with message for response")


def _now_like(date: datetime) -> datetime:
    if date.tzinfo is None:
        return datetime.now()
    return datetime.now(timezone.utc)


def _minutes_until(date: datetime) -> int:
    seconds = (date - _now_like(date)).total_seconds()
    return max(1, math.ceil(seconds / 60))
