"""Response models for the OVH SMS client.

OVH answers in camelCase JSON; these models expose snake_case attributes
and accept both spellings on input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "SendResult",
    "SmsProperties",
]


class SendResult(BaseModel):
    """Response model for message creation (POST /sms/{account}/jobs).

    Attributes:
        ids: Job identifiers, one per accepted receiver.
        valid_receivers: Receivers OVH accepted.
        invalid_receivers: Receivers OVH rejected.
        total_credits_removed: SMS credits charged for the job.
        tag: Tag attached to the message, if any.
    """

    model_config = ConfigDict(populate_by_name=True)

    ids: list[int] = Field(default_factory=list, description="Created job ids")
    valid_receivers: list[str] = Field(
        default_factory=list,
        alias="validReceivers",
        description="Receivers accepted by OVH",
    )
    invalid_receivers: list[str] = Field(
        default_factory=list,
        alias="invalidReceivers",
        description="Receivers rejected by OVH",
    )
    total_credits_removed: float = Field(
        0,
        alias="totalCreditsRemoved",
        description="Credits charged",
    )
    tag: str | None = Field(None, description="Message tag")


class SmsProperties(BaseModel):
    """Properties of an incoming, outgoing or planned SMS.

    The three OVH resources share most fields; those a given type doesn't
    return are left as None.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Message id")
    creation_datetime: datetime | None = Field(None, alias="creationDatetime")
    sender: str | None = None
    receiver: str | None = None
    text: str | None = Field(None, alias="message")
    tag: str | None = None
    credits: float | None = None
    delivery_receipt: int | None = Field(None, alias="deliveryReceipt")
    ptt: int | None = None
    differed_delivery: int | None = Field(None, alias="differedDelivery")
    message_length: int | None = Field(None, alias="messageLength")
