"""Existing SMS resources.

This module provides Sms, a handle on a message OVH already knows about:
an incoming SMS, an outgoing SMS, or a planned (not yet sent) job.

This is an internal module. Import from `ovh_sms` instead.
"""

from typing import TYPE_CHECKING, Literal

from ovh_sms._base import BaseResource
from ovh_sms.exceptions import InvalidParameterException
from ovh_sms.models import SmsProperties

if TYPE_CHECKING:
    from ovh_sms.client import SmsApi


SmsType = Literal["incoming", "outgoing", "planned"]

# OVH resource collection for each SMS type
_COLLECTIONS = {
    "incoming": "incoming",
    "outgoing": "outgoing",
    "planned": "jobs",
}


class Sms(BaseResource):
    """An incoming, outgoing or planned SMS identified by its id.

    Example:
        for sms in api.get_incoming_messages(sender="+33612345678"):
            properties = sms.get_properties()
            print(properties.sender, properties.text)
    """

    def __init__(self, sms_api: "SmsApi", type: SmsType, id: int | str) -> None:
        """Initialize the handle.

        Args:
            sms_api: The SmsApi the message belongs to.
            type: "incoming", "outgoing" or "planned".
            id: The OVH message id.

        Raises:
            InvalidParameterException: If an argument is empty or invalid.
        """
        super().__init__(sms_api)
        if not type:
            raise InvalidParameterException("Type parameter is empty")
        if id is None or id == "":
            raise InvalidParameterException("Id parameter is empty")
        if type not in _COLLECTIONS:
            raise InvalidParameterException(
                f"Type parameter must be one of {', '.join(_COLLECTIONS)}"
            )
        self._type = type
        self._id = id

    def __repr__(self) -> str:
        return f"Sms(type={self._type!r}, id={self._id!r})"

    def get_type(self) -> SmsType:
        return self._type

    def get_id(self) -> int | str:
        return self._id

    def _path(self) -> str:
        return self._sms_api._account_path(f"/{_COLLECTIONS[self._type]}/{self._id}")

    def get_properties(self) -> SmsProperties:
        """Fetch the message details from OVH.

        Raises:
            InvalidParameterException: If no account is selected.
            NotFoundError: If the message no longer exists.
        """
        data = self._get(self._path())
        return SmsProperties.model_validate(data)

    def delete(self) -> None:
        """Delete the message (or cancel it, for a planned one)."""
        self._delete(self._path())
