"""Base class for objects bound to an SmsApi.

Message, MessageForResponse and Sms all hold a reference to the SmsApi that
created them and issue their requests through its shared connection. This
module provides the common validation of that reference and the request
helpers.

This is an internal module. Import from `ovh_sms` instead.
"""

from typing import TYPE_CHECKING, Any

from ovh_sms.exceptions import InvalidParameterException

if TYPE_CHECKING:
    from ovh_sms._http import SignedHTTPClient
    from ovh_sms.client import SmsApi


class BaseResource:
    """Base class for SmsApi-bound resources.

    Attributes:
        _sms_api: The owning SmsApi. Shared, never copied.
    """

    def __init__(self, sms_api: "SmsApi") -> None:
        """Initialize the resource.

        Args:
            sms_api: The SmsApi this resource belongs to.

        Raises:
            InvalidParameterException: If sms_api is empty or not an SmsApi.
        """
        from ovh_sms.client import SmsApi

        if not sms_api:
            raise InvalidParameterException("SmsApi parameter is empty")
        if not isinstance(sms_api, SmsApi):
            raise InvalidParameterException("SmsApi parameter must be a SmsApi object")
        self._sms_api = sms_api

    def get_sms_api(self) -> "SmsApi":
        """Return the owning SmsApi."""
        return self._sms_api

    @property
    def _http(self) -> "SignedHTTPClient":
        return self._sms_api.get_connection()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._http.get(path, params=params)

    def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self._http.post(path, json=json, params=params)

    def _delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._http.delete(path, params=params)
