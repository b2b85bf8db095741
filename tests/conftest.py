"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import MagicMock

import pytest

# Load environment variables from .env file at test startup
# so APP_KEY / APP_SECRET / CONSUMER / ENDPOINT can come from there
from dotenv import load_dotenv
load_dotenv()

from ovh_sms import SignedHTTPClient, SmsApi


@pytest.fixture
def credentials() -> dict[str, str]:
    """SmsApi constructor arguments, from the environment when available.

    Unit tests never reach the network, so dummy values are enough.
    """
    return {
        "application_key": os.getenv("APP_KEY") or "test-application-key",
        "application_secret": os.getenv("APP_SECRET") or "test-application-secret",
        "endpoint": os.getenv("ENDPOINT") or "ovh-eu",
        "consumer_key": os.getenv("CONSUMER") or "test-consumer-key",
    }


@pytest.fixture
def sms_api(credentials: dict[str, str]):
    """An SmsApi with no account selected."""
    api = SmsApi(**credentials)
    yield api
    api.close()


@pytest.fixture
def mock_connection(sms_api: SmsApi) -> MagicMock:
    """Replace the SmsApi connection with a mock and return the mock."""
    sms_api.get_connection().close()
    connection = MagicMock(spec=SignedHTTPClient)
    sms_api._connection = connection
    return connection


@pytest.fixture
def account_api(sms_api: SmsApi, mock_connection: MagicMock) -> SmsApi:
    """An SmsApi with a mocked connection and an account selected."""
    sms_api.set_account("sms-ab12345-1")
    return sms_api
