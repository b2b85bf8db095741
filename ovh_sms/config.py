"""Environment configuration for the OVH SMS client.

Nothing in the library reads the environment implicitly; only
``SmsApi.from_settings`` does.
"""

import os
from functools import lru_cache

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Credentials and defaults read from the environment.

    Attributes:
        application_key: OVH application key (APP_KEY).
        application_secret: OVH application secret (APP_SECRET).
        consumer_key: OVH consumer key (CONSUMER).
        endpoint: OVH endpoint name or URL (ENDPOINT).
        account: SMS account selected on creation (OVH_SMS_ACCOUNT).
        timeout: HTTP timeout in seconds (OVH_SMS_TIMEOUT).
    """

    application_key: str | None = Field(default_factory=lambda: os.getenv("APP_KEY"))
    application_secret: str | None = Field(default_factory=lambda: os.getenv("APP_SECRET"))
    consumer_key: str | None = Field(default_factory=lambda: os.getenv("CONSUMER"))
    endpoint: str = Field(default_factory=lambda: os.getenv("ENDPOINT") or "ovh-eu")
    account: str | None = Field(default_factory=lambda: os.getenv("OVH_SMS_ACCOUNT") or None)
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("OVH_SMS_TIMEOUT", "30")),
        gt=0,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
