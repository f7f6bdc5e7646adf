# =============================================================================
# File: membership/config/notification_config.py
# Description: Settings used when rendering account notification emails
# =============================================================================

from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from membership.common.base.base_config import BaseConfig


class NotificationConfig(BaseConfig):
    """Values injected into every rendered notification (NOTIFY_ prefix)."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_")

    application_name: str = Field(default="Membership", description="Product name shown in emails")
    application_url: str = Field(default="http://localhost:8000", description="Public base URL")
    email_signature: str = Field(default="Thanks!", description="Closing line appended to bodies")
    verify_path: str = Field(default="/user-account/verify", description="Path for verification links")
    cancel_path: str = Field(default="/user-account/cancel", description="Path for cancel links")

    def build_url(self, path: str, key: str) -> str:
        return f"{self.application_url.rstrip('/')}/{path.strip('/')}/{key}"


@lru_cache(maxsize=1)
def get_notification_config() -> NotificationConfig:
    """Get notification configuration singleton."""
    return NotificationConfig()
