# =============================================================================
# File: membership/config/smtp_config.py
# Description: SMTP transport configuration (default delivery for notifications)
# =============================================================================

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from membership.common.base.base_config import BaseConfig


class SmtpConfig(BaseConfig):
    """
    SMTP server settings.

    Environment:
        SMTP_HOST, SMTP_PORT, SMTP_USERNAME, SMTP_PASSWORD,
        SMTP_USE_TLS, SMTP_USE_SSL, SMTP_TIMEOUT_SECONDS,
        SMTP_FROM_EMAIL, SMTP_FROM_NAME
    """

    model_config = SettingsConfigDict(env_prefix="SMTP_")

    host: Optional[str] = Field(default=None, description="SMTP server hostname")
    port: int = Field(default=587, description="SMTP server port")
    username: Optional[str] = Field(default=None, description="SMTP auth username")
    password: Optional[SecretStr] = Field(default=None, description="SMTP auth password")
    use_tls: bool = Field(default=True, description="Issue STARTTLS after connecting")
    use_ssl: bool = Field(default=False, description="Connect with implicit TLS (port 465)")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Socket timeout per send")
    from_email: str = Field(default="noreply@example.com", description="Default sender address")
    from_name: Optional[str] = Field(default="Membership", description="Default sender display name")

    @property
    def is_configured(self) -> bool:
        return bool(self.host)


@lru_cache(maxsize=1)
def get_smtp_config() -> SmtpConfig:
    """Get SMTP configuration singleton."""
    return SmtpConfig()
