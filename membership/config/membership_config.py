# =============================================================================
# File: membership/config/membership_config.py
# Description: Account service behaviour switches
# =============================================================================

from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from membership.common.base.base_config import BaseConfig


class MembershipConfig(BaseConfig):
    """Account lifecycle settings (MEMBERSHIP_ prefix)."""

    model_config = SettingsConfigDict(env_prefix="MEMBERSHIP_")

    require_account_verification: bool = Field(
        default=True,
        description="New accounts must confirm their email before they are considered verified",
    )
    verification_key_bytes: int = Field(
        default=24, ge=16, le=64,
        description="Entropy (bytes) of generated verification keys",
    )
    email_is_username: bool = Field(
        default=False,
        description="Use the email address as the username",
    )


@lru_cache(maxsize=1)
def get_membership_config() -> MembershipConfig:
    """Get membership configuration singleton."""
    return MembershipConfig()
