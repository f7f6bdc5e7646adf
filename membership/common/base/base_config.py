# =============================================================================
# File: membership/common/base/base_config.py
# Description: Shared base for the SMTP_, NOTIFY_ and MEMBERSHIP_ settings
#              classes. Each subclass adds its env_prefix and exposes an
#              @lru_cache get_*_config() factory.
# =============================================================================

from typing import Any, Dict, Iterator, Tuple

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_MASK = "**********"


class BaseConfig(BaseSettings):
    """
    Environment-backed settings.

    Values come from the process environment or a local ``.env`` file,
    case-insensitively. Passwords are ``SecretStr`` and never printed.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def _values(self) -> Iterator[Tuple[str, Any]]:
        for field_name in type(self).model_fields:
            yield field_name, getattr(self, field_name)

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """Settings as a plain dict; secrets masked unless ``mask_secrets`` is False."""
        data = {}
        for name, value in self._values():
            if isinstance(value, SecretStr):
                value = _MASK if mask_secrets else value.get_secret_value()
            data[name] = value
        return data

    def __repr__(self) -> str:
        rendered = ", ".join(f"{name}={value!r}" for name, value in self.to_dict().items())
        return f"{type(self).__name__}({rendered})"
