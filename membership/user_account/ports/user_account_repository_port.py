# =============================================================================
# File: membership/user_account/ports/user_account_repository_port.py
# Description: Port interface for account record storage
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

import uuid
from typing import Optional, Protocol, runtime_checkable

from membership.user_account.read_models import UserAccount


@runtime_checkable
class UserAccountRepositoryPort(Protocol):
    """
    Port: Account Storage

    Defined by: UserAccount Domain
    Implemented by: InMemoryUserAccountRepository
        (membership/infra/read_repos/user_account_read_repo.py)

    Lookups by username and email are case-insensitive. A verification key
    stays resolvable after its purpose is cleared, so repeated cancellations
    can be told apart from unknown keys.
    """

    def get_by_id(self, account_id: uuid.UUID) -> Optional[UserAccount]:
        ...

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        ...

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        ...

    def get_by_verification_key(self, key: str) -> Optional[UserAccount]:
        ...

    def add(self, account: UserAccount) -> None:
        """Store a new account. Raises ValueError if the id already exists."""
        ...

    def update(self, account: UserAccount) -> None:
        """Replace the stored copy. Raises UserAccountNotFoundError if missing."""
        ...
