# =============================================================================
# File: membership/infra/read_repos/user_account_read_repo.py
# Description: In-memory account store implementing UserAccountRepositoryPort
# =============================================================================

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Optional

from membership.user_account.exceptions import UserAccountNotFoundError
from membership.user_account.read_models import UserAccount

log = logging.getLogger("membership.read_repos.user_account")


class InMemoryUserAccountRepository:
    """
    Thread-safe in-memory account store.

    Copies go in and out, so callers never share a mutable record with the
    store. Every verification key ever issued to an account stays indexed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accounts: Dict[uuid.UUID, UserAccount] = {}
        self._keys: Dict[str, uuid.UUID] = {}

    def get_by_id(self, account_id: uuid.UUID) -> Optional[UserAccount]:
        with self._lock:
            account = self._accounts.get(account_id)
            return account.snapshot() if account else None

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        wanted = username.strip().lower()
        with self._lock:
            for account in self._accounts.values():
                if account.username.lower() == wanted:
                    return account.snapshot()
        return None

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        wanted = email.strip().lower()
        with self._lock:
            for account in self._accounts.values():
                if account.email.lower() == wanted:
                    return account.snapshot()
        return None

    def get_by_verification_key(self, key: str) -> Optional[UserAccount]:
        with self._lock:
            account_id = self._keys.get(key)
            if account_id is None:
                return None
            account = self._accounts.get(account_id)
            return account.snapshot() if account else None

    def add(self, account: UserAccount) -> None:
        with self._lock:
            if account.account_id in self._accounts:
                raise ValueError(f"Account {account.account_id} already stored")
            self._store(account)
        log.debug(f"Account added: {account.account_id}")

    def update(self, account: UserAccount) -> None:
        with self._lock:
            if account.account_id not in self._accounts:
                raise UserAccountNotFoundError(f"Account {account.account_id} not found")
            self._store(account)

    def _store(self, account: UserAccount) -> None:
        self._accounts[account.account_id] = account.snapshot()
        if account.verification_key:
            self._keys[account.verification_key] = account.account_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)
