# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING

from authledger.domain.entities import Account
from authledger.shared.logging import logger

if TYPE_CHECKING:
    from authledger.infrastructure.stores import KeyStore, UserStore


class RegisterAccountUseCase:
    def __init__(self, *, users: UserStore, keys: KeyStore) -> None:
        self._users = users
        self._keys = keys

    def execute(self, name: str, password: str, *, issue_key: bool = False) -> tuple[Account, str | None]:
        account = self._users.add_user(name, password)
        token = self._keys.issue(name) if issue_key else None
        return account, token


class DeleteAccountUseCase:
    """Remove an account; outstanding keys survive unless ``revoke_sessions`` is set."""

    def __init__(self, *, users: UserStore, keys: KeyStore, revoke_sessions: bool = False) -> None:
        self._users = users
        self._keys = keys
        self._revoke_sessions = revoke_sessions

    def execute(self, name: str) -> int:
        self._users.delete_user(name)
        if not self._revoke_sessions:
            return 0
        revoked = self._keys.revoke_owner(name)
        logger.info(f"accounts: deleted name={name} revoked_keys={revoked}")
        return revoked
