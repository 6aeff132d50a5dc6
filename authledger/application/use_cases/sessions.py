# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from authledger.infrastructure.stores import KeyStore, UserStore


class VerifyAndIssueUseCase:
    """Check a password and, only on success, hand out a fresh session key."""

    def __init__(self, *, users: UserStore, keys: KeyStore) -> None:
        self._users = users
        self._keys = keys

    def execute(self, name: str, password: str) -> str:
        self._users.verify(name, password)
        return self._keys.issue(name)


class LogoutUseCase:
    def __init__(self, *, keys: KeyStore) -> None:
        self._keys = keys

    def execute(self, owner: str, token: str) -> None:
        if token:
            self._keys.revoke(owner, token)
