"""Application dependency container."""

from __future__ import annotations

import time
from functools import cached_property
from pathlib import Path

from authledger.application.use_cases.accounts import DeleteAccountUseCase, RegisterAccountUseCase
from authledger.application.use_cases.sessions import LogoutUseCase, VerifyAndIssueUseCase
from authledger.domain.ports import Clock, PasswordHasher, TokenGenerator
from authledger.infrastructure.lifecycle import Registry, configure
from authledger.infrastructure.maintenance import MaintenanceWorker
from authledger.infrastructure.stores import KeyStore, UserStore
from authledger.shared.config import AuthConfig


class Container:
    def __init__(
        self,
        source: AuthConfig | str | Path | None = None,
        *,
        password_hasher: PasswordHasher | None = None,
        token_generator: TokenGenerator | None = None,
        clock: Clock = time.time,
    ) -> None:
        self._source = source
        self._password_hasher = password_hasher
        self._token_generator = token_generator
        self._clock = clock

    @cached_property
    def registry(self) -> Registry:
        return configure(
            self._source,
            password_hasher=self._password_hasher,
            token_generator=self._token_generator,
            clock=self._clock,
        )

    @property
    def users(self) -> UserStore:
        return self.registry.users

    @property
    def keys(self) -> KeyStore:
        return self.registry.keys

    @cached_property
    def verify_and_issue_use_case(self) -> VerifyAndIssueUseCase:
        return VerifyAndIssueUseCase(users=self.users, keys=self.keys)

    @cached_property
    def logout_use_case(self) -> LogoutUseCase:
        return LogoutUseCase(keys=self.keys)

    @cached_property
    def register_account_use_case(self) -> RegisterAccountUseCase:
        return RegisterAccountUseCase(users=self.users, keys=self.keys)

    @cached_property
    def delete_account_use_case(self) -> DeleteAccountUseCase:
        return DeleteAccountUseCase(
            users=self.users,
            keys=self.keys,
            revoke_sessions=self.registry.config.revoke_on_delete,
        )

    @cached_property
    def maintenance_worker(self) -> MaintenanceWorker:
        return MaintenanceWorker(self.registry)
