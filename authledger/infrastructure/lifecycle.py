# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bootstrap of the user and key stores from a configuration record.

``configure`` is not thread-safe: it must complete before any other thread
touches the stores it returns.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from pathlib import Path

from authledger.application.services import AlphabetTokenGenerator, WerkzeugPasswordHasher
from authledger.domain.ports import Clock, PasswordHasher, TokenGenerator
from authledger.infrastructure.storage import RecordFile, ensure_exists_writably
from authledger.infrastructure.stores import KeyStore, UserStore
from authledger.shared.config import AuthConfig, load_config
from authledger.shared.errors import AppError, ConfigError, PersistenceError
from authledger.shared.logging import logger


@dataclass(slots=True)
class Registry:
    config: AuthConfig
    users: UserStore
    keys: KeyStore

    def users_dirty(self) -> bool:
        return self.users.dirty

    def keys_dirty(self) -> bool:
        return self.keys.dirty

    def flush_dirty(self) -> list[str]:
        """Flush whichever stores hold unpersisted changes; returns their names."""
        flushed: list[str] = []
        if self.users_dirty():
            self.users.flush()
            flushed.append("users")
        if self.keys_dirty():
            self.keys.flush()
            flushed.append("keys")
        return flushed


def _prepare(path: Path, label: str) -> None:
    try:
        ensure_exists_writably(path)
    except PersistenceError as e:
        raise ConfigError(f"error with {label} file: {e}", path=path) from e


def configure(
    source: AuthConfig | str | Path | None = None,
    *,
    password_hasher: PasswordHasher | None = None,
    token_generator: TokenGenerator | None = None,
    clock: Clock = time.time,
) -> Registry:
    if isinstance(source, AuthConfig):
        config = source
    else:
        logger.info(f"lifecycle: configure path={source}")
        config = load_config(source)

    if config.user_file is None:
        raise ConfigError("You must configure a USER_FILE.")
    if config.key_file is None:
        raise ConfigError("You must configure a KEY_FILE.")
    if config.user_file.resolve() == config.key_file.resolve():
        raise ConfigError("USER_FILE and KEY_FILE must be different files.", path=config.user_file)

    file_lock = threading.Lock()
    with file_lock:
        _prepare(config.user_file, "user")
        _prepare(config.key_file, "key")

    users = UserStore(
        RecordFile(config.user_file, file_lock),
        password_hasher or WerkzeugPasswordHasher(config.hash_cost),
    )
    keys = KeyStore(
        RecordFile(config.key_file, file_lock),
        token_generator or AlphabetTokenGenerator(config.key_length, config.key_chars),
        lifetime=config.key_lifetime,
        clock=clock,
    )

    try:
        users.load()
    except AppError as e:
        e.message = f"Error loading users: {e}"
        logger.error(f"lifecycle: {e}")
        raise
    try:
        keys.load()
    except AppError as e:
        e.message = f"Error loading keys: {e}"
        logger.error(f"lifecycle: {e}")
        raise

    logger.info(
        f"lifecycle: configured user_file={config.user_file} key_file={config.key_file} "
        f"key_length={config.key_length} key_lifetime={config.key_lifetime}s"
    )
    return Registry(config=config, users=users, keys=keys)


__all__ = ["Registry", "configure"]
