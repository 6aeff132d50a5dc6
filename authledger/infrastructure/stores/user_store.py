# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authledger.domain.entities import Account
from authledger.domain.exceptions import AlreadyExistsError, BadCredentialsError, NotFoundError
from authledger.domain.ports import PasswordHasher
from authledger.infrastructure.concurrency import ReadWriteLock
from authledger.infrastructure.storage import RecordFile
from authledger.shared.logging import logger

# user file format:
#
# name,password_digest
_USER_FIELDS = 2


class UserStore:
    """Account name -> password digest, persisted to a flat user file.

    Lock order: the store lock is always taken before the persistence lock
    held inside ``RecordFile``.
    """

    def __init__(
        self,
        records: RecordFile,
        password_hasher: PasswordHasher,
        *,
        lock: ReadWriteLock | None = None,
    ) -> None:
        self._records = records
        self._password_hasher = password_hasher
        self._lock = lock or ReadWriteLock()
        self._users: dict[str, str] = {}
        self._dirty = False
        self._generation = 0

    @property
    def dirty(self) -> bool:
        with self._lock.read():
            return self._dirty

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._users)

    def __contains__(self, name: object) -> bool:
        with self._lock.read():
            return name in self._users

    def names(self) -> list[str]:
        with self._lock.read():
            return sorted(self._users)

    def get(self, name: str) -> Account:
        with self._lock.read():
            digest = self._users.get(name)
        if digest is None:
            raise NotFoundError(context={"name": name})
        return Account(name=name, password_digest=digest)

    def load(self) -> int:
        logger.info(f"users: load path={self._records.path}")
        rows = self._records.read_rows(_USER_FIELDS)
        users = {row[0]: row[1] for row in rows}

        with self._lock.write():
            self._users = users
            self._dirty = False
            self._generation += 1
        logger.info(f"users: loaded count={len(users)}")
        return len(users)

    def flush(self) -> int:
        logger.info(f"users: flush path={self._records.path}")
        with self._lock.read():
            generation = self._generation
            written = self._records.write_rows(sorted(self._users.items()))

        with self._lock.write():
            if self._generation == generation:
                self._dirty = False
        logger.info(f"users: wrote count={written}")
        return written

    def add_user(self, name: str, password: str) -> Account:
        with self._lock.read():
            if name in self._users:
                raise AlreadyExistsError(context={"name": name})

        # CPU-bound; existence is re-checked under the write lock below
        digest = self._password_hasher.hash(password)

        with self._lock.write():
            if name in self._users:
                raise AlreadyExistsError(context={"name": name})
            self._users[name] = digest
            self._mark_dirty()
        logger.info(f"users: added name={name}")
        return Account(name=name, password_digest=digest)

    def delete_user(self, name: str) -> None:
        with self._lock.write():
            if name not in self._users:
                raise NotFoundError(context={"name": name})
            del self._users[name]
            self._mark_dirty()
        logger.info(f"users: deleted name={name}")

    def verify(self, name: str, password: str) -> bool:
        with self._lock.read():
            digest = self._users.get(name)
        if digest is None:
            raise NotFoundError(context={"name": name})

        try:
            ok = self._password_hasher.verify(password, digest)
        except Exception as e:
            # Reported to the caller exactly like a wrong password
            logger.warning(f"users: password verification error name={name} err={e!r}")
            raise BadCredentialsError() from None

        if not ok:
            logger.warning(f"users: bad credentials name={name}")
            raise BadCredentialsError()
        logger.debug(f"users: verified name={name}")
        return True

    def _mark_dirty(self) -> None:
        self._dirty = True
        self._generation += 1


__all__ = ["UserStore"]
