# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from dataclasses import replace

from authledger.domain.entities import Session
from authledger.domain.exceptions import InvalidKeyError
from authledger.domain.ports import Clock, TokenGenerator
from authledger.infrastructure.concurrency import ReadWriteLock
from authledger.infrastructure.storage import RecordFile
from authledger.shared.errors import FormatError, InfrastructureError
from authledger.shared.logging import logger

# key file format:
#
# owner,expiry_epoch_seconds,token
_KEY_FIELDS = 3
_MAX_ISSUE_ATTEMPTS = 8


def _short(token: str) -> str:
    return f"{token[:8]}…"


class KeyStore:
    """Session token -> (owner, expiry), persisted to a flat key file.

    Expired sessions are never reported valid, whether or not ``cull`` has
    run since they expired. Lock order matches ``UserStore``: store lock
    first, persistence lock second.
    """

    def __init__(
        self,
        records: RecordFile,
        token_generator: TokenGenerator,
        *,
        lifetime: float,
        clock: Clock = time.time,
        lock: ReadWriteLock | None = None,
    ) -> None:
        if lifetime <= 0:
            raise ValueError("key lifetime must be positive")
        self._records = records
        self._token_generator = token_generator
        self._lifetime = float(lifetime)
        self._clock = clock
        self._lock = lock or ReadWriteLock()
        self._sessions: dict[str, Session] = {}
        self._dirty = False
        self._generation = 0

    @property
    def lifetime(self) -> float:
        return self._lifetime

    @property
    def dirty(self) -> bool:
        with self._lock.read():
            return self._dirty

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        with self._lock.read():
            return token in self._sessions

    def load(self) -> int:
        logger.info(f"keys: load path={self._records.path}")
        rows = self._records.read_rows(_KEY_FIELDS)

        now = self._clock()
        sessions: dict[str, Session] = {}
        for owner, expiry, token, *_ in rows:
            try:
                expires_at = float(int(expiry))
            except ValueError as e:
                raise FormatError(self._records.path) from e
            if expires_at > now:
                sessions[token] = Session(token=token, owner=owner, expires_at=expires_at)

        with self._lock.write():
            self._sessions = sessions
            self._dirty = False
            self._generation += 1
        logger.info(f"keys: loaded count={len(sessions)} dropped={len(rows) - len(sessions)}")
        return len(sessions)

    def flush(self) -> int:
        logger.info(f"keys: flush path={self._records.path}")
        with self._lock.read():
            generation = self._generation
            now = self._clock()
            rows = [
                (s.owner, str(int(s.expires_at)), s.token)
                for s in sorted(self._sessions.values(), key=lambda s: s.token)
                if not s.is_expired(now)
            ]
            written = self._records.write_rows(rows)

        with self._lock.write():
            if self._generation == generation:
                self._dirty = False
        logger.info(f"keys: wrote count={written}")
        return written

    def issue(self, owner: str) -> str:
        """Create a session for ``owner``; the caller has already checked the account."""
        for _ in range(_MAX_ISSUE_ATTEMPTS):
            token = self._token_generator()
            with self._lock.write():
                if token in self._sessions:
                    continue
                expires_at = self._clock() + self._lifetime
                self._sessions[token] = Session(token=token, owner=owner, expires_at=expires_at)
                self._mark_dirty()
            logger.info(f"keys: issued owner={owner} tok={_short(token)} exp={int(expires_at)}")
            return token

        logger.error(f"keys: token collision limit reached owner={owner}")
        raise InfrastructureError(
            "Unable to generate a unique key; the key space is too small",
            code="key_space_exhausted",
        )

    def verify(self, owner: str, token: str) -> bool:
        with self._lock.read():
            self._valid_session(owner, token)
        logger.debug(f"keys: verified owner={owner} tok={_short(token)}")
        return True

    def refresh(self, owner: str, token: str) -> bool:
        with self._lock.write():
            session = self._valid_session(owner, token)
            self._sessions[token] = replace(session, expires_at=self._clock() + self._lifetime)
            self._mark_dirty()
        logger.debug(f"keys: refreshed owner={owner} tok={_short(token)}")
        return True

    def revoke(self, owner: str, token: str) -> None:
        with self._lock.write():
            self._valid_session(owner, token)
            del self._sessions[token]
            self._mark_dirty()
        logger.info(f"keys: revoked owner={owner} tok={_short(token)}")

    def revoke_owner(self, owner: str) -> int:
        with self._lock.write():
            tokens = [t for t, s in self._sessions.items() if s.owner == owner]
            for token in tokens:
                del self._sessions[token]
            if tokens:
                self._mark_dirty()
        logger.info(f"keys: revoked all owner={owner} count={len(tokens)}")
        return len(tokens)

    def sessions_for(self, owner: str) -> list[Session]:
        with self._lock.read():
            now = self._clock()
            sessions = [
                s for s in self._sessions.values() if s.owner == owner and not s.is_expired(now)
            ]
        return sorted(sessions, key=lambda s: s.expires_at)

    def cull(self) -> int:
        with self._lock.write():
            now = self._clock()
            expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
            for token in expired:
                del self._sessions[token]
            if expired:
                self._mark_dirty()
        logger.info(f"keys: culled count={len(expired)}")
        return len(expired)

    def _valid_session(self, owner: str, token: str) -> Session:
        # Missing, foreign and expired tokens are deliberately indistinguishable
        session = self._sessions.get(token)
        if session is None or session.owner != owner or session.is_expired(self._clock()):
            raise InvalidKeyError()
        return session

    def _mark_dirty(self) -> None:
        self._dirty = True
        self._generation += 1


__all__ = ["KeyStore"]
