# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Account:

    name: str
    password_digest: str


@dataclass(slots=True, frozen=True)
class Session:

    token: str
    owner: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
