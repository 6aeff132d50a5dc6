# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenGenerator(Protocol):
    def __call__(self) -> str: ...


class Clock(Protocol):
    """Returns the current time as epoch seconds."""

    def __call__(self) -> float: ...
