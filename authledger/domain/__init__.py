# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Account, Session
from .exceptions import (
    AlreadyExistsError,
    BadCredentialsError,
    InvalidKeyError,
    NotFoundError,
)
from .ports import Clock, PasswordHasher, TokenGenerator

__all__ = [
    "Account",
    "Session",
    "AlreadyExistsError",
    "BadCredentialsError",
    "InvalidKeyError",
    "NotFoundError",
    "Clock",
    "PasswordHasher",
    "TokenGenerator",
]
