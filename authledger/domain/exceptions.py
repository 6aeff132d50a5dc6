# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authledger.shared.errors.base import DomainError


class NotFoundError(DomainError):
    code = "not_found"
    message = "a user with that username doesn't exist"


class AlreadyExistsError(DomainError):
    code = "already_exists"
    message = "a user with that username already exists"


class BadCredentialsError(DomainError):
    code = "bad_credentials"
    message = "bad username/password combination"


class InvalidKeyError(DomainError):
    code = "invalid_key"
    message = "nonexistent or expired key"
