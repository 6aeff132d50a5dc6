# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""In-process credential and session-key registry backed by flat CSV files."""

from authledger.container import Container
from authledger.domain import (
    AlreadyExistsError,
    BadCredentialsError,
    InvalidKeyError,
    NotFoundError,
)
from authledger.infrastructure.lifecycle import Registry, configure
from authledger.infrastructure.maintenance import MaintenanceWorker
from authledger.infrastructure.stores import KeyStore, UserStore
from authledger.shared.config import AuthConfig, load_config
from authledger.shared.errors import (
    AppError,
    ConfigError,
    FormatError,
    HashingError,
    PersistenceError,
)

__version__ = "0.1.0"

__all__ = [
    "AlreadyExistsError",
    "AppError",
    "AuthConfig",
    "BadCredentialsError",
    "ConfigError",
    "Container",
    "FormatError",
    "HashingError",
    "InvalidKeyError",
    "KeyStore",
    "MaintenanceWorker",
    "NotFoundError",
    "PersistenceError",
    "Registry",
    "UserStore",
    "configure",
    "load_config",
]
