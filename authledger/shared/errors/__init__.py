from .base import (
    AppError,
    ConfigError,
    DomainError,
    FormatError,
    HashingError,
    InfrastructureError,
    PersistenceError,
)

__all__ = [
    "AppError",
    "ConfigError",
    "DomainError",
    "FormatError",
    "HashingError",
    "InfrastructureError",
    "PersistenceError",
]
