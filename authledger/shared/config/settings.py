# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import string
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authledger.shared.errors import ConfigError

DEFAULT_KEY_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits


class AuthConfig(BaseSettings):
    user_file: Path | None = Field(None, alias="USER_FILE")
    key_file: Path | None = Field(None, alias="KEY_FILE")
    key_length: int = Field(32, ge=1, alias="KEY_LENGTH")
    key_chars: str = Field(DEFAULT_KEY_CHARS, min_length=1, alias="KEY_CHARS")
    hash_cost: int = Field(13, ge=4, le=31, alias="HASH_COST")
    key_lifetime: int = Field(600, ge=1, alias="KEY_LIFETIME")
    revoke_on_delete: bool = Field(False, alias="REVOKE_ON_DELETE")
    maintenance_interval: float = Field(60.0, gt=0, alias="MAINTENANCE_INTERVAL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("user_file", "key_file", mode="before")
    @classmethod
    def _blank_path_is_unset(cls, value: str | Path | None) -> str | Path | None:
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("key_chars", mode="before")
    @classmethod
    def _strip_key_chars(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("revoke_on_delete", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def load_config(path: str | Path | None = None, **overrides) -> AuthConfig:
    """Build the configuration record from ``overrides``, the environment and ``path``.

    ``path`` is a ``key=value`` file; keys match the field names or their
    upper-case aliases.
    """
    if path is not None and not Path(path).is_file():
        raise ConfigError(f"Configuration file {str(path)!r} does not exist", path=path)
    try:
        return AuthConfig(_env_file=path, **overrides)  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", path=path) from e


__all__ = ["AuthConfig", "DEFAULT_KEY_CHARS", "load_config"]
