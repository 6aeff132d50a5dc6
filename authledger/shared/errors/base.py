# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    message: str = ""
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def __str__(self) -> str:
        return self.message or self.code

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        message: str = "",
        *,
        code: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_message = message or cast(str, getattr(self, "message", ""))
        super().__init__(code=resolved_code, message=resolved_message, context=context)


class InfrastructureError(AppError):
    def __init__(
        self,
        message: str = "",
        *,
        code: str = "infrastructure_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, message=message, context=context)


class ConfigError(InfrastructureError):
    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        context = {"path": str(path)} if path is not None else None
        super().__init__(message, code="config_error", context=context)


class FormatError(InfrastructureError):
    def __init__(self, path: str | Path, *, line: int | None = None) -> None:
        context: dict[str, Any] = {"path": str(path)}
        if line is not None:
            context["line"] = line
        super().__init__(
            f"File {str(path)!r} has unreadable format.",
            code="format_error",
            context=context,
        )


class PersistenceError(InfrastructureError):
    """Open/read/write/close failure on a backing file."""

    def __init__(self, message: str, *, path: str | Path, operation: str) -> None:
        super().__init__(
            message,
            code="io_error",
            context={"path": str(path), "operation": operation},
        )


class HashingError(InfrastructureError):
    def __init__(self, message: str = "Unable to hash password") -> None:
        super().__init__(message, code="hashing_error")
