# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import secrets

from authledger.domain.ports import TokenGenerator
from authledger.shared.config import DEFAULT_KEY_CHARS


class AlphabetTokenGenerator(TokenGenerator):
    """Draws every character independently and uniformly from ``alphabet``."""

    def __init__(self, length: int = 32, alphabet: str = DEFAULT_KEY_CHARS) -> None:
        if length < 1:
            raise ValueError("token length must be positive")
        if not alphabet:
            raise ValueError("token alphabet must not be empty")
        self._length = length
        self._alphabet = alphabet

    @property
    def entropy_bits(self) -> float:
        return self._length * math.log2(len(set(self._alphabet)))

    def __call__(self) -> str:
        return "".join(secrets.choice(self._alphabet) for _ in range(self._length))
