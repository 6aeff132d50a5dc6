# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import DEFAULT_KEY_CHARS, AuthConfig, load_config

__all__ = ["AuthConfig", "DEFAULT_KEY_CHARS", "load_config"]
