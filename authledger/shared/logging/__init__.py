# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig


from .logger import logger, setup_logging
from .sensitive_filter import sanitize_message

__all__ = [
    "logger",
    "sanitize_message",
    "setup_logging",
]
