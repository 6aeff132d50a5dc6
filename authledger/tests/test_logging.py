from __future__ import annotations

import pytest

from authledger.shared.logging import sanitize_message


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("login password=hunter22 ok", "login password=***REDACTED*** ok"),
        ("digest=pbkdf2:sha256:1600$abc$def", "digest=***REDACTED***"),
        ("stored pbkdf2:sha256:1600$abc$def", "stored pbkdf2:***REDACTED***"),
        (
            "token=abcdefghijklmnopqrstuvwxyz012345",
            "token=***REDACTED***",
        ),
    ],
)
def test_secrets_are_redacted(message: str, expected: str) -> None:
    assert sanitize_message(message) == expected


def test_short_token_prefixes_are_kept() -> None:
    message = "keys: issued owner=alice tok=abcdefgh… exp=1700000600"

    assert sanitize_message(message) == message
