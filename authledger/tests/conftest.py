from __future__ import annotations

from pathlib import Path

import pytest

from authledger.application.services import AlphabetTokenGenerator
from authledger.domain.ports import PasswordHasher
from authledger.infrastructure.storage import RecordFile
from authledger.infrastructure.stores import KeyStore, UserStore
from authledger.shared.config import AuthConfig

_CONFIG_ENV = (
    "USER_FILE",
    "KEY_FILE",
    "KEY_LENGTH",
    "KEY_CHARS",
    "HASH_COST",
    "KEY_LIFETIME",
    "REVOKE_ON_DELETE",
    "MAINTENANCE_INTERVAL",
    "LOG_LEVEL",
)

START = 1_700_000_000.0
LIFETIME = 600


class FakeClock:
    def __init__(self, now: float = START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        if hashed.startswith("broken"):
            raise ValueError("Invalid hash method")
        return hashed == f"hashed:{password}"


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def user_file(tmp_path: Path) -> Path:
    path = tmp_path / "users.csv"
    path.touch(mode=0o600)
    return path


@pytest.fixture()
def key_file(tmp_path: Path) -> Path:
    path = tmp_path / "keys.csv"
    path.touch(mode=0o600)
    return path


@pytest.fixture()
def user_store(user_file: Path, hasher: DeterministicHasher) -> UserStore:
    return UserStore(RecordFile(user_file), hasher)


@pytest.fixture()
def key_store(key_file: Path, clock: FakeClock) -> KeyStore:
    return KeyStore(RecordFile(key_file), AlphabetTokenGenerator(), lifetime=LIFETIME, clock=clock)


@pytest.fixture()
def config(tmp_path: Path) -> AuthConfig:
    return AuthConfig(
        user_file=tmp_path / "users.csv",
        key_file=tmp_path / "keys.csv",
        hash_cost=4,
        key_lifetime=LIFETIME,
    )
