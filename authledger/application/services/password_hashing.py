"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from authledger.domain.ports import PasswordHasher
from authledger.shared.errors import HashingError

# Iterations per unit of 2**cost; cost 13 is close to werkzeug's own default.
_ITERATIONS_BASE = 100


class WerkzeugPasswordHasher(PasswordHasher):
    """PBKDF2-SHA256 via werkzeug with ``100 * 2**cost`` iterations."""

    def __init__(self, cost: int = 13) -> None:
        self._method = f"pbkdf2:sha256:{_ITERATIONS_BASE * 2 ** cost}"

    @property
    def method(self) -> str:
        return self._method

    def hash(self, password: str) -> str:
        try:
            return str(generate_password_hash(password, method=self._method))
        except (ValueError, OverflowError) as e:
            raise HashingError(f"Unable to hash password: {e}") from e

    def verify(self, password: str, hashed: str) -> bool:
        return bool(check_password_hash(hashed, password))
