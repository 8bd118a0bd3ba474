"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from authportal.domain.users.repositories import PasswordHasher
from authportal.shared.errors.base import HashError
from authportal.shared.logging import logger

DEFAULT_METHOD = "scrypt:32768:8:1"


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = DEFAULT_METHOD, salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    @property
    def method(self) -> str:
        return self._method

    def hash(self, password: str) -> str:
        try:
            return str(
                generate_password_hash(password, method=self._method, salt_length=self._salt_length)
            )
        except (ValueError, TypeError) as exc:
            logger.error(f"password.hash: failed with method={self._method}: {exc}")
            raise HashError(f"hash failed: {exc}") from exc

    def verify(self, password: str, hashed: str) -> bool:
        # werkzeug answers False for a hash without "method$salt$digest" structure;
        # that is corruption, not a wrong password.
        if not hashed or hashed.count("$") < 2:
            raise HashError("stored hash is malformed")
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError) as exc:
            logger.error(f"password.verify: unusable stored hash: {exc}")
            raise HashError(f"verify failed: {exc}") from exc
