from __future__ import annotations

from passlib.context import CryptContext

from gamestore.application.ports.password_hasher_port import PasswordHasherPort


class PasswordHasher(PasswordHasherPort):
    """argon2 for new hashes.

    `hex_sha256` covers the unsalted digests written by the first store
    revision; it is deprecated, so a successful login re-hashes them.
    """

    def __init__(self):
        self._ctx = CryptContext(
            schemes=["argon2", "hex_sha256"],
            deprecated="auto",
        )

    def hash(self, plain_password: str) -> str:
        return self._ctx.hash(plain_password)

    def verify_and_update(self, plain_password: str, password_hash: str) -> tuple[bool, str | None]:
        try:
            verified, replacement_hash = self._ctx.verify_and_update(plain_password, password_hash)
            return bool(verified), replacement_hash
        except (TypeError, ValueError):
            return False, None
