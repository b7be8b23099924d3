"""Utility helpers for hashing and verifying account passwords."""

from __future__ import annotations

import binascii
import hashlib
import hmac
import secrets
from dataclasses import dataclass

DEFAULT_ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 390_000
SALT_BYTES = 16


@dataclass(slots=True)
class PasswordHash:
    """Structured representation of a PBKDF2 hash entry."""

    algorithm: str
    iterations: int
    salt: bytes
    digest: bytes

    @classmethod
    def parse(cls, encoded: str) -> "PasswordHash":
        """Parse an encoded password hash string."""

        try:
            algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
            return cls(
                algorithm=algorithm,
                iterations=int(iterations),
                salt=binascii.unhexlify(salt_hex),
                digest=binascii.unhexlify(digest_hex),
            )
        except (ValueError, binascii.Error) as exc:
            raise ValueError("invalid password hash format") from exc

    def encode(self) -> str:
        return "$".join(
            (self.algorithm, str(self.iterations), self.salt.hex(), self.digest.hex())
        )

    def verify(self, password: str) -> bool:
        """Check ``password`` against the stored digest using constant time."""

        if self.algorithm != DEFAULT_ALGORITHM:
            raise ValueError(f"unsupported algorithm: {self.algorithm}")
        derived = hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            self.salt,
            self.iterations,
        )
        return hmac.compare_digest(derived, self.digest)


def hash_password(password: str, *, iterations: int = DEFAULT_ITERATIONS) -> str:
    """Return a PBKDF2 hash encoded with algorithm metadata."""

    if not password:
        raise ValueError("password must not be empty")
    salt = secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return PasswordHash(
        algorithm=DEFAULT_ALGORITHM, iterations=iterations, salt=salt, digest=digest
    ).encode()


def verify_password(password: str, encoded: str | None) -> bool:
    """Return ``True`` when ``password`` matches ``encoded`` hash."""

    if not encoded:
        return False
    parsed = PasswordHash.parse(encoded)
    return parsed.verify(password)


__all__ = ["PasswordHash", "hash_password", "verify_password"]
