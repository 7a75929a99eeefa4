"""Password hashing with bcrypt."""

from __future__ import annotations

from functools import lru_cache

import bcrypt

SALT_ROUNDS = 10
# bcrypt ignores input past 72 bytes and newer releases reject it outright
_MAX_PASSWORD_BYTES = 72


def _encode(plain_text: str) -> bytes:
    return plain_text.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def hash_password(plain_text: str) -> str:
    """Hash a plaintext password with a freshly generated salt."""
    salt = bcrypt.gensalt(rounds=SALT_ROUNDS)
    return bcrypt.hashpw(_encode(plain_text), salt).decode("utf-8")


def verify_password(plain_text: str, hashed: str) -> bool:
    """Constant-time comparison of a plaintext password against a stored hash."""
    try:
        return bcrypt.checkpw(_encode(plain_text), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash checked when the email is unknown, so both failure paths cost the same."""
    return hash_password("neuron-dummy-password")
