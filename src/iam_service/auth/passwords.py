"""
iam_service.auth.passwords

Password hashing (bcrypt, used directly).

Responsibilities:
- Hash and verify login passwords.
- Reject passwords bcrypt cannot take whole (over 72 bytes once UTF-8 encoded).
- Provide a dummy hash so unknown usernames cost the same as wrong passwords.
"""

from __future__ import annotations

import bcrypt

from iam_service.errors import BadRequest

# bcrypt's input limit is in bytes, not characters.
MAX_PASSWORD_BYTES = 72


def password_fits(plain: str) -> bool:
    return len(plain.encode("utf-8")) <= MAX_PASSWORD_BYTES


def ensure_password_fits(plain: str) -> None:
    if not password_fits(plain):
        raise BadRequest(f"Password must be at most {MAX_PASSWORD_BYTES} bytes (UTF-8)")


def hash_password(plain: str, *, rounds: int = 12) -> str:
    ensure_password_fits(plain)
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    if not password_fits(plain):
        # No stored hash can have come from it.
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Corrupt or non-bcrypt hash in storage.
        return False


def make_dummy_hash(*, rounds: int = 12) -> str:
    # Same cost factor as real hashes so the comparison time matches.
    return hash_password("iam-service-timing-dummy", rounds=rounds)


# --- Module Notes -----------------------------------------------------------
# Callers must run verify_password() even when the username does not exist.
