"""Credential store adapter — password hashing and reset-token generation.

Stateless wrappers over bcrypt. Verification uses bcrypt's own comparison and
never raises on a mismatch.
"""

import secrets

import bcrypt

# Work factor for new hashes
BCRYPT_ROUNDS = 10

# bcrypt only accepts this many bytes of password input
MAX_PASSWORD_BYTES = 72

# Random bytes in a password reset token (hex-encoded to twice this length)
RESET_TOKEN_BYTES = 20


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``.

    Errors from the hashing library propagate; a password that cannot be
    hashed is an internal failure, not a user mistake.
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long candidate
        return False


def generate_reset_token() -> str:
    """Return a fresh hex-encoded reset token."""
    return secrets.token_hex(RESET_TOKEN_BYTES)
