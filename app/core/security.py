"""Password hashing and session token generation."""

import secrets

import bcrypt

# Bcrypt cost (rounds); fixed so every stored hash shares the same work factor.
BCRYPT_ROUNDS = 10

PASSWORD_MIN_LEN = 6
# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

# Bytes of randomness in a session token (urlsafe-encoded, ~43 chars).
SESSION_TOKEN_BYTES = 32


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def new_session_token() -> str:
    """Return a fresh opaque session token suitable for a cookie value."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
