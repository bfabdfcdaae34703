"""
Credential utilities: bcrypt password hashing and opaque credential generation.

- bcrypt with a random 16-byte salt and a configurable work factor
- constant-time verification that fails closed on malformed stored hashes
- API tokens are 32 random bytes, hex encoded (64 characters)
- session identifiers are URL-safe random strings carried in a cookie
"""

import secrets

import bcrypt

from app.utils.logger import setup_logger

logger = setup_logger("auth_utils")

DEFAULT_BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72
API_TOKEN_BYTES = 32
SESSION_ID_BYTES = 32


def get_password_hash(password: str, rounds: int | None = None) -> str:
    """Hash a plain text password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=rounds or DEFAULT_BCRYPT_ROUNDS)
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """
    Verify a plain text password against a stored bcrypt hash.

    Returns False for users without a local password and for stored values
    that are not valid bcrypt hashes. The latter indicates a corrupted row and
    is logged, without the stored value.
    """
    if not hashed_password:
        return False
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError as e:
        logger.error(f"Stored password hash is malformed and cannot be verified: {e}")
        return False


def generate_api_token() -> str:
    """Return a new 64-character hex API token."""
    return secrets.token_hex(API_TOKEN_BYTES)


def generate_session_id() -> str:
    """Return a new opaque session identifier."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Return the credential of a ``Bearer`` Authorization header.

    ``None`` means the header is absent or uses another scheme. An empty string
    means a Bearer header was sent without a usable credential.
    """
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credentials.strip()
