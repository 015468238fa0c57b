"""Password hashing and token primitives."""

import hashlib
import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


# Password Management

def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against hash"""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        # Stored value is not a bcrypt hash
        logger.error(f"Password verification error: {e}")
        return False


# Access Tokens (JWT)

def create_access_token(
    user_id: int, secret: str, expires_minutes: int, algorithm: str = "HS256"
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> int | None:
    """Return the user id carried by a valid access token, or None."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.PyJWTError as e:
        logger.info(f"Rejected access token: {e}")
        return None
    if payload.get("type") != ACCESS_TOKEN_TYPE:
        return None
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None


# Opaque Tokens (refresh, password reset, email verification)

def generate_opaque_token() -> str:
    return str(uuid.uuid4())


def hash_token(raw_token: str) -> str:
    """Deterministic digest so stored tokens can be looked up by value."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()
