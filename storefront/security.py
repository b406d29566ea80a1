"""
Password hashing and session tokens.

Passwords are hashed with bcrypt. Session tokens are HS256 JWTs signed with
the configured secret; they carry the username in the ``name`` claim and, unless
``token_expire_minutes`` is configured, never expire.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from .config import Settings, get_settings
from .errors import InvalidToken
from .logging import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password with a fresh salt.

    Hashing the same password twice gives two different strings; both verify.
    """
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    hashed = bcrypt.hashpw(_encode_password(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


def verify_password(password: Optional[str], password_hash: Optional[str]) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode_password(password), password_hash.encode("ascii"))
    except (ValueError, UnicodeEncodeError) as e:
        logger.warning("password_hash_unreadable", error=str(e))
        return False


def issue_token(claims: Dict[str, Any], settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    to_encode = dict(claims)
    if settings.token_expire_minutes is not None:
        to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=settings.token_expire_minutes)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Check the token signature and return its claims.

    Raises:
        InvalidToken: signature mismatch, malformed token, or an ``exp`` in the past
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidToken(str(e)) from e
