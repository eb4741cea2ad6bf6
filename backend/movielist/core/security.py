import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import bcrypt
import jwt

from movielist.core.config import Settings
from movielist.core.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both login failure paths pay for one hash check
_dummy_hashes: Dict[int, str] = {}

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str, rounds: int = 10) -> str:
    """Hash a password with a per-password salt"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a password against a stored bcrypt hash"""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def burn_password_check(plain_password: str, rounds: int = 10) -> None:
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = get_password_hash("movielist-dummy-password", rounds=rounds)
    verify_password(plain_password, _dummy_hashes[rounds])


def create_access_token(
    user_id: int,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Issue a signed token carrying the user id"""
    issued_at = now or datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "userId": user_id,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> dict:
    """Verify signature and expiry; raise InvalidTokenError otherwise"""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token has expired")
    except jwt.InvalidTokenError:
        raise InvalidTokenError()

    user_id = payload.get("userId")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidTokenError()
    return payload
