"""
Token and password helpers.

Tokens are HS256 JWTs carrying the username and the admin flag:
    {"username": "u1", "isAdmin": true, "type": "access", "iat": ..., "exp": ...}
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from jobly.core.config import settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {**data, "type": "access", "iat": now, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def create_token(user: Dict[str, Any]) -> str:
    """Sign a token for a user row as returned by UserRepository."""
    return create_access_token({
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
    })


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Return the token claims, {"error": "TOKEN_EXPIRED"} for an expired
    token, or None when the token cannot be trusted at all.
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        return {"error": "TOKEN_EXPIRED"}
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected token: {e}")
        return None
