"""
Authorization dependencies.

A bearer token is optional on every route: reads are public, writes need
a token whose isAdmin claim is true. An invalid or expired token is treated
like no token at all.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from jobly.core.config import settings
from jobly.core.exceptions import UnauthorizedError
from jobly.schemas.auth import TokenData
from jobly.services import auth as auth_service

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_prefix}/auth/token", auto_error=False)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[TokenData]:
    """Claims of the caller's token, or None for anonymous callers."""
    if not token:
        return None

    payload = auth_service.decode_access_token(token)
    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        return None
    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        return None
    if payload.get("type") != "access" or not payload.get("username"):
        logger.warning("Authentication failed: Malformed token")
        return None

    return TokenData(username=payload["username"], is_admin=bool(payload.get("isAdmin", False)))


def ensure_logged_in(current_user: Optional[TokenData] = Depends(get_current_user)) -> TokenData:
    if current_user is None:
        raise UnauthorizedError()
    return current_user


def require_admin(current_user: Optional[TokenData] = Depends(get_current_user)) -> TokenData:
    if current_user is None or not current_user.is_admin:
        raise UnauthorizedError()
    return current_user
