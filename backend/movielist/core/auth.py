from typing import Optional
from fastapi import Depends, Header
from movielist.core.config import Settings, get_settings
from movielist.core.exceptions import MissingTokenError, handle_exception
from movielist.services.auth_service import AuthService


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an 'Authorization: Bearer <token>' header"""
    if not authorization:
        raise MissingTokenError()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise MissingTokenError()
    return token


def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> int:
    """Dependency returning the authenticated user's id; no database access"""
    try:
        token = extract_bearer_token(authorization)
        return AuthService(None, settings).verify_token(token)
    except Exception as e:
        raise handle_exception(e)
