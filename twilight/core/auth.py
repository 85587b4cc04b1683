from fastapi import Depends, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from twilight.core.config import get_settings
from twilight.core.db import get_db
from twilight.core.errors import AppError, ErrorKind
from twilight.core.security import TokenKind, verify_token
from twilight.repositories.user_repo import get_user_by_id

REFRESH_COOKIE_NAME = "refreshToken"

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
):
    if credentials is None or not credentials.credentials:
        raise AppError(ErrorKind.AUTHENTICATION, "Token missing")

    payload = verify_token(credentials.credentials, TokenKind.ACCESS)
    if payload is None:
        raise AppError(ErrorKind.AUTHENTICATION, "Token expired or invalid")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AppError(ErrorKind.AUTHENTICATION, "Token expired or invalid")

    user = get_user_by_id(db, user_id)
    if not user:
        raise AppError(ErrorKind.AUTHENTICATION, "Invalid User")
    return user


def _cookie_policy() -> dict:
    is_prod = get_settings().is_production
    return {
        "httponly": True,
        "secure": is_prod,
        "samesite": "none" if is_prod else "lax",
        "path": "/",
    }


def set_refresh_cookie(response: Response, token: str):
    max_age = get_settings().refresh_token_days * 24 * 60 * 60
    response.set_cookie(key=REFRESH_COOKIE_NAME, value=token, max_age=max_age, **_cookie_policy())


def clear_refresh_cookie(response: Response):
    response.delete_cookie(key=REFRESH_COOKIE_NAME, **_cookie_policy())
