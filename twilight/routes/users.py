from fastapi import APIRouter, Cookie, Depends, Response, status
from sqlalchemy.orm import Session
from typing import Optional
from twilight.core.auth import REFRESH_COOKIE_NAME, get_current_user
from twilight.core.db import get_db
from twilight.controllers import user_controller
from twilight.schemas.common_schema import ResultResponse
from twilight.schemas.user_schema import (
    AccessTokenResponse,
    ForgotPasswordRequest,
    MeResponse,
    ResetPasswordRequest,
    SigninResponse,
    UserCreate,
    UserSignin,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", response_model=ResultResponse, status_code=status.HTTP_201_CREATED)
def signup_route(payload: UserCreate, db: Session = Depends(get_db)):
    return user_controller.signup(db, payload)


@router.post("/signin", response_model=SigninResponse)
def signin_route(payload: UserSignin, response: Response, db: Session = Depends(get_db)):
    return user_controller.signin(db, payload, response)


@router.get("/verify-email/{token}")
def verify_email_route(token: str, db: Session = Depends(get_db)):
    return user_controller.verify_email(db, token)


@router.post("/forgot-password", response_model=ResultResponse)
def forgot_password_route(payload: ForgotPasswordRequest, db: Session = Depends(get_db)):
    return user_controller.forgot_password(db, payload.email)


@router.post("/reset-password", response_model=ResultResponse)
def reset_password_route(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    return user_controller.reset_password(db, payload.token, payload.password)


@router.post("/refresh_token", response_model=AccessTokenResponse)
def refresh_token_route(
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE_NAME),
    db: Session = Depends(get_db),
):
    return user_controller.refresh_access_token(db, refresh_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout_route(refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE_NAME)):
    return user_controller.logout(refresh_token)


@router.get("/me", response_model=MeResponse)
def me_route(user=Depends(get_current_user)):
    return MeResponse(user=user_controller.to_user_read(user))
