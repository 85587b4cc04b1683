import logging
from fastapi import Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from twilight.core.auth import clear_refresh_cookie, set_refresh_cookie
from twilight.core.config import get_settings
from twilight.core.email import send_email
from twilight.core.errors import AppError, ErrorKind
from twilight.core.security import (
    TokenKind,
    create_access_token,
    create_refresh_token,
    create_verification_token,
    hash_password,
    hash_token,
    is_expired,
    verify_password,
    verify_token,
)
from twilight.models.user_model import User
from twilight.repositories.user_repo import (
    create_user,
    delete_user,
    get_user_by_email,
    get_user_by_token_hash,
    get_user_by_username,
    is_active_user,
    mark_user_verified,
    set_user_token,
    update_user_password,
)
from twilight.schemas.common_schema import ResultResponse
from twilight.schemas.user_schema import (
    AccessTokenResponse,
    SigninResponse,
    UserCreate,
    UserRead,
    UserSignin,
)

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Please confirm your inscription to TWILIGHT"
RESET_PASSWORD_SUBJECT = "Twilight : Reinit your password"


def _welcome_message(firstname: str, verification_link: str, validity_hours: int) -> str:
    return f"""
    <h1>{firstname} Welcome to Twilight !</h1>
    <p>Thank you for registering. Please confirm your email by clicking on the link below</p>
    <a href="{verification_link}">Confirm my email</a>
    <p>This link will expire after {validity_hours} hours</p>
    """


def _reset_password_message(firstname: str, reset_link: str, validity_hours: int) -> str:
    return f"""
    <p>Hi {firstname},</p>
    <p>You forgot your password to the Twilight application: please click the link below to reinitialize your password :</p>
    <a href="{reset_link}">Reset My Password</a>.
    <p>This link will expire in {validity_hours} hour.</p>
    """


def _send_quietly(to_email: str, subject: str, html: str):
    # a lost email must not fail the request; the user can ask again
    try:
        send_email(to_email, subject, html)
        logger.info("Email %r sent to %s", subject, to_email)
    except Exception:
        logger.exception("Could not send email %r to %s", subject, to_email)


def to_user_read(user: User) -> UserRead:
    return UserRead(id=user.user_id, username=user.username, firstname=user.first_name, email=user.email)


def _purge_if_stale(db: Session, user: User | None) -> User | None:
    """Drop an unverified user whose verification link expired unused."""
    if user is None or user.is_verified or not is_expired(user.token_expiration):
        return user
    username = user.username
    delete_user(db, user.user_id)
    logger.info("Stale unverified user %s removed before signup", username)
    return None


def _check_signup_conflicts(db: Session, data: UserCreate):
    if _purge_if_stale(db, get_user_by_username(db, data.username)):
        raise AppError(ErrorKind.CONFLICT, "User already exists")
    if _purge_if_stale(db, get_user_by_email(db, data.email)):
        raise AppError(ErrorKind.CONFLICT, "This email is used by another account")


def signup(db: Session, data: UserCreate) -> ResultResponse:
    _check_signup_conflicts(db, data)

    settings = get_settings()
    token, token_expiration = create_verification_token(settings.link_validity_hours)
    try:
        create_user(db, data, hash_password(data.password), hash_token(token), token_expiration)
    except AppError as exc:
        if exc.kind is not ErrorKind.CONFLICT:
            raise
        # lost a race with a concurrent signup for the same username or email
        _check_signup_conflicts(db, data)
        raise
    logger.info("New user %s signed up", data.username)

    verification_link = f"{settings.public_backend_url}/users/verify-email/{token}"
    _send_quietly(
        data.email,
        VERIFICATION_SUBJECT,
        _welcome_message(data.firstname, verification_link, settings.link_validity_hours),
    )
    return ResultResponse(message="Signup successful. Please check your email to verify your account.")


def signin(db: Session, data: UserSignin, response: Response) -> SigninResponse:
    user = get_user_by_username(db, data.username)
    if not user:
        raise AppError(ErrorKind.AUTHENTICATION, "Wrong username")
    if not verify_password(data.password, user.password):
        raise AppError(ErrorKind.AUTHENTICATION, "Wrong password")
    if not user.is_verified:
        raise AppError(ErrorKind.FORBIDDEN, "Please check your email address")

    set_refresh_cookie(response, create_refresh_token(user.user_id))
    return SigninResponse(access_token=create_access_token(user.user_id), user=to_user_read(user))


def verify_email(db: Session, token: str):
    user = get_user_by_token_hash(db, hash_token(token))
    if not user or user.is_verified:
        raise AppError(ErrorKind.VALIDATION, "Invalid Verification Link")
    if is_expired(user.token_expiration):
        # signup must be redone
        username = user.username
        delete_user(db, user.user_id)
        logger.info("Verification link of %s expired, user removed", username)
        raise AppError(ErrorKind.VALIDATION, "Token has expired. Please signup again")

    mark_user_verified(db, user.user_id)
    logger.info("User %s verified", user.username)
    return RedirectResponse(
        f"{get_settings().public_frontend_url}/auth/email-verified",
        status_code=status.HTTP_302_FOUND,
    )


def forgot_password(db: Session, email: str) -> ResultResponse:
    user = get_user_by_email(db, email)
    if not user:
        raise AppError(ErrorKind.NOT_FOUND, "User not found")
    if not user.is_verified:
        raise AppError(ErrorKind.FORBIDDEN, "Please check your email address")

    settings = get_settings()
    token, token_expiration = create_verification_token(settings.reset_password_token_hours)
    set_user_token(db, user.user_id, hash_token(token), token_expiration)

    reset_link = f"{settings.public_frontend_url}/auth/reset-password/{token}"
    _send_quietly(
        user.email,
        RESET_PASSWORD_SUBJECT,
        _reset_password_message(user.first_name, reset_link, settings.reset_password_token_hours),
    )
    return ResultResponse(message="Reset password E-mail sent. Please check your email")


def reset_password(db: Session, token: str, new_password: str) -> ResultResponse:
    user = get_user_by_token_hash(db, hash_token(token))
    if not user:
        raise AppError(ErrorKind.NOT_FOUND, "Invalid link")
    if not user.is_verified or is_expired(user.token_expiration):
        raise AppError(ErrorKind.FORBIDDEN, "reset password link has expired or account not verified")

    update_user_password(db, user.user_id, hash_password(new_password))
    logger.info("Password of %s reset", user.username)
    return ResultResponse(message="Password successfully updated")


def refresh_access_token(db: Session, refresh_token: str | None) -> AccessTokenResponse:
    if not refresh_token:
        raise AppError(ErrorKind.AUTHENTICATION, "No refresh token provided")

    payload = verify_token(refresh_token, TokenKind.REFRESH)
    if payload is None:
        raise AppError(ErrorKind.FORBIDDEN, "Invalid or expired refresh token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AppError(ErrorKind.FORBIDDEN, "Invalid or expired refresh token")

    if not is_active_user(db, user_id):
        raise AppError(ErrorKind.FORBIDDEN, "Invalid User")
    return AccessTokenResponse(access_token=create_access_token(user_id))


def logout(refresh_token: str | None) -> Response:
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    if refresh_token:
        clear_refresh_cookie(response)
    return response
