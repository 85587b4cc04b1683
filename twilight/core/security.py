import enum
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
from jose import JWTError, jwt
from twilight.core.config import get_settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenKind(enum.Enum):
    ACCESS = "access"
    REFRESH = "refresh"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _secret_for(kind: TokenKind) -> str:
    settings = get_settings()
    secrets_by_kind = {
        TokenKind.ACCESS: settings.access_token_secret,
        TokenKind.REFRESH: settings.refresh_token_secret,
    }
    if kind not in secrets_by_kind:
        raise ValueError(f"Unknown token type: {kind}")
    return secrets_by_kind[kind]


def create_token(user_id: int, duration: timedelta, kind: TokenKind = TokenKind.ACCESS) -> str:
    expire = datetime.now(timezone.utc) + duration
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, _secret_for(kind), algorithm=get_settings().jwt_algorithm)


def verify_token(token: str, kind: TokenKind = TokenKind.ACCESS) -> dict | None:
    """Return the token payload, or None when the signature or expiry is bad."""
    secret = _secret_for(kind)
    try:
        return jwt.decode(token, secret, algorithms=[get_settings().jwt_algorithm])
    except JWTError:
        return None


def create_access_token(user_id: int) -> str:
    return create_token(user_id, timedelta(minutes=get_settings().access_token_minutes), TokenKind.ACCESS)


def create_refresh_token(user_id: int) -> str:
    return create_token(user_id, timedelta(days=get_settings().refresh_token_days), TokenKind.REFRESH)


def create_verification_token(hours: int) -> tuple[str, datetime]:
    """Random out-of-band token and its absolute expiry."""
    token = secrets.token_urlsafe(24)
    token_expiration = datetime.now(timezone.utc) + timedelta(hours=hours)
    return token, token_expiration


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def is_expired(expiration: datetime | None) -> bool:
    if expiration is None:
        return True
    # SQLite hands timestamps back without tzinfo; they are stored as UTC
    if expiration.tzinfo is None:
        expiration = expiration.replace(tzinfo=timezone.utc)
    return expiration < datetime.now(timezone.utc)
