from dataclasses import dataclass
from datetime import timedelta
from typing import Union

from authx import AuthX, AuthXConfig, TokenPayload
from authx.exceptions import JWTDecodeError
from passlib.context import CryptContext
from pydantic import SecretStr
from sqlalchemy.orm import Session

from core.config import settings
from models.user import User
from repositories.user_repo import UserRepository


pwd_ctx = CryptContext(schemes=["argon2"], deprecated="auto")

def _to_plain(p: Union[str, SecretStr]) -> str:
    return p.get_secret_value() if isinstance(p, SecretStr) else p

def hash_password(password: Union[str, SecretStr]) -> str:
    return pwd_ctx.hash(_to_plain(password))

def verify_password(plain: Union[str, SecretStr], hashed: str) -> bool:
    return pwd_ctx.verify(_to_plain(plain), hashed)


_cookie_samesite = settings.JWT_COOKIE_SAMESITE.lower() if settings.JWT_COOKIE_SAMESITE else None

config = AuthXConfig(
    JWT_SECRET_KEY=settings.SECRET_KEY,
    JWT_ALGORITHM=settings.JWT_ALG,
    JWT_ACCESS_TOKEN_EXPIRES=timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
    JWT_TOKEN_LOCATION=["cookies", "headers"],
    JWT_ACCESS_COOKIE_NAME=settings.JWT_ACCESS_COOKIE_NAME,
    JWT_COOKIE_SAMESITE=_cookie_samesite or "lax",
    JWT_COOKIE_SECURE=settings.JWT_COOKIE_SECURE,
    JWT_COOKIE_DOMAIN=settings.JWT_COOKIE_DOMAIN or None,
    JWT_COOKIE_CSRF_PROTECT=False,
)

security = AuthX(config=config)


@dataclass(frozen=True)
class AuthResult:
    valid: bool
    user: User | None = None
    error: str | None = None


def create_access_token(user_id: int) -> str:
    return security.create_access_token(uid=str(user_id))


def _decode_token(token: str) -> TokenPayload:
    return TokenPayload.decode(
        token=token,
        key=security.config.public_key,
        algorithms=[security.config.JWT_ALGORITHM],
    )


def verify_token(db: Session, token: str | None) -> AuthResult:
    """Resolve an opaque bearer token to its user.

    Never raises for a bad token; callers treat ``valid=False`` as
    "not authenticated" whatever the cause.
    """
    if not token:
        return AuthResult(valid=False)
    try:
        payload = _decode_token(token)
    except (JWTDecodeError, ValueError) as exc:
        return AuthResult(valid=False, error=str(exc) or "Invalid token")

    if payload.type not in (None, "access"):
        return AuthResult(valid=False, error="Invalid token type")
    try:
        user_id = int(payload.sub)
    except (TypeError, ValueError):
        return AuthResult(valid=False, error="Invalid subject in token")

    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        return AuthResult(valid=False)
    return AuthResult(valid=True, user=user)


@dataclass(frozen=True)
class CurrentUser:
    id: int
    email: str
