import hashlib
import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

from fastapi import Response
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from app.auth.schemas.auth import AuthCredential
from app.core.config import Settings, settings
from app.core.datetime_utils import ensure_utc
from app.core.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# 32 random bytes, hex encoded
RESET_TOKEN_BYTES = 32


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except ValueError:
        # Unrecognised hash format
        logger.warning("password_hash_unrecognised")
        return False


def get_password_hash(password: str) -> str:
    return str(pwd_context.hash(password))


def create_access_token(credential: AuthCredential, config: Settings | None = None) -> str:
    config = config or settings
    now = datetime.now(UTC)
    to_encode: dict[str, Any] = {
        "sub": credential.user_id,
        "email": credential.email,
        "role": credential.role.value,
        "iat": now,
        "exp": now + timedelta(hours=config.ACCESS_TOKEN_EXPIRE_HOURS),
    }
    encoded_jwt: str = jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str, config: Settings | None = None) -> AuthCredential:
    """Verify signature and expiry and return the embedded credential.

    Raises:
        InvalidTokenError: for any verification failure.
    """
    config = config or settings
    try:
        payload: dict[str, Any] = jwt.decode(
            token, config.SECRET_KEY, algorithms=[config.ALGORITHM]
        )
    except JWTError:
        raise InvalidTokenError() from None

    try:
        return AuthCredential(
            user_id=payload["sub"],
            email=payload["email"],
            role=payload["role"],
        )
    except (KeyError, PydanticValidationError):
        raise InvalidTokenError() from None


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def generate_reset_token(config: Settings | None = None) -> tuple[str, str, datetime]:
    """Return the raw token for the e-mail, its digest for storage and the expiry."""
    config = config or settings
    raw_token = secrets.token_hex(RESET_TOKEN_BYTES)
    hashed_token = hash_token(raw_token)
    expiry = datetime.now(UTC) + timedelta(hours=config.PASSWORD_RESET_TOKEN_EXPIRE_HOURS)
    return raw_token, hashed_token, expiry


def is_token_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    now = now or datetime.now(UTC)
    return now > ensure_utc(expires_at)


def _cookie_samesite() -> Literal["lax", "strict"]:
    return "lax" if settings.DEBUG else "strict"


def set_auth_cookie(response: Response, access_token: str) -> None:
    """Set the httpOnly cookie carrying the access token"""
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=access_token,
        httponly=True,
        secure=not settings.DEBUG,
        samesite=_cookie_samesite(),
        max_age=settings.access_token_ttl_seconds,
    )


def clear_auth_cookie(response: Response) -> None:
    """Clear the authentication cookie on logout"""
    response.delete_cookie(
        settings.AUTH_COOKIE_NAME, samesite=_cookie_samesite(), secure=not settings.DEBUG
    )
