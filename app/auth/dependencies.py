import logging
import uuid
from typing import assert_never

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.auth.models.user import User, UserRole
from app.auth.repository import UserRepository
from app.auth.schemas.auth import AuthCredential
from app.core import security
from app.core.config import settings
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.db.session import get_db

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_access_token(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Extract the access token from the Authorization header or the auth cookie.

    The header takes precedence over the cookie.
    """
    if bearer is not None and bearer.credentials:
        return bearer.credentials

    cookie_token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if cookie_token:
        return cookie_token

    raise UnauthorizedError("Authorization required")


async def get_current_credential(
    access_token: str = Depends(get_access_token),
) -> AuthCredential:
    """Verify the access token and return the credential it carries"""
    return security.decode_access_token(access_token)


async def require_admin(
    credential: AuthCredential = Depends(get_current_credential),
) -> AuthCredential:
    match credential.role:
        case UserRole.ADMIN:
            return credential
        case UserRole.USER:
            logger.info("admin_access_denied", extra={"user_id": credential.user_id})
            raise ForbiddenError("Admin access required")
        case _:
            assert_never(credential.role)


async def get_current_user(
    credential: AuthCredential = Depends(get_current_credential),
    db: Session = Depends(get_db),
) -> User:
    """Load the user behind a valid credential"""
    try:
        user_id = uuid.UUID(credential.user_id)
    except ValueError:
        raise UnauthorizedError("Invalid authorization token") from None

    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user
