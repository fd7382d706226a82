import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.auth.models.user import User, UserRole
from app.auth.repository import UserRepository
from app.auth.schemas.auth import AuthCredential, LoginRequest, LoginResponse, LogoutResponse
from app.auth.schemas.user import UserResponse
from app.core import security
from app.core.constants import LOGIN_RATE_LIMIT
from app.core.exceptions import UnauthorizedError
from app.core.rate_limit import limiter
from app.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_user_response(user: User) -> UserResponse:
    return UserResponse(id=str(user.id), email=user.email, role=user.role)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> LoginResponse:
    user = UserRepository(db).find_by_email(credentials.email)

    # Same error for unknown email and wrong password
    if user is None or not security.verify_password(
        credentials.password, user.hashed_password
    ):
        raise UnauthorizedError("Invalid email or password")

    access_token = security.create_access_token(
        AuthCredential(user_id=str(user.id), email=user.email, role=UserRole(user.role))
    )
    security.set_auth_cookie(response, access_token)

    logger.info("user_logged_in", extra={"user_id": str(user.id)})
    return LoginResponse(user=_to_user_response(user), token=access_token)


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response) -> LogoutResponse:
    security.clear_auth_cookie(response)
    return LogoutResponse()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    return _to_user_response(current_user)
