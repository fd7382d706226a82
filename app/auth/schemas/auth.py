from pydantic import BaseModel, Field

from app.auth.models.user import UserRole
from app.auth.schemas.user import UserResponse


class AuthCredential(BaseModel):
    """Identity carried inside a signed access token."""

    user_id: str
    email: str
    role: UserRole


class LoginRequest(BaseModel):
    """Login request schema"""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """
    Returned after a successful login. The token is also set as an
    httpOnly cookie.
    """

    user: UserResponse
    token: str
    token_type: str = "bearer"


class LogoutResponse(BaseModel):
    message: str = "Successfully logged out"
