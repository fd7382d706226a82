from typing import Any

from app.auth.models.user import User, UserRole
from app.auth.schemas.auth import AuthCredential
from app.core.security import create_access_token

VIDEO_PAYLOAD: dict[str, Any] = {
    "title": "Wisdom from New York",
    "description": "Street wisdom about pursuing your dreams.",
    "platform": "tiktok",
    "url": "https://www.tiktok.com/@example/video/1234567890",
    "tags": ["motivation", "dreams", "nyc"],
    "location": "New York, USA",
    "lat": 40.7128,
    "lng": -74.006,
}


def create_token_for(user: User) -> str:
    return create_access_token(
        AuthCredential(user_id=str(user.id), email=user.email, role=UserRole(user.role))
    )


def create_auth_headers(token: str) -> dict[str, str]:
    """Create Authorization headers with Bearer token."""
    return {"Authorization": f"Bearer {token}"}


def create_cookie_headers(token: str, cookie_name: str = "token") -> dict[str, str]:
    """Send the token the way the browser does, as the auth cookie."""
    return {"Cookie": f"{cookie_name}={token}"}


def assert_error_code(data: dict[str, Any], code: str) -> None:
    assert data["success"] is False
    assert data["error"]["code"] == code
