from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.auth.schemas.password import (
    ForgotPasswordRequest,
    MessageResponse,
    ResetPasswordRequest,
)
from app.auth.services.email_service import EmailService, get_email_service
from app.auth.services.password_reset_service import (
    RESET_SUCCESS_MESSAGE,
    PasswordResetService,
)
from app.core.constants import FORGOT_PASSWORD_RATE_LIMIT, RESET_PASSWORD_RATE_LIMIT
from app.core.rate_limit import limiter
from app.db.session import get_db

router = APIRouter()


@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit(FORGOT_PASSWORD_RATE_LIMIT)
async def forgot_password(
    request: Request,
    data: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> MessageResponse:
    service = PasswordResetService(db, email_service)
    message = await service.request_reset(data.email)
    return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
@limiter.limit(RESET_PASSWORD_RATE_LIMIT)
async def reset_password(
    request: Request,
    data: ResetPasswordRequest,
    db: Session = Depends(get_db),
) -> MessageResponse:
    service = PasswordResetService(db)
    service.confirm_reset(data.token, data.password)
    return MessageResponse(message=RESET_SUCCESS_MESSAGE)
