"""Password reset lifecycle.

A user is either without a pending reset (both reset columns null) or has one
pending (both set). ``request_reset`` moves a known user into the pending
state and e-mails the raw token; ``confirm_reset`` consumes the token and
moves the user back.
"""

import structlog
from sqlalchemy.orm import Session

from app.auth.repository import UserRepository
from app.auth.services.email_service import (
    EmailService,
    build_password_reset_email,
    get_email_service,
)
from app.core import security
from app.core.config import Settings, settings
from app.core.exceptions import InvalidOrExpiredTokenError, WeakPasswordError

logger = structlog.get_logger(__name__)

GENERIC_RESET_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)
RESET_SUCCESS_MESSAGE = "Password has been reset successfully"


class PasswordResetService:
    def __init__(
        self,
        db: Session,
        email_service: EmailService | None = None,
        config: Settings | None = None,
    ):
        self.db = db
        self.users = UserRepository(db)
        self.email_service = email_service
        self.config = config or settings

    async def request_reset(self, email: str) -> str:
        """Start a reset for ``email`` and return the message shown to the caller.

        The message is identical whether or not the address is registered and
        whether or not storing the token or sending the e-mail succeeded.
        """
        try:
            await self._issue_reset(email)
        except Exception as e:
            logger.error("password_reset_request_failed", error=str(e), exc_info=True)
            self.db.rollback()
        return GENERIC_RESET_MESSAGE

    async def _issue_reset(self, email: str) -> None:
        user = self.users.find_by_email(email)
        if user is None:
            logger.info("password_reset_unknown_email")
            return

        raw_token, hashed_token, expiry = security.generate_reset_token(self.config)
        self.users.set_reset_token(user, hashed_token, expiry)

        message = build_password_reset_email(user.email, raw_token, self.config)
        mailer = self.email_service or get_email_service()
        try:
            await mailer.send_email(message)
        except Exception as e:
            # The token stays stored; the user can simply request another one
            logger.error(
                "password_reset_email_failed",
                user_id=str(user.id),
                error=str(e),
                exc_info=True,
            )
            return

        logger.info("password_reset_email_sent", user_id=str(user.id))

    def confirm_reset(self, token: str, new_password: str) -> None:
        """Set a new password using a pending reset token.

        Raises:
            WeakPasswordError: the password is shorter than the configured minimum.
            InvalidOrExpiredTokenError: the token is unknown, expired or already used.
        """
        min_length = self.config.PASSWORD_MIN_LENGTH
        if len(new_password) < min_length:
            raise WeakPasswordError(min_length)

        hashed_token = security.hash_token(token)
        user = self.users.find_by_reset_token(hashed_token)

        if user is None or user.reset_token_expires is None:
            raise InvalidOrExpiredTokenError()

        # Expired tokens are left in place; they keep failing this check
        if security.is_token_expired(user.reset_token_expires):
            logger.info("password_reset_token_expired", user_id=str(user.id))
            raise InvalidOrExpiredTokenError()

        new_hash = security.get_password_hash(new_password)
        if not self.users.consume_reset_token(user.id, hashed_token, new_hash):
            logger.info("password_reset_token_already_consumed", user_id=str(user.id))
            raise InvalidOrExpiredTokenError()

        logger.info("password_reset_completed", user_id=str(user.id))
