import uuid
from datetime import UTC, datetime
from typing import cast

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.core.repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def find_by_email(self, email: str) -> User | None:
        return cast(User | None, self.db.query(User).filter(User.email == email).first())

    def find_by_reset_token(self, token_digest: str) -> User | None:
        return cast(
            User | None,
            self.db.query(User).filter(User.reset_token == token_digest).first(),
        )

    def set_reset_token(self, user: User, token_digest: str, expires_at: datetime) -> User:
        # Both fields are written in the same commit
        return self.update(user, reset_token=token_digest, reset_token_expires=expires_at)

    def consume_reset_token(
        self, user_id: uuid.UUID, token_digest: str, new_password_hash: str
    ) -> bool:
        """Swap in the new password hash and clear the reset token in one statement.

        The update only matches while the row still holds ``token_digest``, so
        of two concurrent confirmations at most one sees a matching row.

        Returns:
            True if this call consumed the token.
        """
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, User.reset_token == token_digest)
            .values(
                hashed_password=new_password_hash,
                reset_token=None,
                reset_token_expires=None,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return bool(result.rowcount == 1)  # type: ignore[attr-defined]
