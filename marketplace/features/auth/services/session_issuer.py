import logging
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.features.auth.exceptions import StoreError
from marketplace.features.auth.models.session import UserSession
from marketplace.features.auth.utils.security import generate_session_token

logger = logging.getLogger(__name__)

SESSION_TTL = timedelta(hours=24)


class DatabaseSessionIssuer:
    """
    Issues opaque session tokens with an absolute 24 hour expiry.

    A new login always creates a new row; existing sessions of the same user
    stay valid until they expire on their own.
    """

    def __init__(
        self,
        db: AsyncSession,
        clock: Callable[[], datetime] = datetime.utcnow,
        token_factory: Callable[[], str] = generate_session_token,
    ):
        self.db = db
        self.clock = clock
        self.token_factory = token_factory

    async def create_session(self, user_id: int) -> str:
        session_id = self.token_factory()
        expires_at = self.clock() + SESSION_TTL

        try:
            self.db.add(UserSession(session_id=session_id, user_id=user_id, expires_at=expires_at))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not create session for user {user_id}: {e}")
            raise StoreError("Error creating session") from e

        return session_id

    async def validate_session(self, token: str) -> bool:
        if not token:
            return False

        result = await self.db.execute(
            select(UserSession.session_id).where(
                UserSession.session_id == token,
                UserSession.expires_at > self.clock(),
            )
        )
        return result.scalar_one_or_none() is not None
