import logging
from typing import Optional

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.features.auth.exceptions import DuplicateEmailError, StoreError
from marketplace.features.auth.models.user import User
from marketplace.features.auth.services.interfaces import AccountState, UserCredentials

logger = logging.getLogger(__name__)


class DatabaseCredentialStore:
    """Users table access. The unique index on email is the source of truth for duplicates."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())

    async def create_user(self, name: str, password_hash: str, email: str) -> int:
        new_user = User(name=name, email=email, password_hash=password_hash, is_verified=False)

        try:
            self.db.add(new_user)
            await self.db.commit()
            await self.db.refresh(new_user)
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateEmailError()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not insert user {email}: {e}")
            raise StoreError("Could not register user") from e

        return new_user.id

    async def find_by_email(self, email: str) -> Optional[UserCredentials]:
        result = await self.db.execute(
            select(User.id, User.password_hash, User.name).where(User.email == email)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return UserCredentials(user_id=row.id, password_hash=row.password_hash, name=row.name)

    async def get_account_state(self, user_id: int) -> Optional[AccountState]:
        result = await self.db.execute(
            select(User.password_hash, User.name, User.email, User.is_verified).where(
                User.id == user_id
            )
        )
        row = result.one_or_none()
        if row is None:
            return None
        return AccountState(
            password_hash=row.password_hash,
            name=row.name,
            email=row.email,
            is_verified=bool(row.is_verified),
        )

    async def mark_verified(self, user_id: int) -> None:
        try:
            await self.db.execute(
                update(User).where(User.id == user_id).values(is_verified=True)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not mark user {user_id} verified: {e}")
            raise StoreError("Verification update failed") from e
