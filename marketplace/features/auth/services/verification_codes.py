import logging
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.features.auth.exceptions import StoreError
from marketplace.features.auth.models.verification_code import VerificationCode
from marketplace.features.auth.services.interfaces import CodeCheckResult
from marketplace.features.auth.utils.security import generate_verification_code

logger = logging.getLogger(__name__)

VERIFICATION_CODE_TTL = timedelta(minutes=3)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def is_expired(expires_at: datetime, now: datetime) -> bool:
    # A code stops being usable at its expiry instant.
    return now >= expires_at


class DatabaseVerificationCodeManager:
    """
    Short-lived email verification codes, at most one row per user.

    Issuing relies on the database's native INSERT ... ON CONFLICT DO UPDATE so
    that concurrent issues for the same user leave exactly one row: whichever
    write lands last wins and earlier codes become mismatches.
    """

    def __init__(
        self,
        db: AsyncSession,
        clock: Callable[[], datetime] = datetime.utcnow,
        code_factory: Callable[[], str] = generate_verification_code,
    ):
        self.db = db
        self.clock = clock
        self.code_factory = code_factory

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise StoreError(f"Verification code upsert is not supported on {dialect}")

    async def issue_code(self, user_id: int, email: str) -> str:
        code = self.code_factory()
        expires_at = self.clock() + VERIFICATION_CODE_TTL

        stmt = self._insert()(VerificationCode).values(
            user_id=user_id, email=email, code=code, expires_at=expires_at
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={
                "email": stmt.excluded.email,
                "code": stmt.excluded.code,
                "expires_at": stmt.excluded.expires_at,
            },
        )

        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not store verification code for user {user_id}: {e}")
            raise StoreError("Error saving new verification code") from e

        logger.info(f"Verification code issued - user: {user_id}, expires_at: {expires_at}")
        return code

    async def check_code(self, user_id: int, submitted_code: str) -> CodeCheckResult:
        result = await self.db.execute(
            select(VerificationCode.code, VerificationCode.expires_at).where(
                VerificationCode.user_id == user_id
            )
        )
        record = result.one_or_none()

        if record is None:
            return CodeCheckResult.NO_ACTIVE_CODE

        if is_expired(record.expires_at, self.clock()):
            try:
                await self.delete_code(user_id)
            except StoreError:
                logger.warning(f"Failed to clean up expired verification code for user {user_id}")
            return CodeCheckResult.EXPIRED

        if record.code != submitted_code:
            return CodeCheckResult.MISMATCH

        return CodeCheckResult.VERIFIED

    async def delete_code(self, user_id: int) -> None:
        try:
            await self.db.execute(delete(VerificationCode).where(VerificationCode.user_id == user_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not delete verification code for user {user_id}: {e}")
            raise StoreError("Error deleting verification code") from e

    async def purge_expired(self) -> int:
        try:
            result = await self.db.execute(
                delete(VerificationCode).where(VerificationCode.expires_at <= self.clock())
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Expired verification code sweep failed: {e}")
            raise StoreError("Error purging expired verification codes") from e

        return result.rowcount or 0
