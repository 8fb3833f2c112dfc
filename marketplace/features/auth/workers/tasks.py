"""
Celery tasks for verification code housekeeping.

Request-time checks already delete an expired code when it is presented;
this sweep removes the ones nobody comes back for.
"""
import asyncio
import logging

from celery import shared_task
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from marketplace.features.auth.services.verification_codes import DatabaseVerificationCodeManager
from marketplace.platform.celery_app import PURGE_TASK_NAME, celery_app  # noqa: F401
from marketplace.platform.config import settings

logger = logging.getLogger(__name__)


async def purge_expired_codes(database_url: str) -> int:
    # Each run gets its own engine: asyncio.run() creates a fresh event loop
    engine = create_async_engine(database_url, poolclass=NullPool)
    try:
        async with async_sessionmaker(engine, expire_on_commit=False)() as db:
            return await DatabaseVerificationCodeManager(db).purge_expired()
    finally:
        await engine.dispose()


@shared_task(name=PURGE_TASK_NAME)
def purge_expired_verification_codes() -> int:
    logger.info("Purging expired verification codes...")
    removed = asyncio.run(purge_expired_codes(settings.DATABASE_URL))
    logger.info(f"Purged {removed} expired verification codes")
    return removed
