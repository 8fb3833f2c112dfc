from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.features.auth.exceptions import InvalidSessionError
from marketplace.features.auth.services import (
    AccountService,
    DatabaseCredentialStore,
    DatabaseSessionIssuer,
    DatabaseVerificationCodeManager,
)
from marketplace.features.auth.services.interfaces import EmailSender
from marketplace.features.auth.utils.security import BcryptPasswordHasher
from marketplace.platform.db.session import get_db
from marketplace.platform.services.email import RelayEmailSender

security = HTTPBearer(auto_error=False)


def get_email_sender() -> EmailSender:
    return RelayEmailSender()


def get_account_service(
    db: AsyncSession = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
) -> AccountService:
    return AccountService(
        credentials=DatabaseCredentialStore(db),
        hasher=BcryptPasswordHasher(),
        sessions=DatabaseSessionIssuer(db),
        codes=DatabaseVerificationCodeManager(db),
        email_sender=email_sender,
    )


async def require_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    account_service: AccountService = Depends(get_account_service),
) -> str:
    """
    Dependency guarding routes that need a live session. Returns the session token.
    """
    token = credentials.credentials if credentials else None
    if not await account_service.validate_session(token):
        raise InvalidSessionError()
    return token
