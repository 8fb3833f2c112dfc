from marketplace.features.auth.services.account_service import (
    AccountService,
    LoginResult,
    VerificationResult,
)
from marketplace.features.auth.services.credential_store import DatabaseCredentialStore
from marketplace.features.auth.services.session_issuer import SESSION_TTL, DatabaseSessionIssuer
from marketplace.features.auth.services.verification_codes import (
    VERIFICATION_CODE_TTL,
    DatabaseVerificationCodeManager,
)

__all__ = [
    "AccountService",
    "LoginResult",
    "VerificationResult",
    "DatabaseCredentialStore",
    "DatabaseSessionIssuer",
    "DatabaseVerificationCodeManager",
    "SESSION_TTL",
    "VERIFICATION_CODE_TTL",
]
