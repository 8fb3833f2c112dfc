import logging
from dataclasses import dataclass
from typing import Optional

from marketplace.features.auth.exceptions import (
    AlreadyRegisteredError,
    AlreadyVerifiedError,
    CodeExpiredError,
    CodeMismatchError,
    DeliveryError,
    DuplicateEmailError,
    InvalidCredentialsError,
    MissingFieldsError,
    NoActiveCodeError,
    NotVerifiedError,
    StoreError,
    UserNotFoundError,
)
from marketplace.features.auth.services.interfaces import (
    CodeCheckResult,
    CredentialStore,
    EmailSender,
    PasswordHasher,
    SessionIssuer,
    VerificationCodeManager,
)
from marketplace.features.auth.services.verification_codes import VERIFICATION_CODE_TTL
from marketplace.features.auth.utils.emailer import render_verification_email
from marketplace.platform.services.email import EmailDeliveryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    session_id: str
    user_id: int
    name: str
    email: str


@dataclass(frozen=True)
class VerificationResult:
    user_id: int
    already_verified: bool = False


def _missing(*values: Optional[str]) -> bool:
    return any(not value for value in values)


class AccountService:
    """
    Signup, login and email verification built on injected capabilities.

    Login is refused for accounts whose email has not been verified. Unknown
    email and wrong password produce the same error at login; signup and
    verification report an unknown or duplicate email explicitly.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        hasher: PasswordHasher,
        sessions: SessionIssuer,
        codes: VerificationCodeManager,
        email_sender: EmailSender,
    ):
        self.credentials = credentials
        self.hasher = hasher
        self.sessions = sessions
        self.codes = codes
        self.email_sender = email_sender

    async def signup(self, name: Optional[str], password: Optional[str], email: Optional[str]) -> int:
        if _missing(name, password, email):
            raise MissingFieldsError("Email, name and password required")

        if await self.credentials.email_exists(email):
            logger.warning(f"Signup rejected - email already registered: {email}")
            raise AlreadyRegisteredError()

        try:
            user_id = await self.credentials.create_user(name, self.hasher.hash(password), email)
        except DuplicateEmailError:
            # Lost a race with a concurrent signup for the same email
            logger.warning(f"Signup rejected by unique constraint - email: {email}")
            raise AlreadyRegisteredError()

        logger.info(f"User registered - user: {user_id}, email: {email}")
        return user_id

    async def login(self, email: Optional[str], password: Optional[str]) -> LoginResult:
        if _missing(email, password):
            raise MissingFieldsError("Email and password required")

        user = await self.credentials.find_by_email(email)
        if user is None or not self.hasher.verify(user.password_hash, password):
            logger.warning(f"Login failed - invalid credentials for email: {email}")
            raise InvalidCredentialsError()

        account = await self.credentials.get_account_state(user.user_id)
        if account is None:
            raise StoreError("Error getting user details")

        if not account.is_verified:
            logger.warning(f"Login refused - email not verified, user: {user.user_id}")
            raise NotVerifiedError()

        session_id = await self.sessions.create_session(user.user_id)

        logger.info(f"Login successful - user: {user.user_id}")
        return LoginResult(
            session_id=session_id,
            user_id=user.user_id,
            name=user.name,
            email=email,
        )

    async def _lookup_account(self, email: str):
        user = await self.credentials.find_by_email(email)
        if user is None:
            raise UserNotFoundError()

        account = await self.credentials.get_account_state(user.user_id)
        if account is None:
            raise UserNotFoundError()

        return user.user_id, account

    async def send_verification_code(self, email: Optional[str]) -> None:
        if _missing(email):
            raise MissingFieldsError("Email is required for verification")

        user_id, account = await self._lookup_account(email)
        if account.is_verified:
            raise AlreadyVerifiedError()

        code = await self.codes.issue_code(user_id, email)

        subject, body = render_verification_email(
            code, expiration_minutes=int(VERIFICATION_CODE_TTL.total_seconds() // 60)
        )
        try:
            await self.email_sender.send(email, subject, body)
        except EmailDeliveryError as e:
            # The issued code stays in place; a retry issues and overwrites it.
            logger.error(f"Verification email delivery failed - user: {user_id}, email: {email}: {e}")
            raise DeliveryError(f"Error sending email: {e}")

        logger.info(f"Verification code sent - user: {user_id}, email: {email}")

    async def verify_code(self, email: Optional[str], code: Optional[str]) -> VerificationResult:
        if _missing(email, code):
            raise MissingFieldsError("Missing required fields: email and code")

        user_id, account = await self._lookup_account(email)
        if account.is_verified:
            return VerificationResult(user_id=user_id, already_verified=True)

        outcome = await self.codes.check_code(user_id, code)

        if outcome == CodeCheckResult.NO_ACTIVE_CODE:
            raise NoActiveCodeError()
        if outcome == CodeCheckResult.EXPIRED:
            logger.info(f"Verification code expired - user: {user_id}")
            raise CodeExpiredError()
        if outcome == CodeCheckResult.MISMATCH:
            logger.warning(f"Verification code mismatch - user: {user_id}")
            raise CodeMismatchError()

        await self.credentials.mark_verified(user_id)

        try:
            await self.codes.delete_code(user_id)
        except StoreError:
            logger.warning(f"Failed to delete verification code for user {user_id}")

        logger.info(f"Email verified - user: {user_id}, email: {email}")
        return VerificationResult(user_id=user_id)

    async def validate_session(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return await self.sessions.validate_session(token)
