"""
Capability interfaces the account lifecycle is composed from.

AccountService only talks to these protocols; the database-backed
implementations live beside this module and tests swap in in-memory fakes.
"""
import enum
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class UserCredentials:
    user_id: int
    password_hash: str
    name: str


@dataclass(frozen=True)
class AccountState:
    password_hash: str
    name: str
    email: str
    is_verified: bool


class CodeCheckResult(str, enum.Enum):
    VERIFIED = "verified"
    NO_ACTIVE_CODE = "no_active_code"
    EXPIRED = "expired"
    MISMATCH = "mismatch"


class CredentialStore(Protocol):
    async def email_exists(self, email: str) -> bool: ...

    async def create_user(self, name: str, password_hash: str, email: str) -> int: ...

    async def find_by_email(self, email: str) -> Optional[UserCredentials]: ...

    async def get_account_state(self, user_id: int) -> Optional[AccountState]: ...

    async def mark_verified(self, user_id: int) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...

    def verify(self, hashed: str, plaintext: str) -> bool: ...


class SessionIssuer(Protocol):
    async def create_session(self, user_id: int) -> str: ...

    async def validate_session(self, token: str) -> bool: ...


class VerificationCodeManager(Protocol):
    async def issue_code(self, user_id: int, email: str) -> str: ...

    async def check_code(self, user_id: int, submitted_code: str) -> CodeCheckResult: ...

    async def delete_code(self, user_id: int) -> None: ...

    async def purge_expired(self) -> int: ...


class EmailSender(Protocol):
    async def send(self, to: str, subject: str, body: str) -> None:
        """Deliver a message or raise EmailDeliveryError."""
        ...
