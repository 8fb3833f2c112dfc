from enum import Enum

from fastapi import status

from marketplace.platform.exceptions import AppError


class ErrorCode(str, Enum):
    MISSING_FIELDS = "MISSING_FIELDS"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    ALREADY_VERIFIED = "ALREADY_VERIFIED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_VERIFIED = "NOT_VERIFIED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NO_ACTIVE_CODE = "NO_ACTIVE_CODE"
    CODE_EXPIRED = "CODE_EXPIRED"
    CODE_MISMATCH = "CODE_MISMATCH"
    INVALID_SESSION = "INVALID_SESSION"
    DELIVERY_FAILED = "DELIVERY_FAILED"
    STORE_ERROR = "STORE_ERROR"


class AccountError(AppError):
    """Base for every failure raised by the account lifecycle."""


class MissingFieldsError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.MISSING_FIELDS.value
    message = "Required fields are missing"


class AlreadyRegisteredError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.ALREADY_REGISTERED.value
    message = "Email already registered"


class AlreadyVerifiedError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.ALREADY_VERIFIED.value
    message = "Account is already verified"


class InvalidCredentialsError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCode.INVALID_CREDENTIALS.value
    message = "Invalid credentials"


class NotVerifiedError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCode.NOT_VERIFIED.value
    message = "Email not verified. Verify email to login"


class UserNotFoundError(AccountError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCode.USER_NOT_FOUND.value
    message = "No account is registered with this email"


class NoActiveCodeError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.NO_ACTIVE_CODE.value
    message = "No active verification code found. Resend the verification code and try again."


class CodeExpiredError(AccountError):
    status_code = status.HTTP_410_GONE
    error_code = ErrorCode.CODE_EXPIRED.value
    message = "Verification code has expired. Request a new code."


class CodeMismatchError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCode.CODE_MISMATCH.value
    message = "Invalid verification code"


class InvalidSessionError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCode.INVALID_SESSION.value
    message = "Invalid or expired session"


class DeliveryError(AccountError):
    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = ErrorCode.DELIVERY_FAILED.value
    message = "Could not send the verification email"


class StoreError(AccountError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = ErrorCode.STORE_ERROR.value
    message = "Internal server error"


class DuplicateEmailError(StoreError):
    """Raised by the credential store when the email uniqueness constraint fires."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.ALREADY_REGISTERED.value
    message = "Email already registered"
