from marketplace.features.auth.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SendVerificationCodeRequest,
    SignupRequest,
    SignupResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "SendVerificationCodeRequest",
    "SignupRequest",
    "SignupResponse",
    "VerifyCodeRequest",
    "VerifyCodeResponse",
]
