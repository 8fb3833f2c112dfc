from fastapi import APIRouter, Depends, status

from marketplace.features.auth.dependencies import get_account_service, require_session
from marketplace.features.auth.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SendVerificationCodeRequest,
    SignupRequest,
    SignupResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)
from marketplace.features.auth.services import VERIFICATION_CODE_TTL, AccountService
from marketplace.platform.response import api_response

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/signup",
    response_model=dict,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a new, unverified account with name, email and password",
)
async def signup(
    request: SignupRequest,
    account_service: AccountService = Depends(get_account_service),
):
    """
    Register a new user account.
    The account must verify its email before it can log in.
    """
    user_id = await account_service.signup(request.name, request.password, request.email)

    return api_response(
        data=SignupResponse(user_id=user_id),
        message="User registered successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.post(
    "/login",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Login user",
    description="Authenticate a verified user with email and password",
)
async def login(
    request: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
):
    """
    Login with email and password.
    Returns a session id valid for 24 hours.
    """
    result = await account_service.login(request.email, request.password)

    return api_response(
        data=LoginResponse.model_validate(result),
        message="Login successful",
        status_code=status.HTTP_200_OK,
    )


@router.post(
    "/send-verification-code",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Send email verification code",
)
async def send_verification_code(
    request: SendVerificationCodeRequest,
    account_service: AccountService = Depends(get_account_service),
):
    await account_service.send_verification_code(request.email)

    minutes = int(VERIFICATION_CODE_TTL.total_seconds() // 60)
    return api_response(
        data={"email": request.email},
        message=f"Verification code sent successfully. Code will be active for {minutes} minutes.",
        status_code=status.HTTP_200_OK,
    )


@router.post(
    "/verify-code",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Verify email with code",
    description="Verify a user's email address using the code sent to it",
)
async def verify_code(
    request: VerifyCodeRequest,
    account_service: AccountService = Depends(get_account_service),
):
    result = await account_service.verify_code(request.email, request.code)

    if result.already_verified:
        message = "Email associated with account is already verified"
    else:
        message = f"Email {request.email} successfully verified"

    return api_response(
        data=VerifyCodeResponse.model_validate(result),
        message=message,
        status_code=status.HTTP_200_OK,
    )


@router.get(
    "/session",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Check session",
    description="Confirm that the bearer session id exists and has not expired",
)
async def check_session(session_id: str = Depends(require_session)):
    return api_response(data={"valid": True}, message="Session is valid")
