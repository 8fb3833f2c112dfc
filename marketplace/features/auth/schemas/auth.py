from typing import Optional

from pydantic import BaseModel


# Request fields are optional at the schema level so that blank or missing
# values reach AccountService, which reports them as MISSING_FIELDS.
class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Gator",
                "email": "gator@ufl.edu",
                "password": "securepassword123",
            }
        }


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SendVerificationCodeRequest(BaseModel):
    email: Optional[str] = None


class VerifyCodeRequest(BaseModel):
    email: Optional[str] = None
    code: Optional[str] = None


class SignupResponse(BaseModel):
    user_id: int


class LoginResponse(BaseModel):
    session_id: str
    user_id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class VerifyCodeResponse(BaseModel):
    user_id: int
    already_verified: bool = False

    class Config:
        from_attributes = True
