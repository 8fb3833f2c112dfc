from marketplace.features.auth.models.session import UserSession
from marketplace.features.auth.models.user import User
from marketplace.features.auth.models.verification_code import VerificationCode

__all__ = ["User", "UserSession", "VerificationCode"]
