from marketplace.features.auth.utils.security import (
    BcryptPasswordHasher,
    generate_session_token,
    generate_verification_code,
    hash_password,
    verify_password,
)

__all__ = [
    "BcryptPasswordHasher",
    "generate_session_token",
    "generate_verification_code",
    "hash_password",
    "verify_password",
]
