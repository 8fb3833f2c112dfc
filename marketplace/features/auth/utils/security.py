import hashlib
import secrets

import bcrypt

SESSION_TOKEN_BYTES = 32
VERIFICATION_CODE_DIGITS = 6


def hash_password(password: str) -> str:
    # SHA-256 first so passwords longer than bcrypt's 72 byte limit still count in full
    password_hash = hashlib.sha256(password.encode("utf-8")).digest()

    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_hash, salt)

    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.
    Uses SHA-256 pre-hashing to match the hashing method.
    """
    password_hash = hashlib.sha256(plain_password.encode("utf-8")).digest()

    try:
        return bcrypt.checkpw(password_hash, hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed or empty stored hash
        return False


def generate_session_token() -> str:
    """Generate a 256-bit URL-safe session token"""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def generate_verification_code() -> str:
    """Generate a zero-padded 6-digit verification code"""
    return f"{secrets.randbelow(10 ** VERIFICATION_CODE_DIGITS):0{VERIFICATION_CODE_DIGITS}d}"


class BcryptPasswordHasher:
    """PasswordHasher backed by bcrypt over a SHA-256 pre-hash."""

    def hash(self, plaintext: str) -> str:
        return hash_password(plaintext)

    def verify(self, hashed: str, plaintext: str) -> bool:
        return verify_password(plaintext, hashed)
