from marketplace.platform.config import settings
from marketplace.platform.services.email import env

VERIFICATION_SUBJECT = "UFMarketPlace Verification Code"


def render_verification_email(otp: str, expiration_minutes: int) -> tuple[str, str]:
    """Used for: Signup email verification. Returns (subject, body)."""
    template = env.get_template("verification_code.txt")
    body = template.render(
        otp_code=otp,
        expiration_minutes=expiration_minutes,
        app_name=settings.APP_NAME,
    )
    return VERIFICATION_SUBJECT, body
