# services/password_policy.py
from config import settings


def password_policy_errors(password: str) -> list[str]:
    """Return every complexity rule the password breaks (empty list when it passes)."""
    errors: list[str] = []
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long")
    if settings.PASSWORD_REQUIRE_DIGIT and not any(c.isdigit() for c in password):
        errors.append("Password must contain at least one digit")
    if settings.PASSWORD_REQUIRE_LOWERCASE and not any(c.islower() for c in password):
        errors.append("Password must contain at least one lowercase letter")
    if settings.PASSWORD_REQUIRE_UPPERCASE and not any(c.isupper() for c in password):
        errors.append("Password must contain at least one uppercase letter")
    if settings.PASSWORD_REQUIRE_NON_ALPHANUMERIC and all(c.isalnum() for c in password):
        errors.append("Password must contain at least one non-alphanumeric character")
    return errors
