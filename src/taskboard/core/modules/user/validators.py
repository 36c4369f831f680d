from taskboard.errors import ValidationError
from taskboard.utils import is_email

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit


def normalize_email(email: str) -> str:
    return email.strip().lower()


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def validate_registration(name: str | None, email: str | None, password: str | None) -> tuple[str, str, str]:
    """Validate registration input and return normalized (name, email, password).

    Raises:
        ValidationError: If a field is missing or malformed
    """
    if not name or not name.strip() or not email or not email.strip() or not password:
        raise ValidationError("Name, email and password are required")

    normalized_email = normalize_email(email)
    if not is_email(normalized_email):
        raise ValidationError("Please provide a valid email address")

    validate_password(password)
    return name.strip(), normalized_email, password


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - Minimum length of 6 characters
    - At most 72 bytes once UTF-8 encoded
    - Not only whitespace

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if password_too_long(password):
        raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")

    if not password.strip():
        raise ValidationError("Password cannot consist of whitespace only")
