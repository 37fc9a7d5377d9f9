import re

from activityrec.errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100


def is_email(value: str) -> bool:
    return bool(EMAIL_RE.fullmatch(value)) and len(value) <= 255


def validate_name(name: str) -> None:
    """Validate display name length after trimming surrounding whitespace."""
    stripped = name.strip()
    if len(stripped) < NAME_MIN_LENGTH:
        raise ValidationError(f"Name must be at least {NAME_MIN_LENGTH} characters")
    if len(stripped) > NAME_MAX_LENGTH:
        raise ValidationError("Name is too long")


def validate_email(email: str) -> None:
    if not is_email(email):
        raise ValidationError("Invalid email address")


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - Minimum length of 8 characters
    - Maximum length of 100 characters

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValidationError("Password is too long")
