import re

from src.domain.result import Error, ErrorCode, Result, Return

MIN_PASSWORD_LENGTH = 8
# bcrypt refuses input longer than this
MAX_PASSWORD_BYTES = 72

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> Result[None]:
    if not EMAIL_PATTERN.match(email or ""):
        return Return.err(Error(ErrorCode.VALIDATION_ERROR, "Please provide a valid email"))
    return Return.ok(None)


def validate_password(password: str) -> Result[None]:
    """
    Validate password strength.

    Rules: at least 8 characters and at most 72 UTF-8 bytes, one lower-case
    letter, one upper-case letter and one digit.
    """
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                ErrorCode.VALIDATION_ERROR,
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return Return.err(
            Error(
                ErrorCode.VALIDATION_ERROR,
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
            )
        )

    if (
        not re.search(r"[a-z]", password)
        or not re.search(r"[A-Z]", password)
        or not re.search(r"\d", password)
    ):
        return Return.err(
            Error(
                ErrorCode.VALIDATION_ERROR,
                "Password must contain at least one lowercase letter, "
                "one uppercase letter, and one number",
            )
        )

    return Return.ok(None)
