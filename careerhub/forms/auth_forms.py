"""Local validation for the signup and password-reset forms."""

import re

from pydantic import BaseModel, ConfigDict

from careerhub.core.config import AuthConfig
from careerhub.core.errors import FormValidationError

MIN_PASSWORD_LENGTH = AuthConfig().min_password_length


class PasswordStrength(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_min_length: bool
    has_upper_case: bool
    has_lower_case: bool
    has_number: bool

    @property
    def is_strong(self) -> bool:
        return all((self.has_min_length, self.has_upper_case, self.has_lower_case, self.has_number))


def password_strength(password: str, min_length: int = MIN_PASSWORD_LENGTH) -> PasswordStrength:
    return PasswordStrength(
        has_min_length=len(password) >= min_length,
        has_upper_case=re.search(r"[A-Z]", password) is not None,
        has_lower_case=re.search(r"[a-z]", password) is not None,
        has_number=re.search(r"[0-9]", password) is not None,
    )


def validate_signup(
    password: str, confirm: str, min_length: int = MIN_PASSWORD_LENGTH,
) -> None:
    """Raises FormValidationError unless the passwords match and are strong."""
    if password != confirm:
        msg = "Passwords do not match"
        raise FormValidationError(msg)
    if not password_strength(password, min_length).is_strong:
        msg = "Please meet all password requirements"
        raise FormValidationError(msg)


def validate_password_reset(
    password: str, confirm: str, min_length: int = MIN_PASSWORD_LENGTH,
) -> None:
    if len(password) < min_length:
        msg = f"Password must be at least {min_length} characters long."
        raise FormValidationError(msg)
    if password != confirm:
        msg = "Passwords do not match."
        raise FormValidationError(msg)
