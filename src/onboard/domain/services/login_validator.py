"""Login validation service.

A login is valid when it is non-empty, at least ``min_length`` characters
long and free of whitespace and control characters.
"""

import re
from dataclasses import dataclass

_FORBIDDEN = re.compile(r"[\s\x00-\x1f\x7f]")


@dataclass(frozen=True)
class LoginValidationError:
    """Represents a login validation error.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    message: str
    code: str


class LoginValidator:
    """Validates the shape of a login name."""

    def __init__(self, min_length: int = 4) -> None:
        self.min_length = min_length

    def validate(self, login: str | None) -> list[LoginValidationError]:
        """Validate a login.

        Args:
            login: The login to validate.

        Returns:
            List of validation errors. Empty list if the login is valid.
        """
        if not login:
            return [LoginValidationError(message="Login is required", code="login_empty")]

        errors: list[LoginValidationError] = []
        if len(login) < self.min_length:
            errors.append(
                LoginValidationError(
                    message=f"Login must be at least {self.min_length} characters",
                    code="login_too_short",
                )
            )
        if _FORBIDDEN.search(login):
            errors.append(
                LoginValidationError(
                    message="Login must not contain whitespace or control characters",
                    code="login_invalid_characters",
                )
            )
        return errors

    def is_long_enough(self, login: str | None) -> bool:
        """Check only the emptiness and length rules."""
        return bool(login) and len(login) >= self.min_length

    def is_valid(self, login: str | None) -> bool:
        return not self.validate(login)
