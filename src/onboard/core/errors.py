"""Exceptions raised across the onboarding core.

Business rejections (duplicate login, short login, ...) are not exceptions;
they travel as ``OnboardingResult`` values. The classes here cover failures of
the collaborators the workflows depend on.
"""


class OnboardingError(Exception):
    """Base class for onboarding failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CollaboratorError(OnboardingError):
    """A dependency (storage, hashing, group lookup, locale data) failed.

    The original exception is always chained as ``__cause__``.
    """


class UniquenessViolationError(OnboardingError):
    """The user directory rejected a write that breaks a uniqueness rule.

    Attributes:
        field: Which rule was violated, ``"login"`` or ``"email"``.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Duplicate {field}")
