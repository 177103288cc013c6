"""Tagged result returned by the registration and linking workflows.

A result carries either a user or a rejection. The one overlap is
``PENDING_CONFIRMATION``: the account exists (``user`` is set) but cannot
authenticate yet.
"""

from dataclasses import dataclass
from enum import Enum

from onboard.domain.entities.user import User


class Rejection(str, Enum):
    """Reasons a workflow did not produce a usable account.

    Values are the legacy error codes callers already translate.
    """

    REGISTRATION_DISABLED = "error.reg.disabled"
    LOGIN_TOO_SHORT = "error.short.login"
    INVALID_LOGIN = "error.login.invalid"
    LOGIN_IN_USE = "error.login.inuse"
    EMAIL_IN_USE = "error.email.inuse"
    EMAIL_CONFLICT = "error.email.conflict"
    PENDING_CONFIRMATION = "registration.pending.confirmation"
    UNKNOWN = "error.unknown"


@dataclass(frozen=True)
class OnboardingResult:
    """Outcome of a workflow call.

    Attributes:
        user: The created or linked user, when one exists.
        rejection: Why the workflow did not produce a usable account.
        notification_error: Set when the account was created but the
            activation email could not be dispatched.
    """

    user: User | None = None
    rejection: Rejection | None = None
    notification_error: str | None = None

    @classmethod
    def success(cls, user: User) -> "OnboardingResult":
        return cls(user=user)

    @classmethod
    def reject(cls, rejection: Rejection) -> "OnboardingResult":
        return cls(rejection=rejection)

    @classmethod
    def pending(cls, user: User) -> "OnboardingResult":
        return cls(user=user, rejection=Rejection.PENDING_CONFIRMATION)

    @property
    def ok(self) -> bool:
        """True when a usable account was produced."""
        return self.user is not None and self.rejection is None

    @property
    def is_pending(self) -> bool:
        return self.rejection == Rejection.PENDING_CONFIRMATION
