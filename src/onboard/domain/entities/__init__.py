"""Domain entities for Onboard.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from onboard.domain.entities.group import Group
from onboard.domain.entities.identity_assertion import IdentityAssertion
from onboard.domain.entities.onboarding_result import OnboardingResult, Rejection
from onboard.domain.entities.user import (
    DEFAULT_RIGHTS,
    Address,
    GroupMembership,
    Right,
    User,
    UserBuilder,
    UserType,
)

__all__ = [
    "Address",
    "DEFAULT_RIGHTS",
    "Group",
    "GroupMembership",
    "IdentityAssertion",
    "OnboardingResult",
    "Rejection",
    "Right",
    "User",
    "UserBuilder",
    "UserType",
]
