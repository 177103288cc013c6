"""Persistence repositories for database operations."""

from onboard.infrastructure.persistence.repositories.configuration_repository import (
    ConfigurationRepository,
)
from onboard.infrastructure.persistence.repositories.group_repository import (
    GroupRepository,
)
from onboard.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "ConfigurationRepository",
    "GroupRepository",
    "UserRepository",
]
