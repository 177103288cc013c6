"""SQLAlchemy models for Onboard tables.

All models inherit from the Base class defined in database.py.
"""

from onboard.infrastructure.persistence.models.configuration import ConfigurationModel
from onboard.infrastructure.persistence.models.group import GroupModel
from onboard.infrastructure.persistence.models.user import UserModel
from onboard.infrastructure.persistence.models.users_groups import UsersGroupsModel

__all__ = [
    "ConfigurationModel",
    "GroupModel",
    "UserModel",
    "UsersGroupsModel",
]
