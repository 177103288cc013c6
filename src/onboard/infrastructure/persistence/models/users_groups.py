"""SQLAlchemy model for the users_groups junction table.

Each row is one group membership of a user. The autoincrement id keeps the
memberships in the order they were added.
"""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onboard.infrastructure.persistence.database import Base


class UsersGroupsModel(Base):
    """Junction table between users and groups.

    Attributes:
        id: Surrogate key, defines membership order.
        user_id: Foreign key to users table.
        group_id: Foreign key to groups table.
    """

    __tablename__ = "users_groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    group_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )

    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="memberships",
    )
    group: Mapped["GroupModel"] = relationship("GroupModel")  # noqa: F821

    __table_args__ = (UniqueConstraint("user_id", "group_id", name="uq_users_groups_user_group"),)

    def __repr__(self) -> str:
        return f"<UsersGroups(user_id={self.user_id}, group_id={self.group_id})>"
