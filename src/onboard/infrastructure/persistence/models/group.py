"""SQLAlchemy model for the groups table."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from onboard.infrastructure.persistence.database import Base


class GroupModel(Base):
    """SQLAlchemy model for the groups table.

    Attributes:
        id: Primary key (UUID string).
        name: Group name (unique).
        description: Optional description.
        created_at: Timestamp when the group was created.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Group ID (UUID)")
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name})>"
