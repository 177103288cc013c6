"""SQLAlchemy model for the configurations table.

Key/value overrides for runtime policy (email verification, self registration,
base URL, defaults). A missing row means the value from ``Settings`` applies.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from onboard.infrastructure.persistence.database import Base


class ConfigurationModel(Base):
    """SQLAlchemy model for the configurations table.

    Attributes:
        key: Configuration key such as ``email.verification``.
        value: Raw string value.
        description: Optional note for operators.
        updated_at: Timestamp of the last change.
    """

    __tablename__ = "configurations"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Configuration(key={self.key}, value={self.value})>"
