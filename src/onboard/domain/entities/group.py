"""Group entity for user organization.

New accounts join the configured default group.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Group:
    """Group entity.

    Attributes:
        id: Unique identifier (UUID string).
        name: Group name (unique).
        description: Optional description of the group's purpose.
        created_at: Timestamp when the group was created.
    """

    id: str
    name: str
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate group data after initialization."""
        if not self.id:
            raise ValueError("Group ID is required")
        if not self.name:
            raise ValueError("Group name is required")
