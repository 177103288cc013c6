"""Repository for group database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from onboard.domain.entities.group import Group
from onboard.infrastructure.persistence.models import GroupModel


class GroupRepository:
    """Repository for group database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, group: Group) -> Group:
        """Create a new group.

        Args:
            group: Group entity to store.

        Returns:
            The stored group.
        """
        model = GroupModel(
            id=group.id,
            name=group.name,
            description=group.description,
            created_at=group.created_at,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_entity(model)

    async def get_by_id(self, group_id: str) -> Group | None:
        """Get a group by ID.

        Args:
            group_id: Group ID.

        Returns:
            Group if found, None otherwise.
        """
        result = await self.session.execute(select(GroupModel).where(GroupModel.id == group_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_name(self, name: str) -> Group | None:
        """Get a group by name."""
        result = await self.session.execute(select(GroupModel).where(GroupModel.name == name))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: GroupModel) -> Group:
        return Group(
            id=model.id,
            name=model.name,
            description=model.description,
            created_at=model.created_at,
        )
