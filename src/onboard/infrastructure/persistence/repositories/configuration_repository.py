"""Configuration repository for database operations."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from onboard.infrastructure.persistence.models.configuration import ConfigurationModel


class ConfigurationRepository:
    """Repository for configuration database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_value(self, key: str) -> str | None:
        """Get the raw value stored for a key.

        Returns:
            The stored value, or None when the key has no row.
        """
        result = await self.session.execute(
            select(ConfigurationModel.value).where(ConfigurationModel.key == key)
        )
        return result.scalar_one_or_none()

    async def set_value(
        self, key: str, value: str | None, description: str | None = None
    ) -> ConfigurationModel:
        """Create or update the row for a key."""
        config = await self.session.get(ConfigurationModel, key)
        if config is None:
            config = ConfigurationModel(key=key, value=value, description=description)
            self.session.add(config)
        else:
            config.value = value
            if description is not None:
                config.description = description
        await self.session.flush()
        return config

    async def delete(self, key: str) -> bool:
        """Remove the override for a key.

        Returns:
            True if a row was removed.
        """
        config = await self.session.get(ConfigurationModel, key)
        if config is None:
            return False
        await self.session.delete(config)
        await self.session.flush()
        return True

    async def list_all(self) -> Sequence[ConfigurationModel]:
        """List all stored overrides ordered by key."""
        result = await self.session.execute(
            select(ConfigurationModel).order_by(ConfigurationModel.key)
        )
        return result.scalars().all()
