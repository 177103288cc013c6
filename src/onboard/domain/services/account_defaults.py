"""Defaults shared by the registration and identity-linking workflows."""

from typing import TYPE_CHECKING

from onboard.core.errors import CollaboratorError
from onboard.domain.entities.group import Group
from onboard.domain.services.locale_resolver import LocaleResolver

if TYPE_CHECKING:
    from onboard.infrastructure.configuration.config_store import ConfigurationStore
    from onboard.infrastructure.i18n.locale_catalog import LocaleCatalog
    from onboard.infrastructure.persistence.repositories.group_repository import (
        GroupRepository,
    )


async def resolve_default_group(
    config_store: "ConfigurationStore", group_repo: "GroupRepository"
) -> Group | None:
    """Load the group new accounts join.

    Returns:
        The group, or None when no default group is configured.

    Raises:
        CollaboratorError: If a default group is configured but does not exist.
    """
    group_id = await config_store.default_group_id()
    if group_id is None:
        return None
    group = await group_repo.get_by_id(group_id)
    if group is None:
        raise CollaboratorError(f"Configured default group '{group_id}' does not exist")
    return group


async def build_locale_resolver(
    config_store: "ConfigurationStore", catalog: "LocaleCatalog"
) -> LocaleResolver:
    """Create a resolver bound to the configured default language and timezone."""
    return LocaleResolver(
        catalog=catalog,
        default_language_id=await config_store.default_language_id(),
        default_timezone=await config_store.default_timezone(),
    )
