"""Service construction for a database session.

Builds the onboarding workflows with their collaborators bound to one
``AsyncSession``, so every write of a request shares one transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from onboard.core.config import Settings, get_settings
from onboard.domain.services import IdentityLinkService, RegistrationService
from onboard.infrastructure.auth import credential_hasher
from onboard.infrastructure.configuration import ConfigurationStore
from onboard.infrastructure.i18n import locale_catalog
from onboard.infrastructure.persistence.repositories import (
    ConfigurationRepository,
    GroupRepository,
    UserRepository,
)
from onboard.infrastructure.services import NotificationDispatcher
from onboard.infrastructure.services.email import EmailProvider, get_email_provider


def get_config_store(session: AsyncSession, settings: Settings | None = None) -> ConfigurationStore:
    return ConfigurationStore(ConfigurationRepository(session), settings or get_settings())


def build_registration_service(
    session: AsyncSession,
    settings: Settings | None = None,
    email_provider: EmailProvider | None = None,
) -> RegistrationService:
    """Create a registration service bound to a session.

    Args:
        session: Database session.
        settings: Settings; the cached application settings when omitted.
        email_provider: Provider override, e.g. a ``LogEmailProvider`` in tests.
    """
    settings = settings or get_settings()
    config_store = get_config_store(session, settings)
    dispatcher = NotificationDispatcher(
        provider=email_provider or get_email_provider(settings),
        config_store=config_store,
        settings=settings,
        catalog=locale_catalog,
    )
    return RegistrationService(
        session=session,
        user_repo=UserRepository(session, credential_hasher),
        group_repo=GroupRepository(session),
        config_store=config_store,
        dispatcher=dispatcher,
        catalog=locale_catalog,
    )


def build_identity_link_service(
    session: AsyncSession, settings: Settings | None = None
) -> IdentityLinkService:
    """Create an identity-linking service bound to a session."""
    return IdentityLinkService(
        session=session,
        user_repo=UserRepository(session, credential_hasher),
        group_repo=GroupRepository(session),
        config_store=get_config_store(session, settings),
        hasher=credential_hasher,
        catalog=locale_catalog,
    )
