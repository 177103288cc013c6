"""Identity-linking workflow.

Maps an assertion from an external identity provider onto a local account:
the account keyed by (uid, oauth, provider_id) is found or provisioned, its
locale refreshed, its last login stamped and its local credential rotated to
a random value nobody knows.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from onboard.core.errors import CollaboratorError, UniquenessViolationError
from onboard.core.logging import get_logger, workflow_context
from onboard.domain.entities.identity_assertion import IdentityAssertion
from onboard.domain.entities.onboarding_result import OnboardingResult, Rejection
from onboard.domain.entities.user import Right, UserBuilder, UserType
from onboard.domain.services.account_defaults import (
    build_locale_resolver,
    resolve_default_group,
)
from onboard.domain.services.locale_resolver import LocaleResolver
from onboard.domain.services.login_validator import LoginValidator

if TYPE_CHECKING:
    from onboard.infrastructure.auth.password_hasher import CredentialHasher
    from onboard.infrastructure.configuration.config_store import ConfigurationStore
    from onboard.infrastructure.i18n.locale_catalog import LocaleCatalog
    from onboard.infrastructure.persistence.repositories.group_repository import (
        GroupRepository,
    )
    from onboard.infrastructure.persistence.repositories.user_repository import (
        UserRepository,
    )

logger = get_logger(__name__)

SYSTEM_ACTOR = "system"

# Provider-linked accounts are created without the Login right; an
# administrator grants it.
GRANT_LOGIN_TO_LINKED_ACCOUNTS = False


class IdentityLinkService:
    """Service for linking identity provider assertions to local accounts."""

    def __init__(
        self,
        session: AsyncSession,
        user_repo: "UserRepository",
        group_repo: "GroupRepository",
        config_store: "ConfigurationStore",
        hasher: "CredentialHasher",
        catalog: "LocaleCatalog",
    ) -> None:
        self.session = session
        self.user_repo = user_repo
        self.group_repo = group_repo
        self.config_store = config_store
        self.hasher = hasher
        self.catalog = catalog

    async def link_or_create(
        self, assertion: IdentityAssertion, provider_id: str
    ) -> OnboardingResult:
        """Link an assertion to its account, creating the account if needed.

        Calling this twice with the same assertion yields the same account.

        Args:
            assertion: Verified claims from the identity provider.
            provider_id: Identifier of the provider; the account's domain.

        Returns:
            The linked user, or ``INVALID_LOGIN`` / ``EMAIL_CONFLICT``.

        Raises:
            CollaboratorError: If storage, hashing or group lookup fails.
        """
        with workflow_context("link", uid=assertion.uid, provider_id=provider_id):
            try:
                return await self._link_or_create(assertion, provider_id, retry=True)
            except CollaboratorError:
                raise
            except Exception as e:
                await self.session.rollback()
                logger.error("Identity linking failed", error=str(e))
                raise CollaboratorError(f"Failed to link '{assertion.uid}': {e}") from e

    async def _link_or_create(
        self, assertion: IdentityAssertion, provider_id: str, retry: bool
    ) -> OnboardingResult:
        uid = assertion.uid
        validator = LoginValidator(min_length=await self.config_store.min_login_length())
        if not validator.is_valid(uid):
            logger.error("Invalid login from identity provider")
            return OnboardingResult.reject(Rejection.INVALID_LOGIN)

        existing = await self.user_repo.get_by_login(uid, UserType.OAUTH, provider_id)
        email_free = await self.user_repo.check_email_unique(
            assertion.email,
            UserType.OAUTH,
            provider_id,
            exclude_id=existing.id if existing else None,
        )
        if not email_free:
            logger.error("Another user with the same email exists")
            return OnboardingResult.reject(Rejection.EMAIL_CONFLICT)

        resolver = await build_locale_resolver(self.config_store, self.catalog)
        if existing is None:
            builder = await self._provision(assertion, provider_id, resolver)
        else:
            builder = UserBuilder.from_user(existing)

        resolved = resolver.resolve_tag(assertion.locale)
        if resolved is not None:
            builder.language_id, region = resolved
            # A tag without a region ("en") keeps the stored country
            if region:
                builder.country = region

        builder.last_login = datetime.now(timezone.utc)
        length = await self.config_store.random_password_length()
        password = self.hasher.random_password(length)

        try:
            user = await self.user_repo.persist(builder.build(), password, updated_by=SYSTEM_ACTOR)
        except UniquenessViolationError as e:
            if existing is None and retry:
                logger.info("Account created concurrently, linking again")
                return await self._link_or_create(assertion, provider_id, retry=False)
            raise CollaboratorError(f"Could not store linked account '{uid}'") from e

        await self.session.commit()
        logger.info(
            "Identity linked",
            user_id=user.id,
            created=existing is None,
        )
        return OnboardingResult.success(user)

    async def _provision(
        self, assertion: IdentityAssertion, provider_id: str, resolver: LocaleResolver
    ) -> UserBuilder:
        defaults = resolver.resolve()
        builder = UserBuilder(
            login=assertion.uid,
            type=UserType.OAUTH,
            domain_id=provider_id,
            first_name=assertion.first_name,
            last_name=assertion.last_name,
            email=assertion.email,
            language_id=defaults.language_id,
            timezone_id=defaults.timezone_id,
            show_contact_data_to_contacts=True,
        )
        if not GRANT_LOGIN_TO_LINKED_ACCOUNTS:
            builder.rights.discard(Right.LOGIN)
        if assertion.picture:
            builder.picture_uri = assertion.picture

        group = await resolve_default_group(self.config_store, self.group_repo)
        if group is not None:
            builder.add_group(group)
        return builder
