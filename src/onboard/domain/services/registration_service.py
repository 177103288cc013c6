"""Registration workflow.

Validates a candidate account, enforces login and email uniqueness, decides
whether the account must be confirmed by email before it can sign in, stores
it and sends the activation or welcome email.

``register_user`` is the primitive used by trusted integrations and raises
``CollaboratorError`` when a dependency fails. ``register`` is the
self-service entry point: it is gated by the self-registration flag and never
raises.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from onboard.core.errors import CollaboratorError, UniquenessViolationError
from onboard.core.logging import get_logger, workflow_context
from onboard.domain.entities.onboarding_result import OnboardingResult, Rejection
from onboard.domain.entities.user import Right, User, UserBuilder, UserType
from onboard.domain.services.account_defaults import (
    build_locale_resolver,
    resolve_default_group,
)
from onboard.domain.services.login_validator import LoginValidator

if TYPE_CHECKING:
    from onboard.infrastructure.configuration.config_store import ConfigurationStore
    from onboard.infrastructure.i18n.locale_catalog import LocaleCatalog
    from onboard.infrastructure.persistence.repositories.group_repository import (
        GroupRepository,
    )
    from onboard.infrastructure.persistence.repositories.user_repository import (
        UserRepository,
    )
    from onboard.infrastructure.services.notification_dispatcher import (
        NotificationDispatcher,
    )

logger = get_logger(__name__)


class RegistrationService:
    """Service for creating local and integration-provisioned accounts."""

    def __init__(
        self,
        session: AsyncSession,
        user_repo: "UserRepository",
        group_repo: "GroupRepository",
        config_store: "ConfigurationStore",
        dispatcher: "NotificationDispatcher",
        catalog: "LocaleCatalog",
    ) -> None:
        """Initialize the registration service.

        Args:
            session: SQLAlchemy async session, committed once the user is stored.
            user_repo: User directory.
            group_repo: Group directory, used for the default group.
            config_store: Runtime configuration.
            dispatcher: Sends activation and welcome emails.
            catalog: Locale catalog for timezone and language resolution.
        """
        self.session = session
        self.user_repo = user_repo
        self.group_repo = group_repo
        self.config_store = config_store
        self.dispatcher = dispatcher
        self.catalog = catalog

    async def confirmation_required(self) -> bool:
        """Whether new accounts must confirm their email before signing in.

        Confirmation needs both the verification flag and a public base URL,
        since the activation link cannot be built without one.
        """
        base_url = await self.config_store.base_url()
        if not base_url:
            return False
        return await self.config_store.email_verification_enabled()

    async def register_user(
        self,
        candidate: User,
        password: str | None = None,
        activation_token: str | None = None,
    ) -> OnboardingResult:
        """Register a candidate account.

        Args:
            candidate: The account to create. ``candidate.external_type``
                marks accounts provisioned by a trusted integration; those are
                stored as ``UserType.EXTERNAL`` and receive no email.
            password: Raw password; hashed by the user directory. Empty or
                None stores no usable local credential.
            activation_token: Token to store; a random UUID when not given.

        Returns:
            The created user, or a rejection (``LOGIN_TOO_SHORT``,
            ``LOGIN_IN_USE``, ``EMAIL_IN_USE``, ``UNKNOWN``). When the
            activation email could not be sent, ``notification_error`` is set
            and the user is still returned.

        Raises:
            CollaboratorError: If storage or another dependency fails.
        """
        with workflow_context("registration", login=candidate.login):
            try:
                return await self._register_user(candidate, password, activation_token)
            except CollaboratorError:
                raise
            except Exception as e:
                await self.session.rollback()
                logger.error("Registration failed", error=str(e))
                raise CollaboratorError(
                    f"Failed to register '{candidate.login}': {e}"
                ) from e

    async def _register_user(
        self, candidate: User, password: str | None, activation_token: str | None
    ) -> OnboardingResult:
        login = candidate.login
        validator = LoginValidator(min_length=await self.config_store.min_login_length())
        if not validator.is_long_enough(login):
            logger.info("Registration rejected: login too short")
            return OnboardingResult.reject(Rejection.LOGIN_TOO_SHORT)

        user_type = UserType.EXTERNAL if candidate.external_type else candidate.type
        login_free = await self.user_repo.check_login_unique(
            login, user_type, candidate.domain_id
        )
        email_free = await self.user_repo.check_email_unique(
            candidate.email, user_type, candidate.domain_id
        )
        if not login_free:
            logger.info("Registration rejected: login in use")
            return OnboardingResult.reject(Rejection.LOGIN_IN_USE)
        if not email_free:
            logger.info("Registration rejected: email in use")
            return OnboardingResult.reject(Rejection.EMAIL_IN_USE)

        token = activation_token or str(uuid.uuid4())
        send_email = not candidate.external_type and bool(candidate.email)
        confirmation_required = await self.confirmation_required()

        builder = UserBuilder.from_user(candidate)
        builder.type = user_type
        builder.activation_token = token
        if confirmation_required:
            builder.rights.discard(Right.LOGIN)

        try:
            user = await self.user_repo.persist(builder.build(), password or None)
        except UniquenessViolationError as e:
            rejection = Rejection.EMAIL_IN_USE if e.field == "email" else Rejection.LOGIN_IN_USE
            logger.info("Registration lost a concurrent write", field=e.field)
            return OnboardingResult.reject(rejection)

        if user is None or user.id is None:
            await self.session.rollback()
            logger.error("User directory returned no identifier")
            return OnboardingResult.reject(Rejection.UNKNOWN)

        await self.session.commit()
        logger.info(
            "User registered",
            user_id=user.id,
            login=login,
            user_type=user_type.value,
            confirmation_required=confirmation_required,
        )

        notification_error = None
        if send_email:
            notification_error = await self._send_activation(user, token, confirmation_required)
        return OnboardingResult(user=user, notification_error=notification_error)

    async def _send_activation(
        self, user: User, token: str, confirmation_required: bool
    ) -> str | None:
        """Send the registration email; return an error description on failure."""
        try:
            sent = await self.dispatcher.send_activation(
                login=user.login,
                email=user.email,
                token=token,
                confirmation_required=confirmation_required,
                language_id=user.language_id,
            )
        except Exception as e:
            logger.error(
                "Failed to send registration email",
                user_id=user.id,
                email=user.email,
                error=str(e),
            )
            return str(e) or e.__class__.__name__
        if not sent:
            logger.error("Email provider did not accept message", user_id=user.id)
            return "Email provider did not accept the message"
        return None

    async def register(
        self,
        login: str,
        password: str | None,
        last_name: str | None,
        first_name: str | None,
        email: str | None,
        country: str | None,
        language_id: int | None = None,
        timezone: str | None = None,
    ) -> OnboardingResult | None:
        """Self-service registration.

        Returns:
            ``REGISTRATION_DISABLED`` when self-registration is off, a
            ``PENDING_CONFIRMATION`` result carrying the user when the account
            must be confirmed first, the ``register_user`` result otherwise,
            or None if anything raised.
        """
        with workflow_context("self_registration", login=login):
            try:
                if not await self.config_store.self_registration_enabled():
                    logger.info("Self registration is disabled")
                    return OnboardingResult.reject(Rejection.REGISTRATION_DISABLED)

                resolver = await build_locale_resolver(self.config_store, self.catalog)
                locale = resolver.resolve(timezone=timezone, language_id=language_id)

                builder = UserBuilder(
                    login=login,
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    country=country,
                    language_id=locale.language_id,
                    timezone_id=locale.timezone_id,
                )
                group = await resolve_default_group(self.config_store, self.group_repo)
                if group is not None:
                    builder.add_group(group)

                result = await self.register_user(builder.build(), password)
                if result.ok and await self.confirmation_required():
                    return OnboardingResult(
                        user=result.user,
                        rejection=Rejection.PENDING_CONFIRMATION,
                        notification_error=result.notification_error,
                    )
                return result
            except Exception:
                logger.exception("Self registration failed")
                return None
