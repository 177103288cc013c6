"""User repository: the user directory used by the onboarding workflows.

Maps between ``UserModel`` rows and immutable ``User`` snapshots. Uniqueness
checks here are advisory; the partial unique index on (login, type,
domain_id) is what actually rejects a concurrent duplicate, and that rejection
surfaces as ``UniquenessViolationError``.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from onboard.core.errors import UniquenessViolationError
from onboard.core.logging import get_logger
from onboard.domain.entities.user import (
    Address,
    GroupMembership,
    Right,
    User,
    UserType,
)
from onboard.infrastructure.auth.password_hasher import CredentialHasher, credential_hasher
from onboard.infrastructure.persistence.models import UserModel, UsersGroupsModel
from onboard.infrastructure.persistence.models.user import EMAIL_UNIQUE_INDEX

logger = get_logger(__name__)


def _domain_key(domain_id: str | None) -> str:
    return domain_id or ""


def _violated_field(error: IntegrityError) -> str:
    """Name the unique field a failed write collided on.

    SQLite reports expression indexes by name and column indexes by column;
    PostgreSQL always names the index.
    """
    message = str(error.orig)
    if EMAIL_UNIQUE_INDEX in message or "users.email" in message:
        return "email"
    return "login"


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession, hasher: CredentialHasher | None = None) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
            hasher: Credential hasher used when a raw password is persisted.
        """
        self.session = session
        self.hasher = hasher or credential_hasher

    def _active(self, login_or_email_clause, user_type: UserType, domain_id: str | None):
        return and_(
            login_or_email_clause,
            UserModel.type == user_type.value,
            UserModel.domain_id == _domain_key(domain_id),
            UserModel.deleted.is_(False),
        )

    async def check_login_unique(
        self,
        login: str,
        user_type: UserType,
        domain_id: str | None = None,
        exclude_id: str | None = None,
    ) -> bool:
        """Check that no other active user has this login.

        Args:
            login: Login to check.
            user_type: Account type the login is scoped to.
            domain_id: Identity provider scope.
            exclude_id: User allowed to hold the login already.

        Returns:
            True if the login is free, False otherwise.
        """
        query = select(func.count(UserModel.id)).where(
            self._active(UserModel.login == login, user_type, domain_id)
        )
        if exclude_id is not None:
            query = query.where(UserModel.id != exclude_id)
        result = await self.session.execute(query)
        return (result.scalar_one() or 0) == 0

    async def check_email_unique(
        self,
        email: str | None,
        user_type: UserType,
        domain_id: str | None = None,
        exclude_id: str | None = None,
    ) -> bool:
        """Check that no other active user has this email.

        Empty emails are always unique. Comparison is case-insensitive.
        """
        if not email:
            return True
        query = select(func.count(UserModel.id)).where(
            self._active(func.lower(UserModel.email) == email.lower(), user_type, domain_id)
        )
        if exclude_id is not None:
            query = query.where(UserModel.id != exclude_id)
        result = await self.session.execute(query)
        return (result.scalar_one() or 0) == 0

    def _select_user(self):
        return select(UserModel).options(
            selectinload(UserModel.memberships).selectinload(UsersGroupsModel.group)
        )

    async def get_by_id(self, user_id: str) -> User | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User snapshot if found, None otherwise.
        """
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_by_login(
        self, login: str, user_type: UserType, domain_id: str | None = None
    ) -> User | None:
        """Get the active user with this login within a type/domain scope."""
        result = await self.session.execute(
            self._select_user().where(self._active(UserModel.login == login, user_type, domain_id))
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_activation_token(self, token: str) -> User | None:
        """Get the active user holding an activation token."""
        result = await self.session.execute(
            self._select_user().where(
                and_(UserModel.activation_token == token, UserModel.deleted.is_(False))
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def persist(
        self,
        user: User,
        password: str | None = None,
        updated_by: str | None = None,
    ) -> User:
        """Create or update a user from a snapshot.

        Args:
            user: Snapshot to store. A snapshot without ``id`` is inserted and
                receives a new identifier.
            password: Raw password to hash and store; None keeps the snapshot's
                ``password_hash``.
            updated_by: Actor recorded on the row.

        Returns:
            The stored user as read back from the database.

        Raises:
            UniquenessViolationError: If the write breaks the login or email
                uniqueness index (e.g. a concurrent registration won the
                race); ``field`` says which.
            LookupError: If ``user.id`` is set but no such row exists.
        """
        if user.id is None:
            model = UserModel(id=str(uuid.uuid4()), created_at=datetime.now(timezone.utc))
            self.session.add(model)
        else:
            model = await self._get_model(user.id)
            if model is None:
                raise LookupError(f"User '{user.id}' not found")

        self._apply(model, user)
        if password:
            model.password_hash = self.hasher.hash(password)
        model.updated_by = updated_by
        model.updated_at = datetime.now(timezone.utc)

        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            field = _violated_field(e)
            logger.warning(
                "User write rejected by uniqueness index", login=user.login, field=field
            )
            raise UniquenessViolationError(field) from e

        stored = await self._get_model(model.id, refresh=True)
        return self._to_entity(stored)

    async def _get_model(self, user_id: str, refresh: bool = False) -> UserModel | None:
        query = self._select_user().where(UserModel.id == user_id)
        if refresh:
            query = query.execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    @staticmethod
    def _apply(model: UserModel, user: User) -> None:
        model.login = user.login
        model.type = user.type.value
        model.domain_id = _domain_key(user.domain_id)
        model.external_type = user.external_type
        model.password_hash = user.password_hash
        model.activation_token = user.activation_token
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.email = user.address.email
        model.country = user.address.country
        model.language_id = user.language_id
        model.timezone_id = user.timezone_id
        model.picture_uri = user.picture_uri
        model.show_contact_data_to_contacts = user.show_contact_data_to_contacts
        model.rights = sorted(right.value for right in user.rights)
        model.last_login = user.last_login
        model.deleted = user.deleted

        # Memberships are eagerly loaded for persistent rows and empty for new ones
        wanted = user.group_ids
        kept = [m for m in model.memberships if m.group_id in wanted]
        kept_ids = {m.group_id for m in kept}
        added = [UsersGroupsModel(group_id=gid) for gid in wanted if gid not in kept_ids]
        model.memberships = kept + added

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            login=model.login,
            type=UserType(model.type),
            domain_id=model.domain_id or None,
            external_type=model.external_type,
            password_hash=model.password_hash,
            activation_token=model.activation_token,
            first_name=model.first_name,
            last_name=model.last_name,
            address=Address(email=model.email, country=model.country),
            language_id=model.language_id,
            timezone_id=model.timezone_id,
            picture_uri=model.picture_uri,
            show_contact_data_to_contacts=model.show_contact_data_to_contacts,
            rights=frozenset(Right(value) for value in (model.rights or [])),
            group_memberships=tuple(
                GroupMembership(
                    group_id=m.group_id,
                    group_name=m.group.name if m.group is not None else None,
                )
                for m in model.memberships
            ),
            last_login=model.last_login,
            created_at=model.created_at,
            updated_at=model.updated_at,
            updated_by=model.updated_by,
            deleted=model.deleted,
        )
