"""User entity for onboarding and identity linking.

Users are uniquely identified by (login, type, domain_id) among active
accounts. ``User`` is an immutable snapshot; workflows collect fields on a
``UserBuilder`` and hand collaborators only the finished snapshot.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from onboard.domain.entities.group import Group


class UserType(str, Enum):
    """How an account came to exist."""

    USER = "user"
    EXTERNAL = "external"
    OAUTH = "oauth"


class Right(str, Enum):
    """Capabilities an account may hold."""

    ADMIN = "Admin"
    GROUP_ADMIN = "GroupAdmin"
    ROOM = "Room"
    DASHBOARD = "Dashboard"
    LOGIN = "Login"
    SOAP = "Soap"


DEFAULT_RIGHTS: frozenset[Right] = frozenset({Right.ROOM, Right.DASHBOARD, Right.LOGIN})


@dataclass(frozen=True)
class Address:
    """Contact data of a user."""

    email: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class GroupMembership:
    """Link between a user and one group."""

    group_id: str
    group_name: str | None = None

    @classmethod
    def of(cls, group: Group) -> "GroupMembership":
        return cls(group_id=group.id, group_name=group.name)


@dataclass(frozen=True)
class User:
    """Immutable snapshot of a user account.

    Attributes:
        id: Identifier assigned by the user directory, None until persisted.
        login: Login name, unique per (type, domain_id) among active users.
        type: Account type.
        domain_id: Identity provider scope, required for OAuth accounts.
        external_type: Name of the trusted integration that provisioned the
            account; None for self-service registrations.
        password_hash: Opaque credential hash, None when no local password.
        activation_token: Token proving control of the registration flow.
        first_name: Given name.
        last_name: Family name.
        address: Email and country.
        language_id: Numeric language id from the locale catalog.
        timezone_id: Canonical timezone id.
        picture_uri: Avatar location.
        show_contact_data_to_contacts: Whether contacts see email/country.
        rights: Capabilities held; ``Right.LOGIN`` gates authentication.
        group_memberships: Ordered group links.
        last_login: Timestamp of last successful login.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
        updated_by: Actor of the last update.
        deleted: Soft-delete flag; deleted users are not active.
    """

    login: str
    type: UserType = UserType.USER
    id: str | None = None
    domain_id: str | None = None
    external_type: str | None = None
    password_hash: str | None = None
    activation_token: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    address: Address = field(default_factory=Address)
    language_id: int | None = None
    timezone_id: str | None = None
    picture_uri: str | None = None
    show_contact_data_to_contacts: bool = False
    rights: frozenset[Right] = DEFAULT_RIGHTS
    group_memberships: tuple[GroupMembership, ...] = ()
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None
    deleted: bool = False

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if self.type == UserType.OAUTH and not self.domain_id:
            raise ValueError("OAuth users require a domain_id")

    @property
    def email(self) -> str | None:
        return self.address.email

    @property
    def country(self) -> str | None:
        return self.address.country

    @property
    def can_login(self) -> bool:
        return Right.LOGIN in self.rights

    @property
    def group_ids(self) -> list[str]:
        return [m.group_id for m in self.group_memberships]

    def evolve(self, **changes) -> "User":
        """Return a copy of this snapshot with the given fields replaced."""
        return replace(self, **changes)


@dataclass
class UserBuilder:
    """Collects user fields before a single immutable ``User`` is produced.

    Example:
        >>> builder = UserBuilder(login="jdoe", email="jdoe@example.com")
        >>> builder.rights.discard(Right.LOGIN)
        >>> builder.build().can_login
        False
    """

    login: str = ""
    type: UserType = UserType.USER
    id: str | None = None
    domain_id: str | None = None
    external_type: str | None = None
    password_hash: str | None = None
    activation_token: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    country: str | None = None
    language_id: int | None = None
    timezone_id: str | None = None
    picture_uri: str | None = None
    show_contact_data_to_contacts: bool = False
    rights: set[Right] = field(default_factory=lambda: set(DEFAULT_RIGHTS))
    group_memberships: list[GroupMembership] = field(default_factory=list)
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None
    deleted: bool = False

    @classmethod
    def from_user(cls, user: User) -> "UserBuilder":
        """Start a builder pre-filled with an existing snapshot."""
        return cls(
            login=user.login,
            type=user.type,
            id=user.id,
            domain_id=user.domain_id,
            external_type=user.external_type,
            password_hash=user.password_hash,
            activation_token=user.activation_token,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.address.email,
            country=user.address.country,
            language_id=user.language_id,
            timezone_id=user.timezone_id,
            picture_uri=user.picture_uri,
            show_contact_data_to_contacts=user.show_contact_data_to_contacts,
            rights=set(user.rights),
            group_memberships=list(user.group_memberships),
            last_login=user.last_login,
            created_at=user.created_at,
            updated_at=user.updated_at,
            updated_by=user.updated_by,
            deleted=user.deleted,
        )

    def add_group(self, group: Group) -> "UserBuilder":
        """Add a membership unless the user is already in the group."""
        if group.id not in {m.group_id for m in self.group_memberships}:
            self.group_memberships.append(GroupMembership.of(group))
        return self

    def build(self) -> User:
        """Produce the immutable snapshot.

        Raises:
            ValueError: If the collected fields do not form a valid user.
        """
        return User(
            login=self.login,
            type=self.type,
            id=self.id,
            domain_id=self.domain_id,
            external_type=self.external_type,
            password_hash=self.password_hash,
            activation_token=self.activation_token,
            first_name=self.first_name,
            last_name=self.last_name,
            address=Address(email=self.email, country=self.country),
            language_id=self.language_id,
            timezone_id=self.timezone_id,
            picture_uri=self.picture_uri,
            show_contact_data_to_contacts=self.show_contact_data_to_contacts,
            rights=frozenset(self.rights),
            group_memberships=tuple(self.group_memberships),
            last_login=self.last_login,
            created_at=self.created_at,
            updated_at=self.updated_at,
            updated_by=self.updated_by,
            deleted=self.deleted,
        )
