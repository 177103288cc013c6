"""SQLAlchemy model for the users table.

Among rows that are not soft-deleted, users are unique by (login, type,
domain_id) and, when an email is set, by (lower(email), type, domain_id).
``domain_id`` is stored as an empty string for accounts that are not scoped
to an identity provider so that the unique indexes cover them.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onboard.infrastructure.persistence.database import Base

LOGIN_UNIQUE_INDEX = "uq_users_login_type_domain_active"
EMAIL_UNIQUE_INDEX = "uq_users_email_type_domain_active"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key (UUID string).
        login: Login name.
        type: Account type ('user', 'external', 'oauth').
        domain_id: Identity provider scope ('' when unscoped).
        external_type: Integration that provisioned an external account.
        password_hash: Argon2 hash, NULL when there is no local password.
        activation_token: Token sent in the activation email.
        email: Email address.
        rights: JSON list of capability names.
        deleted: Soft-delete flag.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="User ID (UUID)")
    login: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
    domain_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="",
        server_default="",
        comment="Identity provider scope; empty for local accounts",
    )
    external_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    password_hash: Mapped[str | None] = mapped_column(
        String(255), nullable=True, comment="Hashed password (argon2)"
    )
    activation_token: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    country: Mapped[str | None] = mapped_column(String(8), nullable=True)
    language_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    timezone_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    picture_uri: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    show_contact_data_to_contacts: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    rights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )
    updated_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    memberships: Mapped[list["UsersGroupsModel"]] = relationship(  # noqa: F821
        "UsersGroupsModel",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UsersGroupsModel.id",
    )

    __table_args__ = (
        Index(
            LOGIN_UNIQUE_INDEX,
            "login",
            "type",
            "domain_id",
            unique=True,
            sqlite_where=text("deleted = 0"),
            postgresql_where=text("deleted = false"),
        ),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, login={self.login}, type={self.type})>"


Index(
    EMAIL_UNIQUE_INDEX,
    func.lower(UserModel.email),
    UserModel.type,
    UserModel.domain_id,
    unique=True,
    sqlite_where=text("deleted = 0 AND email IS NOT NULL AND email <> ''"),
    postgresql_where=text("deleted = false AND email IS NOT NULL AND email <> ''"),
)
