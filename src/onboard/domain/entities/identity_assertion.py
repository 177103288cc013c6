"""Identity asserted by an external provider (OAuth/OpenID Connect)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class IdentityAssertion:
    """Claims presented by an identity provider in lieu of a local password.

    Attributes:
        uid: Provider-side user id; becomes the local login.
        email: Email claim.
        first_name: Given name claim.
        last_name: Family name claim.
        locale: Locale tag claim such as ``fr-FR``.
        picture: Avatar URL claim.
    """

    uid: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    locale: str | None = None
    picture: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "IdentityAssertion":
        """Build an assertion from OpenID Connect style claims.

        Accepts ``sub`` or ``id`` for the uid, ``given_name``/``family_name``
        for the names and falls back to splitting ``name``.
        """
        uid = claims.get("sub") or claims.get("id") or ""
        first_name = claims.get("given_name")
        last_name = claims.get("family_name")
        if first_name is None and last_name is None and claims.get("name"):
            first_name, _, last_name = str(claims["name"]).partition(" ")
            last_name = last_name or None
        return cls(
            uid=str(uid),
            email=claims.get("email"),
            first_name=first_name,
            last_name=last_name,
            locale=claims.get("locale"),
            picture=claims.get("picture"),
        )
