"""Unit tests for the User entity and UserBuilder."""

import dataclasses

import pytest

from onboard.domain.entities import (
    DEFAULT_RIGHTS,
    Address,
    Group,
    GroupMembership,
    Right,
    User,
    UserBuilder,
    UserType,
)


class TestUser:
    """Tests for the immutable User snapshot."""

    def test_defaults(self):
        user = User(login="jdoe")

        assert user.type == UserType.USER
        assert user.id is None
        assert user.rights == DEFAULT_RIGHTS
        assert user.can_login
        assert user.group_memberships == ()

    def test_is_immutable(self):
        user = User(login="jdoe")

        with pytest.raises(dataclasses.FrozenInstanceError):
            user.login = "other"

    def test_oauth_requires_domain(self):
        """Test that OAuth users must be scoped to a provider."""
        with pytest.raises(ValueError, match="domain_id"):
            User(login="1184732", type=UserType.OAUTH)

    def test_address_accessors(self):
        user = User(login="jdoe", address=Address(email="j@example.com", country="DE"))

        assert user.email == "j@example.com"
        assert user.country == "DE"

    def test_can_login_follows_rights(self):
        user = User(login="jdoe", rights=frozenset({Right.ROOM}))

        assert user.can_login is False

    def test_group_ids_keep_order(self):
        user = User(
            login="jdoe",
            group_memberships=(GroupMembership("g2"), GroupMembership("g1")),
        )

        assert user.group_ids == ["g2", "g1"]

    def test_evolve_returns_copy(self):
        user = User(login="jdoe")
        stored = user.evolve(id="user-1")

        assert stored.id == "user-1"
        assert user.id is None


class TestUserBuilder:
    """Tests for UserBuilder."""

    def test_build_produces_snapshot(self):
        builder = UserBuilder(login="jdoe", email="j@example.com", country="FR")
        builder.rights.discard(Right.LOGIN)

        user = builder.build()

        assert user.address == Address(email="j@example.com", country="FR")
        assert Right.LOGIN not in user.rights
        assert isinstance(user.rights, frozenset)

    def test_builders_do_not_share_rights(self):
        first = UserBuilder(login="a")
        first.rights.discard(Right.LOGIN)

        assert Right.LOGIN in UserBuilder(login="b").rights

    def test_add_group_ignores_duplicates(self):
        group = Group(id="g1", name="Members")
        builder = UserBuilder(login="jdoe").add_group(group).add_group(group)

        assert builder.build().group_memberships == (GroupMembership("g1", "Members"),)

    def test_from_user_round_trip(self):
        user = User(
            login="jdoe",
            id="user-1",
            address=Address(email="j@example.com"),
            language_id=3,
            rights=frozenset({Right.ROOM}),
        )

        assert UserBuilder.from_user(user).build() == user

    def test_from_user_does_not_mutate_source(self):
        user = User(login="jdoe")
        builder = UserBuilder.from_user(user)
        builder.rights.clear()

        assert user.rights == DEFAULT_RIGHTS

    def test_build_validates(self):
        with pytest.raises(ValueError):
            UserBuilder(login="1184732", type=UserType.OAUTH).build()
