"""Command-line interface for Onboard.

This module provides commands to prepare the database, adjust runtime
configuration, and run the registration and identity-linking workflows.
"""

import asyncio
import uuid
from typing import NoReturn

import click

from onboard import __version__
from onboard.core.config import get_settings
from onboard.core.logging import configure_logging, get_logger
from onboard.domain.entities import Group, IdentityAssertion, OnboardingResult


@click.group()
@click.version_option(version=__version__, prog_name="Onboard")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides settings)",
)
def cli(log_level: str | None) -> None:
    """Onboard - account registration and identity linking."""
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


def _echo_result(result: OnboardingResult | None) -> None:
    """Print a workflow result and exit non-zero when no account was produced."""
    if result is None:
        click.echo("Error: registration failed, see log for details", err=True)
        raise SystemExit(1)

    if result.user is not None:
        user = result.user
        click.echo(
            f"User ID:   {user.id}\n"
            f"Login:     {user.login}\n"
            f"Type:      {user.type.value}\n"
            f"Can login: {user.can_login}"
        )
    if result.notification_error:
        click.echo(f"Warning: email not sent: {result.notification_error}", err=True)
    if result.is_pending:
        click.echo("Account created; email confirmation pending.")
    elif result.rejection is not None:
        click.echo(f"Rejected: {result.rejection.value}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Run even in production mode",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all database tables. Use this only in development; in production,
    use migrations instead.
    """
    from onboard.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
@click.argument("key")
@click.argument("value", required=False)
@click.option("--unset", is_flag=True, help="Remove the stored value")
def config_set(key: str, value: str | None, unset: bool) -> None:
    """Store a runtime configuration value, e.g. ``allow.soap.register true``."""
    from onboard.infrastructure.configuration import KNOWN_KEYS
    from onboard.infrastructure.persistence.database import get_db_manager
    from onboard.infrastructure.persistence.repositories import ConfigurationRepository

    if not unset and value is None:
        raise click.UsageError("VALUE is required unless --unset is given")
    if key not in KNOWN_KEYS:
        click.echo(f"Warning: '{key}' is not a known configuration key", err=True)

    async def store() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                repo = ConfigurationRepository(session)
                if unset:
                    removed = await repo.delete(key)
                    click.echo(f"Removed {key}." if removed else f"{key} was not set.")
                else:
                    await repo.set_value(key, value, KNOWN_KEYS.get(key))
                    click.echo(f"{key} = {value}")
                await session.commit()
        finally:
            await db.disconnect()

    asyncio.run(store())


@cli.command("create-group")
@click.argument("name")
@click.option("--description", type=str, default=None, help="Group description")
@click.option(
    "--default",
    "make_default",
    is_flag=True,
    help="Make this the group new accounts join",
)
def create_group(name: str, description: str | None, make_default: bool) -> None:
    """Create a group."""
    from onboard.infrastructure.configuration import CONFIG_DEFAULT_GROUP, KNOWN_KEYS
    from onboard.infrastructure.persistence.database import get_db_manager
    from onboard.infrastructure.persistence.repositories import (
        ConfigurationRepository,
        GroupRepository,
    )

    async def create() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                groups = GroupRepository(session)
                if await groups.get_by_name(name) is not None:
                    click.echo(f"Error: group '{name}' already exists", err=True)
                    raise SystemExit(1)
                group = await groups.create(
                    Group(id=str(uuid.uuid4()), name=name, description=description)
                )
                if make_default:
                    await ConfigurationRepository(session).set_value(
                        CONFIG_DEFAULT_GROUP, group.id, KNOWN_KEYS[CONFIG_DEFAULT_GROUP]
                    )
                await session.commit()
            click.echo(f"Group ID: {group.id}")
            get_logger(__name__).info(
                "Group created via CLI", group_id=group.id, name=name, default=make_default
            )
        finally:
            await db.disconnect()

    asyncio.run(create())


@cli.command()
@click.option("--login", required=True, help="Login name")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password (prompts if not provided)",
)
@click.option("--email", default=None, help="Email address")
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@click.option("--country", default=None, help="ISO country code")
@click.option("--language-id", type=int, default=None, help="Language id; default when omitted")
@click.option("--timezone", default=None, help="Timezone name, e.g. Europe/Paris")
def register(
    login: str,
    password: str,
    email: str | None,
    first_name: str | None,
    last_name: str | None,
    country: str | None,
    language_id: int | None,
    timezone: str | None,
) -> None:
    """Register an account through self-service registration."""
    from onboard.infrastructure.dependencies import build_registration_service
    from onboard.infrastructure.persistence.database import get_db_manager

    async def run() -> OnboardingResult | None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                service = build_registration_service(session)
                return await service.register(
                    login=login,
                    password=password,
                    last_name=last_name,
                    first_name=first_name,
                    email=email,
                    country=country,
                    language_id=language_id,
                    timezone=timezone,
                )
        finally:
            await db.disconnect()

    _echo_result(asyncio.run(run()))


@cli.command()
@click.option("--provider", required=True, help="Identity provider id")
@click.option("--uid", required=True, help="User id at the provider")
@click.option("--email", default=None)
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@click.option("--locale", default=None, help="Locale tag, e.g. fr-FR")
@click.option("--picture", default=None, help="Avatar URL")
def link(
    provider: str,
    uid: str,
    email: str | None,
    first_name: str | None,
    last_name: str | None,
    locale: str | None,
    picture: str | None,
) -> None:
    """Link an identity provider account, creating it if needed."""
    from onboard.core.errors import CollaboratorError
    from onboard.infrastructure.dependencies import build_identity_link_service
    from onboard.infrastructure.persistence.database import get_db_manager

    assertion = IdentityAssertion(
        uid=uid,
        email=email,
        first_name=first_name,
        last_name=last_name,
        locale=locale,
        picture=picture,
    )

    async def run() -> OnboardingResult:
        db = get_db_manager()
        try:
            async with db.session() as session:
                service = build_identity_link_service(session)
                return await service.link_or_create(assertion, provider)
        finally:
            await db.disconnect()

    try:
        result = asyncio.run(run())
    except CollaboratorError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)
    _echo_result(result)


@cli.command()
def info() -> None:
    """Display Onboard configuration."""
    settings = get_settings()

    click.echo(f"""
Onboard v{settings.app_version}
{'=' * 40}

Environment:    {settings.environment}
Database:       {settings.database_url}
Base URL:       {settings.base_url or '(not set)'}
Self register:  {settings.self_registration_enabled}
Verify email:   {settings.email_verification_required}
Email provider: {settings.email_provider}
Log level:      {settings.log_level}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the ``onboard`` console script and ``python -m onboard``.
    """
    cli()


if __name__ == "__main__":
    main()
