"""Locale resolution for new and re-linked accounts.

Turns loosely specified locale input (a timezone name from a form, a locale
tag from an identity provider) into the canonical timezone id and numeric
language id stored on a user. Resolution never fails: anything that cannot be
resolved falls back to the configured defaults.
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from onboard.infrastructure.i18n.locale_catalog import LocaleCatalog

_LANGUAGE = re.compile(r"^[A-Za-z]{2,3}$")
_SCRIPT = re.compile(r"^[A-Za-z]{4}$")
_REGION = re.compile(r"^(?:[A-Za-z]{2}|\d{3})$")


@dataclass(frozen=True)
class LocaleTag:
    """Parsed ``language[-Script][-REGION]`` tag."""

    language: str
    script: str | None = None
    region: str | None = None

    def __str__(self) -> str:
        return "-".join(part for part in (self.language, self.script, self.region) if part)


@dataclass(frozen=True)
class ResolvedLocale:
    """Canonical locale settings for an account."""

    timezone_id: str
    language_id: int


def parse_locale_tag(tag: str | None) -> LocaleTag | None:
    """Parse a BCP 47 style locale tag.

    Both ``-`` and ``_`` separate subtags. Variants and extensions after the
    region are ignored.

    Args:
        tag: Locale tag such as ``fr-FR``, ``zh_Hant_TW`` or ``de``.

    Returns:
        The parsed tag, or None when the tag is empty or malformed.

    Example:
        >>> parse_locale_tag("fr-FR")
        LocaleTag(language='fr', script=None, region='FR')
        >>> parse_locale_tag("not a locale") is None
        True
    """
    if not tag:
        return None
    parts = tag.strip().replace("_", "-").split("-")
    if not parts or not _LANGUAGE.match(parts[0]):
        return None

    language = parts[0].lower()
    script = None
    region = None
    rest = parts[1:]

    if rest and _SCRIPT.match(rest[0]):
        script = rest.pop(0).title()
    if rest and _REGION.match(rest[0]):
        region = rest.pop(0).upper()
    if any(not part for part in rest):
        return None

    return LocaleTag(language=language, script=script, region=region)


class LocaleResolver:
    """Resolves timezone and language input against the locale catalog."""

    def __init__(
        self,
        catalog: "LocaleCatalog",
        default_language_id: int,
        default_timezone: str,
    ) -> None:
        """Initialize the resolver.

        Args:
            catalog: Catalog of supported languages and timezones.
            default_language_id: Language used when none can be resolved.
            default_timezone: Timezone used when none can be resolved.
        """
        self.catalog = catalog
        self.default_language_id = default_language_id
        self.default_timezone = default_timezone

    def resolve(
        self, timezone: str | None = None, language_id: int | None = None
    ) -> ResolvedLocale:
        """Resolve a requested timezone and language id.

        ``None``, ``0`` and unknown language ids fall back to the default
        language; unknown timezone names fall back to the default timezone.
        """
        if not language_id or not self.catalog.is_known_language(language_id):
            language_id = self.default_language_id
        return ResolvedLocale(
            timezone_id=self.catalog.resolve_timezone_id(timezone, self.default_timezone),
            language_id=language_id,
        )

    def resolve_tag(self, tag: str | None) -> tuple[int, str | None] | None:
        """Resolve a locale tag to ``(language_id, country)``.

        Returns:
            None when the tag is absent or unparseable, so callers keep their
            current values. ``country`` is None when the tag has no region.
        """
        parsed = parse_locale_tag(tag)
        if parsed is None:
            return None
        language_id = self.catalog.resolve_language_id(parsed, self.default_language_id)
        return language_id, parsed.region
