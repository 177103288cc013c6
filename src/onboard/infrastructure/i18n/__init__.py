"""Language and timezone data."""

from onboard.infrastructure.i18n.locale_catalog import (
    LANGUAGES,
    Language,
    LocaleCatalog,
    locale_catalog,
)

__all__ = ["LANGUAGES", "Language", "LocaleCatalog", "locale_catalog"]
