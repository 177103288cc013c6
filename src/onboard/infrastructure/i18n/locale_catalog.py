"""Catalog of supported languages and timezones.

Language ids are stable numeric keys stored on users; timezone ids come from
the IANA database shipped with ``zoneinfo``/``tzdata``.
"""

from dataclasses import dataclass
from functools import lru_cache
from zoneinfo import available_timezones

from onboard.domain.services.locale_resolver import LocaleTag


@dataclass(frozen=True)
class Language:
    """A supported UI language."""

    id: int
    code: str
    name: str
    region: str | None = None

    @property
    def tag(self) -> str:
        return f"{self.code}-{self.region}" if self.region else self.code


LANGUAGES: tuple[Language, ...] = (
    Language(1, "en", "English"),
    Language(2, "de", "Deutsch"),
    Language(3, "fr", "Français"),
    Language(4, "it", "Italiano"),
    Language(5, "pt", "Português"),
    Language(6, "pt", "Português Brasil", "BR"),
    Language(7, "es", "Español"),
    Language(8, "ru", "Русский"),
    Language(9, "sv", "Svenska"),
    Language(10, "zh", "简体中文", "CN"),
    Language(11, "zh", "繁體中文", "TW"),
    Language(12, "ko", "한국어"),
    Language(13, "ar", "العربية"),
    Language(14, "ja", "日本語"),
    Language(15, "id", "Bahasa Indonesia"),
    Language(16, "hu", "Magyar"),
    Language(17, "tr", "Türkçe"),
    Language(18, "uk", "Українська"),
    Language(19, "th", "ไทย"),
    Language(20, "fa", "فارسی"),
    Language(21, "cs", "Čeština"),
    Language(22, "gl", "Galego"),
    Language(23, "fi", "Suomi"),
    Language(24, "pl", "Polski"),
    Language(25, "el", "Ελληνικά"),
    Language(26, "nl", "Nederlands"),
    Language(27, "he", "עברית"),
    Language(28, "ca", "Català"),
    Language(29, "bg", "Български"),
    Language(30, "da", "Dansk"),
    Language(31, "sk", "Slovenčina"),
)


@lru_cache
def _timezones_by_lower_name() -> dict[str, str]:
    return {name.lower(): name for name in available_timezones()}


class LocaleCatalog:
    """Lookup of language ids and canonical timezone ids."""

    def __init__(self, languages: tuple[Language, ...] = LANGUAGES) -> None:
        self.languages = languages
        self._by_id = {language.id: language for language in languages}

    def is_known_language(self, language_id: int) -> bool:
        return language_id in self._by_id

    def get_language(self, language_id: int | None) -> Language | None:
        if language_id is None:
            return None
        return self._by_id.get(language_id)

    def language_code(self, language_id: int | None, default: str = "en") -> str:
        """Return the ISO 639 code of a language id."""
        language = self.get_language(language_id)
        return language.code if language else default

    def resolve_language_id(self, tag: LocaleTag, default: int) -> int:
        """Find the closest supported language for a parsed tag.

        Matching order: same language and region, then the same language with
        no region, then any entry of the same language, then ``default``.
        """
        same_language = [lang for lang in self.languages if lang.code == tag.language]
        if tag.region:
            for language in same_language:
                if language.region == tag.region:
                    return language.id
        for language in same_language:
            if language.region is None:
                return language.id
        if same_language:
            return same_language[0].id
        return default

    def resolve_timezone_id(self, name: str | None, default: str) -> str:
        """Return the canonical IANA id for ``name`` or ``default``.

        Lookup is case-insensitive, so ``europe/paris`` resolves to
        ``Europe/Paris``.
        """
        if name:
            canonical = _timezones_by_lower_name().get(name.strip().lower())
            if canonical:
                return canonical
        return default


# Default catalog instance
locale_catalog = LocaleCatalog()
