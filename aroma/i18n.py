"""
Localization helpers.

Menu documents store one field per locale (`name_en`, `name_ar`, `name_ru`),
while the story and menu copy store a nested {en, ar, ru} triple. Both are
resolved here with the same rule: the value for the requested locale, or an
empty string when it is missing or blank. There is no fallback to English,
so an untranslated field renders blank.
"""

from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field


class Locale(str, Enum):
    EN = "en"
    AR = "ar"
    RU = "ru"

    @property
    def is_rtl(self) -> bool:
        return self is Locale.AR


DEFAULT_LOCALE = Locale.EN
LOCALES = tuple(Locale)


class MenuField(str, Enum):
    """Localized fields of menu documents."""
    TITLE = "title"
    SECTION = "section"
    NAME = "name"
    DESCRIPTION = "description"


def parse_locale(value: str) -> Locale:
    """Raises ValueError for anything but en / ar / ru."""
    return Locale(value.lower())


def field_key(field: Union[MenuField, str], locale: Union[Locale, str]) -> str:
    field = MenuField(field).value
    locale = Locale(locale).value
    return f"{field}_{locale}"


def localized_value(
    entity: Mapping[str, Any],
    field: Union[MenuField, str],
    locale: Union[Locale, str],
) -> str:
    """
    Resolve `<field>_<locale>` on a menu section, subsection or item.

    >>> localized_value({"name_en": "Hummus"}, "name", "ar")
    ''
    """
    value = entity.get(field_key(field, locale))
    if value is None:
        return ""
    return str(value)


def localized_keys(field: Union[MenuField, str]) -> list[str]:
    """All per-locale keys for a field, e.g. name_en, name_ar, name_ru."""
    return [field_key(field, locale) for locale in LOCALES]


class LocalizedText(BaseModel):
    """A string with one member per locale."""
    model_config = ConfigDict(str_strip_whitespace=True)

    en: str = Field(..., min_length=1)
    ar: str = Field(..., min_length=1)
    ru: str = Field(..., min_length=1)

    def get(self, locale: Union[Locale, str]) -> str:
        return getattr(self, Locale(locale).value) or ""


class LocalizedList(BaseModel):
    """A list of strings (paragraphs) with one member per locale."""
    en: list[str] = Field(default_factory=list)
    ar: list[str] = Field(default_factory=list)
    ru: list[str] = Field(default_factory=list)

    def get(self, locale: Union[Locale, str]) -> list[str]:
        return list(getattr(self, Locale(locale).value) or [])


def localized_member(triple: Mapping[str, Any], locale: Union[Locale, str]) -> Any:
    """Member of a stored {en, ar, ru} triple, '' when absent."""
    if not triple:
        return ""
    value = triple.get(Locale(locale).value)
    return "" if value is None else value
