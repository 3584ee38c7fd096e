"""Locale negotiation and message lookup.

The active locale is request scoped: it comes from the ``locale`` cookie when
the client has chosen one, otherwise from the ``Accept-Language`` tag. Routers
receive a ``Translator`` through ``Depends(get_translator)``; nothing here
keeps a process-wide "current language".
"""

from typing import Optional

from fastapi import Request

from flashdeck.core.config import settings
from flashdeck.i18n.dictionaries import DICTIONARIES, Dictionary

LOCALE_COOKIE = "locale"
SUPPORTED_LOCALES = tuple(DICTIONARIES)


def lookup(dictionary: Dictionary, path: str) -> Optional[str]:
    current = dictionary
    for part in path.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return None
    return current if isinstance(current, str) else None


class Translator:
    def __init__(self, locale: str):
        self.locale = locale if locale in DICTIONARIES else "en"

    def __call__(self, key: str) -> str:
        # unknown keys come back verbatim
        return lookup(DICTIONARIES[self.locale], key) or key

    def __repr__(self) -> str:
        return f"Translator(locale={self.locale!r})"


def negotiate_locale(stored: Optional[str], accept_language: Optional[str], default: str = "en") -> str:
    if stored in SUPPORTED_LOCALES:
        return stored
    if accept_language:
        primary = accept_language.split(",")[0].strip().lower()
        if primary.startswith("zh"):
            return "zh-TW"
        if primary:
            return "en"
    return default if default in SUPPORTED_LOCALES else "en"


def get_locale(request: Request) -> str:
    return negotiate_locale(
        request.cookies.get(LOCALE_COOKIE),
        request.headers.get("accept-language"),
        settings.DEFAULT_LOCALE,
    )


def get_translator(request: Request) -> Translator:
    return Translator(get_locale(request))
