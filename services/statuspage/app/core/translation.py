from functools import lru_cache

from babel import Locale, UnknownLocaleError, negotiate_locale

from .config import get_settings
from .lang import CATALOGS, FALLBACK_LOCALE, SUPPORTED_LOCALES


def catalog_language(locale: str | None) -> str:
    """Map a locale identifier (``fr-FR``, ``de_AT``, ``nl``) to a catalog name."""
    if not locale:
        return FALLBACK_LOCALE
    try:
        language = Locale.parse(locale.replace("-", "_")).language
    except (UnknownLocaleError, ValueError, TypeError):
        return FALLBACK_LOCALE
    return language if language in SUPPORTED_LOCALES else FALLBACK_LOCALE


class Translator:
    """Dotted-key lookup against the in-process catalogs.

    Missing keys fall back to the English catalog, then to the key itself so
    templates never render an empty label.
    """

    def __init__(self, locale: str | None = FALLBACK_LOCALE) -> None:
        self.locale = catalog_language(locale)

    def trans(self, key: str) -> str:
        for language in (self.locale, FALLBACK_LOCALE):
            value = CATALOGS.get(language, {}).get(key)
            if value is not None:
                return value
        return key

    __call__ = trans


@lru_cache(maxsize=None)
def get_translator(locale: str | None = None) -> Translator:
    if locale is None:
        locale = get_settings().locale
    return Translator(locale)


def preferred_locales(accept_language: str) -> list[str]:
    """Parse an Accept-Language header into locale ids ordered by quality.

    Tags without ``q`` weigh 1.0; ties keep header order. Wildcards and
    ``q=0`` tags are dropped::

        >>> preferred_locales("en;q=0.5, fr-CA, de;q=0.8, *;q=0.1")
        ['fr_CA', 'de', 'en']
    """
    weighted = []
    for index, part in enumerate(accept_language.split(",")):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        if quality <= 0:
            continue
        weighted.append((-quality, index, tag.replace("-", "_")))
    return [tag for _, _, tag in sorted(weighted)]


def negotiate_request_locale(accept_language: str | None, default: str = FALLBACK_LOCALE) -> str:
    if not accept_language:
        return default
    match = negotiate_locale(
        preferred_locales(accept_language), sorted(SUPPORTED_LOCALES), aliases=None
    )
    return catalog_language(match) if match else default
