from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, Optional, Sequence

import icu
from babel import Locale, UnknownLocaleError, negotiate_locale

from dictionary_common.config import DEFAULT_LOCALE, SUPPORTED_LOCALES
from dictionary_common.exceptions import InputError

from ..dtos.language_dto import ProjectedItem

logger = logging.getLogger(__name__)


def resolve_locale(locale: Optional[str]) -> str:
    """Validate a locale tag (en, en_US, en-US, ...) and return its canonical form.

    Falls back to the configured default locale when no tag is given.
    """
    tag = (locale or "").strip() or DEFAULT_LOCALE
    try:
        parsed = Locale.parse(tag.replace("-", "_"))
    except (ValueError, TypeError, UnknownLocaleError) as exc:
        raise InputError(f"Unsupported locale '{locale}'.") from exc
    return str(parsed)


def _parse_accept_language(header: str) -> list[str]:
    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        tag, *params = [piece.strip() for piece in part.split(";")]
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                quality = float(value)
            except ValueError:
                quality = 0.0
            break
        if quality > 0:
            weighted.append((quality, tag))
    # sorted() is stable, so equally weighted tags keep header order.
    return [tag for _, tag in sorted(weighted, key=lambda item: -item[0])]


def negotiate_request_locale(
    accept_language: Optional[str], supported: Sequence[str] = SUPPORTED_LOCALES
) -> Optional[str]:
    """Best supported locale for an Accept-Language header, or None."""
    if not accept_language:
        return None
    preferred = [tag.replace("_", "-") for tag in _parse_accept_language(accept_language)]
    available = [tag.replace("_", "-") for tag in supported]
    match = negotiate_locale(preferred, available, sep="-")
    return match.replace("-", "_") if match else None


@lru_cache(maxsize=None)
def _collator_for(locale: str) -> icu.Collator:
    # Building a tailored collator parses the locale's CLDR rules; one per tag.
    logger.debug("Creating collator", extra={"locale": locale})
    return icu.Collator.createInstance(icu.Locale(locale))


class LocaleCollator:
    """
    Builds sort keys with the CLDR collation rules of a locale, so accents and
    case are weighed at their own levels and locale tailorings (Swedish å/ä/ö
    after z, Spanish ñ after n) apply.
    """
    def __init__(self, locale: Optional[str] = None):
        self.locale = resolve_locale(locale)
        self._collator = _collator_for(self.locale)

    def sort_key(self, text: str) -> bytes:
        return self._collator.getSortKey(text)


def collation_key(text: str, locale: Optional[str] = None) -> bytes:
    return LocaleCollator(locale).sort_key(text)


def sort_by_display_text(
    items: Iterable[ProjectedItem], locale: Optional[str] = None
) -> list[ProjectedItem]:
    collator = LocaleCollator(locale)
    return sorted(items, key=lambda item: collator.sort_key(item.display_text))
