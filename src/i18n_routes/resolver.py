"""
Request-time locale resolution.

Resolves the locale of an incoming request from its URL or from an
`Accept-Language` header, against the locales of a populated store.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlsplit

from babel.core import negotiate_locale

from i18n_routes.models import Locale
from i18n_routes.store import LocaleStore

logger = logging.getLogger(__name__)


def parse_accept_language(header: str) -> list[str]:
    """
    Parse an `Accept-Language` header into languages by preference.

    Languages are ordered by quality, highest first, keeping header order for
    equal qualities. Wildcards and languages with `q=0` are dropped.

    Examples:
        >>> parse_accept_language("fr-CH, fr;q=0.9, en;q=0.8, *;q=0.5")
        ['fr-CH', 'fr', 'en']
    """
    weighted: list[tuple[float, int, str]] = []

    for position, part in enumerate(header.split(",")):
        language, *params = (p.strip() for p in part.split(";"))
        if not language or language == "*":
            continue

        quality = 1.0
        for param in params:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0

        if quality > 0:
            weighted.append((-quality, position, language))

    return [language for _, _, language in sorted(weighted)]


def first_path_segment(url: str) -> str | None:
    """Return the first non-empty path segment of a URL or path."""
    segments = [s for s in urlsplit(url).path.split("/") if s]
    return segments[0] if segments else None


class LocaleResolver:
    """Looks up configured locales for incoming requests."""

    def __init__(self, store: LocaleStore):
        self.store = store

    @classmethod
    def from_cache(cls, path: Path | str) -> LocaleResolver:
        """Create a resolver over the locales of a cache file."""
        return cls(LocaleStore.from_cache(path))

    def locale_codes(self) -> list[str]:
        return self.store.codes

    def match_locale(self, accept_language: str) -> str | None:
        """
        Choose the best configured locale for an `Accept-Language` header.

        Falls back to the first configured locale when nothing matches.
        Returns None only if no locale is configured.
        """
        codes = self.locale_codes()
        if not codes:
            return None

        preferred = parse_accept_language(accept_language)
        matched = negotiate_locale(preferred, codes, sep="-")
        if matched is None:
            logger.debug("No locale matches %r, using %s", accept_language, codes[0])
            return codes[0]

        # negotiate_locale answers with the spelling of the preferred language
        by_lower = {code.lower(): code for code in codes}
        return by_lower.get(matched.lower(), codes[0])

    def locale_from_url(self, url: str) -> str | None:
        """Return the locale code a URL starts with, if it is configured."""
        code = first_path_segment(url)
        if code is not None and code in self.store:
            return code
        return None

    def locale_data_from_url(self, url: str) -> Locale | None:
        """Return the locale record a URL starts with, if any."""
        code = first_path_segment(url)
        return self.store.get(code) if code is not None else None

    def pages_for_locale(self, code: str) -> list[str] | None:
        """
        List the top-level pages of a locale.

        Only the first level of the path dictionary is listed; a nested
        entry contributes its index translation, if it has one.

        Returns:
            `/code/` followed by `/code/<page>/` per entry, or None for an
            unknown locale.
        """
        locale = self.store.get(code)
        if locale is None:
            return None

        pages = [f"/{locale.code}/"]
        for value in locale.paths.values():
            if isinstance(value, dict):
                value = value.get("index")
                if not isinstance(value, str):
                    continue
            pages.append(f"/{locale.code}/{value}/")
        return pages
