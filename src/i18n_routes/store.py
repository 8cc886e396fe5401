"""
Locale store for i18n-routes.

Holds the locale records of one build. The store is populated exactly once,
either from freshly generated dictionaries or from the per-locale JSON files
of a previous run, and is read-only afterward. A cache file with the full
ordered locale list lets request-time utilities read the same data.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from i18n_routes.errors import StoreError
from i18n_routes.models import Locale

logger = logging.getLogger(__name__)

_LOCALES_ADAPTER = TypeAdapter(list[Locale])


class LocaleStore:
    """Ordered, write-once collection of locale records."""

    def __init__(self) -> None:
        self._locales: tuple[Locale, ...] = ()
        self._populated = False

    @property
    def populated(self) -> bool:
        return self._populated

    def populate(self, locales: Iterable[Locale]) -> None:
        """
        Fill the store.

        Raises:
            StoreError: If the store was already populated or codes repeat.
        """
        if self._populated:
            raise StoreError("Locale store is already populated")

        locales = tuple(locales)
        codes = [locale.code for locale in locales]
        duplicates = sorted({code for code in codes if codes.count(code) > 1})
        if duplicates:
            raise StoreError(f"Duplicate locale codes: {', '.join(duplicates)}")

        self._locales = locales
        self._populated = True

    @property
    def locales(self) -> Sequence[Locale]:
        return self._locales

    @property
    def codes(self) -> list[str]:
        return [locale.code for locale in self._locales]

    def get(self, code: str) -> Locale | None:
        """Return the locale with the given code, if any."""
        for locale in self._locales:
            if locale.code == code:
                return locale
        return None

    def __iter__(self) -> Iterator[Locale]:
        return iter(self._locales)

    def __len__(self) -> int:
        return len(self._locales)

    def __contains__(self, code: object) -> bool:
        return any(locale.code == code for locale in self._locales)

    def write_cache(self, path: Path | str) -> None:
        """Write all locales, in order, to the cache file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = _LOCALES_ADAPTER.dump_json(list(self._locales), indent=2)
        path.write_bytes(data)
        logger.debug("Locale cache written to %s", path)

    @classmethod
    def from_cache(cls, path: Path | str) -> LocaleStore:
        """Create a populated store from a cache file."""
        store = cls()
        store.populate(read_cache(path))
        return store


def read_cache(path: Path | str) -> list[Locale]:
    """
    Read the locale cache file.

    Returns an empty list if the file is missing, malformed, does not
    match the locale schema, or repeats a locale code.
    """
    path = Path(path)
    try:
        locales = _LOCALES_ADAPTER.validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        logger.warning("Could not read locale cache %s: %s", path, e)
        return []

    codes = [locale.code for locale in locales]
    if len(set(codes)) != len(codes):
        logger.warning("Could not read locale cache %s: repeated codes in %s", path, codes)
        return []
    return locales


def locale_file_path(locales_dir: Path | str, code: str) -> Path:
    return Path(locales_dir) / f"{code}.json"


def save_locale_files(locales: Iterable[Locale], locales_dir: Path | str) -> list[Path]:
    """
    Write one `<code>.json` file per locale.

    Args:
        locales: Locale records to persist.
        locales_dir: Target directory, created if missing.

    Returns:
        Paths of the written files.
    """
    locales_dir = Path(locales_dir)
    locales_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for locale in locales:
        path = locale_file_path(locales_dir, locale.code)
        path.write_text(locale.to_json(), encoding="utf-8")
        written.append(path)
        logger.debug("Saved %s", path)
    return written


def load_locale_file(path: Path | str) -> Locale | None:
    """Load one locale file, or None if it is unreadable or invalid."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return Locale.model_validate(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Skipping locale file %s: %s", path, e)
        return None


def load_locale_files(
    locales_dir: Path | str,
    codes: Sequence[str] | None = None,
) -> list[Locale]:
    """
    Load persisted locale files.

    Args:
        locales_dir: Directory holding `<code>.json` files.
        codes: Locale codes to load, in order. If None, every JSON file in
            the directory is loaded in file-name order.

    Returns:
        Successfully loaded locales. Invalid or missing files are skipped,
        as are files holding a code other than their file name.
    """
    locales_dir = Path(locales_dir)
    if codes is None:
        if not locales_dir.is_dir():
            return []
        paths = sorted(locales_dir.glob("*.json"))
    else:
        paths = [locale_file_path(locales_dir, code) for code in codes]

    locales: list[Locale] = []
    for path in paths:
        locale = load_locale_file(path)
        if locale is None:
            continue
        if locale.code != path.stem:
            logger.warning("Skipping locale file %s: holds code %r", path, locale.code)
            continue
        locales.append(locale)
    return locales
