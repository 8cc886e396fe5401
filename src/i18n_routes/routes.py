"""
Route generation for i18n-routes.

Route files below a `[locale]` directory are served once per locale, at a
pattern built from the locale code and the translated page path. All other
route files are served at a single fixed pattern.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Protocol

from i18n_routes.models import Locale
from i18n_routes.paths import translate_path

logger = logging.getLogger(__name__)

LOCALE_PLACEHOLDER = "[locale]"
INDEX_SEGMENT = "index"


class RouteKind(str, Enum):
    """Classification of a route file."""

    INVARIANT = "invariant"
    LOCALIZED = "localized"


@dataclass(frozen=True)
class Route:
    """An injected route."""

    pattern: str
    entry_point: str


class Router(Protocol):
    """The site generator's route registry."""

    def inject_route(self, *, pattern: str, entry_point: str) -> None: ...


class RouteTable:
    """
    In-memory router recording every injection in order.

    Injections are not deduplicated: generating routes twice for the same
    table registers every route twice.
    """

    def __init__(self) -> None:
        self.routes: list[Route] = []

    def inject_route(self, *, pattern: str, entry_point: str) -> None:
        self.routes.append(Route(pattern=pattern, entry_point=entry_point))

    def patterns(self) -> list[str]:
        return [route.pattern for route in self.routes]

    def to_manifest(self) -> list[dict[str, Any]]:
        return [asdict(route) for route in self.routes]

    def __len__(self) -> int:
        return len(self.routes)


def classify_route_file(relative_path: str) -> RouteKind:
    """A file is localized if one of its directories is the locale placeholder."""
    directories = relative_path.split("/")[:-1]
    if LOCALE_PLACEHOLDER in directories:
        return RouteKind.LOCALIZED
    return RouteKind.INVARIANT


def clean_route_path(relative_path: str) -> str:
    """
    Turn a route file path into a canonical page path.

    The locale placeholder directory and the file extension are removed, and
    a trailing `index` page collapses onto its parent directory.

    Examples:
        "[locale]/dashboard/index.astro" -> "dashboard"
        "[locale]/feed.xml.ts" -> "feed.xml"
        "index.astro" -> ""
    """
    *directories, file_name = relative_path.split("/")
    directories = [d for d in directories if d != LOCALE_PLACEHOLDER]
    stem = posixpath.splitext(file_name)[0]

    if stem == INDEX_SEGMENT:
        return "/".join(directories)
    return "/".join([*directories, stem])


def localized_pattern(code: str, translated_path: str) -> str:
    """
    Build the pattern of a page for one locale.

    File-like paths (containing a dot) get no trailing slash.
    """
    pattern = f"/{code}/{translated_path}"
    if translated_path and "." not in translated_path:
        pattern += "/"
    return pattern


def generate_routes(
    route_files: Iterable[str],
    locales: Iterable[Locale],
    router: Router,
    *,
    routes_dir: str = "./src/routes",
) -> list[Route]:
    """
    Generate and inject the routes of every route file.

    Must be called once per build: every call injects into the router again.

    Args:
        route_files: Route file paths relative to routes_dir.
        locales: Locale records, in store order.
        router: Route registry receiving the injections.
        routes_dir: Directory prefix of the entry points.

    Returns:
        The injected routes, in injection order.
    """
    locales = list(locales)
    routes: list[Route] = []

    def inject(pattern: str, entry_point: str) -> None:
        router.inject_route(pattern=pattern, entry_point=entry_point)
        routes.append(Route(pattern=pattern, entry_point=entry_point))
        logger.debug("Route injected %s -> %s", pattern, entry_point)

    for relative_path in route_files:
        entry_point = f"{routes_dir.rstrip('/')}/{relative_path}"
        page_path = clean_route_path(relative_path)

        if classify_route_file(relative_path) == RouteKind.INVARIANT:
            inject(page_path, entry_point)
            continue

        for locale in locales:
            translated = translate_path(page_path, locale.path_tree)
            inject(localized_pattern(locale.code, translated), entry_point)

    logger.info("Injected %d routes", len(routes))
    return routes
