"""Tests for route classification and generation."""

from __future__ import annotations

import pytest

from i18n_routes.models import Locale
from i18n_routes.routes import (
    Route,
    RouteKind,
    RouteTable,
    classify_route_file,
    clean_route_path,
    generate_routes,
    localized_pattern,
)


@pytest.fixture
def locales(english_locale: Locale) -> list[Locale]:
    french = Locale(code="fr", name="Français", paths={"dashboard": "tableau-de-bord"})
    return [english_locale, french]


class TestClassification:
    @pytest.mark.parametrize(
        "path,kind",
        [
            ("[locale]/dashboard.astro", RouteKind.LOCALIZED),
            ("blog/[locale]/index.astro", RouteKind.LOCALIZED),
            ("index.astro", RouteKind.INVARIANT),
            ("robots.txt.ts", RouteKind.INVARIANT),
            ("[locale].astro", RouteKind.INVARIANT),
            ("api/[locale]-list.ts", RouteKind.INVARIANT),
        ],
    )
    def test_classify(self, path: str, kind: RouteKind) -> None:
        assert classify_route_file(path) == kind


class TestCleanRoutePath:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("index.astro", ""),
            ("404.astro", "404"),
            ("robots.txt.ts", "robots.txt"),
            ("blog/index.astro", "blog"),
            ("blog/post.md", "blog/post"),
            ("[locale]/index.astro", ""),
            ("[locale]/dashboard.astro", "dashboard"),
            ("[locale]/dashboard/index.astro", "dashboard"),
            ("[locale]/dashboard/settings.astro", "dashboard/settings"),
            ("[locale]/feed.xml.ts", "feed.xml"),
            ("[locale]/indexing.astro", "indexing"),
        ],
    )
    def test_clean(self, path: str, expected: str) -> None:
        assert clean_route_path(path) == expected


class TestLocalizedPattern:
    def test_page_gets_trailing_slash(self) -> None:
        assert localized_pattern("fr", "tableau-de-bord") == "/fr/tableau-de-bord/"

    def test_root(self) -> None:
        assert localized_pattern("fr", "") == "/fr/"

    def test_file_like_leaf(self) -> None:
        assert localized_pattern("fr", "feed.xml") == "/fr/feed.xml"
        assert localized_pattern("fr", "api/data.json") == "/fr/api/data.json"


class TestGenerateRoutes:
    """Injection into the router."""

    def test_localized_dashboard(self, locales: list[Locale]) -> None:
        router = RouteTable()
        routes = generate_routes(["[locale]/dashboard.astro"], locales, router)

        assert router.patterns() == ["/en/dashboard/", "/fr/tableau-de-bord/"]
        assert routes == router.routes

    def test_entry_points(self, locales: list[Locale]) -> None:
        router = RouteTable()
        generate_routes(["index.astro", "[locale]/index.astro"], locales, router, routes_dir="src/routes/")

        assert router.routes == [
            Route(pattern="", entry_point="src/routes/index.astro"),
            Route(pattern="/en/", entry_point="src/routes/[locale]/index.astro"),
            Route(pattern="/fr/", entry_point="src/routes/[locale]/index.astro"),
        ]

    def test_invariant_files_get_one_route(self, locales: list[Locale]) -> None:
        router = RouteTable()
        generate_routes(["robots.txt.ts", "blog/index.astro"], locales, router)

        assert router.patterns() == ["robots.txt", "blog"]

    def test_file_like_pages_have_no_trailing_slash(self, locales: list[Locale]) -> None:
        router = RouteTable()
        generate_routes(["[locale]/feed.xml.ts"], locales, router)

        assert router.patterns() == ["/en/feed.xml", "/fr/feed.xml"]
        assert all(not pattern.endswith("/") for pattern in router.patterns())

    def test_nested_translation(self, french_locale: Locale) -> None:
        router = RouteTable()
        generate_routes(
            [
                "[locale]/dashboard/index.astro",
                "[locale]/dashboard/settings.astro",
                "[locale]/about.astro",
                "[locale]/pricing.astro",
            ],
            [french_locale],
            router,
        )

        assert router.patterns() == [
            "/fr/tableau-de-bord/",
            "/fr/tableau-de-bord/parametres/",
            "/fr/a-propos/",
            "/fr/pricing/",
        ]

    def test_no_locales(self) -> None:
        router = RouteTable()
        generate_routes(["[locale]/dashboard.astro", "index.astro"], [], router)
        assert router.patterns() == [""]

    def test_second_run_registers_again(self, locales: list[Locale]) -> None:
        router = RouteTable()
        generate_routes(["[locale]/dashboard.astro"], locales, router)
        generate_routes(["[locale]/dashboard.astro"], locales, router)

        assert len(router) == 4

    def test_manifest(self, locales: list[Locale]) -> None:
        router = RouteTable()
        generate_routes(["[locale]/dashboard.astro"], locales[:1], router, routes_dir="./src/routes")

        assert router.to_manifest() == [
            {"pattern": "/en/dashboard/", "entry_point": "./src/routes/[locale]/dashboard.astro"}
        ]
