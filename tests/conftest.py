"""
Shared fixtures for i18n-routes tests.

Provides locale records and a small site tree with sources, route files and
locale settings.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from i18n_routes.config import Settings
from i18n_routes.models import Locale, LocaleDescriptor


@pytest.fixture
def descriptors() -> list[LocaleDescriptor]:
    return [
        LocaleDescriptor(code="en", name="English"),
        LocaleDescriptor(code="fr", name="Français"),
    ]


@pytest.fixture
def french_locale() -> Locale:
    return Locale(
        code="fr",
        name="Français",
        paths={
            "dashboard": {"index": "tableau-de-bord", "settings": "parametres"},
            "about": "a-propos",
        },
        texts={"Add website": "Ajouter un site"},
    )


@pytest.fixture
def english_locale() -> Locale:
    return Locale(
        code="en",
        name="English",
        paths={"dashboard": "dashboard", "about": "about"},
        texts={"Add website": "Add website"},
    )


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """
    Create a site with sources, route files and an empty locales directory.

    Layout:
        src/components/nav.astro
        src/routes/index.astro
        src/routes/robots.txt.ts
        src/routes/[locale]/index.astro
        src/routes/[locale]/dashboard.astro
        src/routes/[locale]/feed.xml.ts
    """
    src = tmp_path / "src"
    (src / "components").mkdir(parents=True)
    routes = src / "routes"
    (routes / "[locale]").mkdir(parents=True)

    (src / "components" / "nav.astro").write_text(
        '<a href={i18n.path("/dashboard/")}>{i18n.text("Dashboard")}</a>\n',
        encoding="utf-8",
    )
    (routes / "index.astro").write_text("<meta http-equiv='refresh' />", encoding="utf-8")
    (routes / "robots.txt.ts").write_text("export const GET = () => {}", encoding="utf-8")
    (routes / "[locale]" / "index.astro").write_text(
        "<h1>{i18n.text('Welcome')}</h1>", encoding="utf-8"
    )
    (routes / "[locale]" / "dashboard.astro").write_text(
        '<button>{i18n.text(\n  "Add website"\n)}</button>', encoding="utf-8"
    )
    (routes / "[locale]" / "feed.xml.ts").write_text("export const GET = () => {}", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(site_dir: Path, descriptors: list[LocaleDescriptor]) -> Settings:
    return Settings(
        paths={
            "src_dir": site_dir / "src",
            "routes_dir": site_dir / "src" / "routes",
            "locales_dir": site_dir / "public" / "locales",
            "cache_file": site_dir / ".i18n-routes" / "store.json",
            "routes_manifest": site_dir / ".i18n-routes" / "routes.json",
        },
        i18n={
            "default_locale": "en",
            "locales": [d.model_dump() for d in descriptors],
            "generate": True,
        },
        translation={"api_key": "test-key"},
    )
