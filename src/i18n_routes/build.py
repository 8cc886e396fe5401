"""
Build pipeline for i18n-routes.

Runs the route setup of one site build:
1. Generate locale dictionaries (extract + translate) or load the saved ones
2. Populate the locale store and write the cache file
3. Generate one route per invariant file and one per locale per localized file
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from i18n_routes.config import Settings
from i18n_routes.llm import LLMProvider, create_llm_provider
from i18n_routes.models import Locale
from i18n_routes.routes import Route, Router, generate_routes
from i18n_routes.scanner import TokenScanner, get_directory_files
from i18n_routes.store import LocaleStore, load_locale_files, save_locale_files
from i18n_routes.translation import LocaleTranslator, TranslationReport

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of one build."""

    store: LocaleStore
    routes: list[Route] = field(default_factory=list)
    # None when the saved locale files were reused
    report: TranslationReport | None = None

    @property
    def locales(self) -> list[Locale]:
        return list(self.store)


class I18nBuild:
    """
    Route setup for one site build.

    A build instance is meant to run once: the locale store it fills is
    write-once and the router receives every route again on each run.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        provider: LLMProvider | None = None,
        scanner: TokenScanner | None = None,
    ):
        """
        Initialize the build.

        Args:
            settings: Project settings.
            provider: Translation provider. Created from settings on first
                use if None.
            scanner: Token scanner. A default scanner is used if None.
        """
        self.settings = settings
        self.store = LocaleStore()
        self._provider = provider
        self._scanner = scanner or TokenScanner()

    @property
    def provider(self) -> LLMProvider:
        """Translation provider, created lazily from the settings."""
        if self._provider is None:
            translation = self.settings.translation
            self._provider = create_llm_provider(
                translation.provider,
                api_key=translation.api_key,
                model=translation.model,
                base_url=translation.base_url,
                timeout=translation.timeout_seconds,
            )
        return self._provider

    async def generate_locales(self) -> TranslationReport:
        """Extract tokens, translate them and save one file per locale."""
        i18n = self.settings.i18n
        paths = self.settings.paths
        translation = self.settings.translation

        logger.info("Extracting paths/texts...")
        tokens = self._scanner.extract(paths.src_dir)

        logger.info("Translating paths/texts...")
        # the default locale is never sent to the provider
        needs_provider = any(d.code != i18n.default_locale for d in i18n.locales)
        translator = LocaleTranslator(
            self.provider if needs_provider else None,
            source_language=translation.source_language,
            concurrent=translation.concurrent,
            temperature=translation.temperature,
            max_tokens=translation.max_tokens,
        )
        report = await translator.translate(i18n.default_locale, i18n.locales, tokens)

        logger.info("Saving translations...")
        save_locale_files(report.locales, paths.locales_dir)
        return report

    def load_locales(self) -> list[Locale]:
        """Load the saved locale files of the configured locales."""
        logger.info("Loading paths/texts...")
        locales = load_locale_files(self.settings.paths.locales_dir, self.settings.i18n.codes)
        missing = sorted(set(self.settings.i18n.codes) - {locale.code for locale in locales})
        if missing:
            logger.warning("No usable locale file for: %s", ", ".join(missing))
        return locales

    async def run(self, router: Router) -> BuildResult:
        """
        Populate the locale store and inject all routes.

        Args:
            router: Route registry of the site generator.

        Returns:
            BuildResult with the store, injected routes and translation report.
        """
        paths = self.settings.paths
        logger.info("Initializing...")
        paths.locales_dir.mkdir(parents=True, exist_ok=True)

        report: TranslationReport | None = None
        if self.settings.i18n.generate:
            report = await self.generate_locales()
            locales = report.locales
        else:
            locales = self.load_locales()

        self.store.populate(locales)
        self.store.write_cache(paths.cache_file)
        logger.debug("Locales stored: %s", ", ".join(self.store.codes))

        route_files = get_directory_files(paths.routes_dir)
        logger.debug("Files detected: %s", route_files)

        routes = generate_routes(
            route_files,
            self.store,
            router,
            routes_dir=paths.routes_dir.as_posix(),
        )
        return BuildResult(store=self.store, routes=routes, report=report)
