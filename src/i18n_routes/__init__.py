"""
i18n-routes: translated routes for site builds.

This package provides tools for:
- Extracting translatable path segments and texts from site sources
- Machine translation of locale dictionaries with an untranslated fallback
- Persisting one JSON dictionary per locale
- Generating one route per locale per page from translated paths
- Resolving locales from URLs and Accept-Language headers
"""

__version__ = "0.1.0"

from i18n_routes.build import BuildResult, I18nBuild
from i18n_routes.config import Settings, load_config
from i18n_routes.errors import ConfigError, I18nRoutesError, ProviderError, StoreError
from i18n_routes.models import (
    Locale,
    LocaleDescriptor,
    PathLeaf,
    PathNode,
    TokenSet,
    build_path_tree,
)
from i18n_routes.paths import translate_path
from i18n_routes.resolver import LocaleResolver, parse_accept_language
from i18n_routes.routes import Route, RouteKind, RouteTable, generate_routes
from i18n_routes.scanner import TokenScanner, get_directory_files
from i18n_routes.store import LocaleStore, load_locale_files, save_locale_files
from i18n_routes.translation import LocaleTranslator, TranslationReport, TranslationStatus

__all__ = [
    # Config
    "Settings",
    "load_config",
    # Errors
    "I18nRoutesError",
    "ConfigError",
    "StoreError",
    "ProviderError",
    # Data model
    "Locale",
    "LocaleDescriptor",
    "PathLeaf",
    "PathNode",
    "TokenSet",
    "build_path_tree",
    # Scanner
    "TokenScanner",
    "get_directory_files",
    # Store
    "LocaleStore",
    "load_locale_files",
    "save_locale_files",
    # Translation
    "LocaleTranslator",
    "TranslationReport",
    "TranslationStatus",
    # Routing
    "translate_path",
    "Route",
    "RouteKind",
    "RouteTable",
    "generate_routes",
    # Build
    "I18nBuild",
    "BuildResult",
    # Resolver
    "LocaleResolver",
    "parse_accept_language",
]
