"""
Translation of locale dictionaries.

Provides:
- Identity records for the default locale
- LLM translation of path and text dictionaries for every other locale
- Untranslated fallback when a provider answer is unusable
"""

from i18n_routes.translation.translator import (
    LocaleTranslator,
    TranslationOutcome,
    TranslationReport,
    TranslationStatus,
)

__all__ = ["LocaleTranslator", "TranslationOutcome", "TranslationReport", "TranslationStatus"]
