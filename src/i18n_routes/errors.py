"""
Exception hierarchy for i18n-routes.
"""

from __future__ import annotations


class I18nRoutesError(Exception):
    """Base class for errors raised by i18n-routes."""


class ConfigError(I18nRoutesError):
    """Invalid locale or project configuration."""


class StoreError(I18nRoutesError):
    """Locale store used outside its write-once lifecycle."""


class ProviderError(I18nRoutesError):
    """Translation provider could not be created."""
