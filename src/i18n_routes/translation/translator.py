"""
Locale dictionary translation through an LLM provider.

Every non-default locale receives the identity dictionaries of the default
locale and is asked to translate the values only. A failed or malformed
answer never aborts the build: the locale keeps its untranslated record and
the outcome records why.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import ValidationError

from i18n_routes.llm.base import LLMProvider
from i18n_routes.models import Locale, LocaleDescriptor, TokenSet

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = " ".join(
    [
        "You are an I18n tool that translates a user input.",
        'Here is an example : { "code": "fr", "name": "Français", "paths": { "dashboard": "dashboard" },'
        ' "texts": { "All accounts": "All accounts", "Add website": "Add website" } }.',
        "Translate from {source} to the locale specified in the input.",
        "Only translate the right hands of the paths and texts objects.",
        '"paths" are slugs that will be used as page slugs, keep them URL valid.',
        "For the output, make sure to always respect the schema and return valid JSON.",
    ]
)


class TranslationStatus(str, Enum):
    """How a locale record was obtained."""

    SOURCE = "source"
    TRANSLATED = "translated"
    FALLBACK = "fallback"


@dataclass
class TranslationOutcome:
    """Locale record produced for one configured locale."""

    locale: Locale
    status: TranslationStatus
    error: str | None = None

    @property
    def code(self) -> str:
        return self.locale.code


@dataclass
class TranslationReport:
    """Outcomes of one translation run, in configuration order."""

    outcomes: list[TranslationOutcome] = field(default_factory=list)

    @property
    def locales(self) -> list[Locale]:
        return [outcome.locale for outcome in self.outcomes]

    @property
    def fallbacks(self) -> list[str]:
        return [o.code for o in self.outcomes if o.status == TranslationStatus.FALLBACK]

    def get(self, code: str) -> TranslationOutcome | None:
        for outcome in self.outcomes:
            if outcome.code == code:
                return outcome
        return None


class TranslationValidationError(ValueError):
    """The provider answer does not match the requested locale shape."""


def parse_json_response(content: str) -> Any:
    """
    Parse a JSON object from an LLM answer.

    Code fences around the answer are removed. If the answer still is not
    valid JSON, the first `{...}` block is tried.

    Raises:
        json.JSONDecodeError: If no JSON object can be recovered.
    """
    content = content.strip()
    if content.startswith("```"):
        lines = content.split("\n")
        content = "\n".join(lines[1:-1]) if len(lines) > 2 else ""

    try:
        return json.loads(content)
    except json.JSONDecodeError:
        json_match = re.search(r"\{.*\}", content, re.DOTALL)
        if json_match:
            return json.loads(json_match.group())
        raise


def validate_translation(request: Locale, raw: Any) -> Locale:
    """
    Check that a translated record has the shape of its request.

    The code and every key of `paths` and `texts` must be unchanged, and all
    dictionary values must be strings.

    Raises:
        TranslationValidationError: On any mismatch.
    """
    try:
        translated = Locale.model_validate(raw)
    except ValidationError as e:
        raise TranslationValidationError(f"Invalid locale schema: {e}") from e

    if translated.code != request.code:
        raise TranslationValidationError(
            f"Expected code {request.code!r}, got {translated.code!r}"
        )

    for section in ("paths", "texts"):
        expected = getattr(request, section)
        actual = getattr(translated, section)
        if set(actual) != set(expected):
            missing = sorted(set(expected) - set(actual))
            extra = sorted(set(actual) - set(expected))
            raise TranslationValidationError(
                f"Keys of {section!r} changed (missing: {missing}, extra: {extra})"
            )
        non_strings = sorted(k for k, v in actual.items() if not isinstance(v, str))
        if non_strings:
            raise TranslationValidationError(
                f"Non-string values in {section!r}: {non_strings}"
            )

    return translated


class LocaleTranslator:
    """Translates identity locale records for every non-default locale."""

    def __init__(
        self,
        provider: LLMProvider | None,
        *,
        source_language: str = "english",
        concurrent: bool = True,
        temperature: float = 0.3,
        max_tokens: int = 4096,
    ):
        """
        Initialize the translator.

        Args:
            provider: Chat completion backend. May be None when only the
                default locale is configured.
            source_language: Name of the default locale's language, used in
                the prompt.
            concurrent: Issue the per-locale calls concurrently.
            temperature: Sampling temperature.
            max_tokens: Maximum output tokens per locale.
        """
        self._provider = provider
        self._system_prompt = SYSTEM_PROMPT.replace("{source}", source_language)
        self._concurrent = concurrent
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def provider(self) -> LLMProvider | None:
        return self._provider

    async def translate(
        self,
        default_locale: str,
        locale_configs: Sequence[LocaleDescriptor],
        tokens: TokenSet,
    ) -> TranslationReport:
        """
        Build one locale record per configured locale.

        Args:
            default_locale: Code of the source language locale.
            locale_configs: Configured locales, in order.
            tokens: Tokens extracted from the source tree.

        Returns:
            TranslationReport with one outcome per configured locale, in the
            configured order.

        Raises:
            ValueError: If a locale other than the default one is configured
                and the translator has no provider.
        """
        if self._provider is None:
            foreign = [d.code for d in locale_configs if d.code != default_locale]
            if foreign:
                raise ValueError(f"A provider is required to translate: {', '.join(foreign)}")

        jobs = [
            self._translate_one(default_locale, descriptor, tokens)
            for descriptor in locale_configs
        ]

        if self._concurrent:
            outcomes = await asyncio.gather(*jobs)
        else:
            outcomes = [await job for job in jobs]

        report = TranslationReport(outcomes=list(outcomes))
        if report.fallbacks:
            logger.warning("Untranslated fallback used for: %s", ", ".join(report.fallbacks))
        return report

    async def _translate_one(
        self,
        default_locale: str,
        descriptor: LocaleDescriptor,
        tokens: TokenSet,
    ) -> TranslationOutcome:
        request = Locale.identity(descriptor, tokens)

        if descriptor.code == default_locale:
            return TranslationOutcome(locale=request, status=TranslationStatus.SOURCE)

        logger.info("Translating %d tokens to %s...", len(tokens), descriptor.code)

        try:
            response = await self._provider.chat(
                system_prompt=self._system_prompt,
                user_prompt=request.to_json(),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
            translated = validate_translation(request, parse_json_response(response.content))
        except Exception as e:
            logger.error(
                "Translation to %s failed (%s): %s",
                descriptor.code,
                self._provider.name,
                e,
            )
            return TranslationOutcome(
                locale=request,
                status=TranslationStatus.FALLBACK,
                error=f"{type(e).__name__}: {e}",
            )

        logger.debug(
            "Translated %s in %.0fms (%d tokens)",
            descriptor.code,
            response.latency_ms,
            response.total_tokens,
        )
        return TranslationOutcome(locale=translated, status=TranslationStatus.TRANSLATED)
