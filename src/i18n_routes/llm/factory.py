"""
LLM provider factory.

Creates the translation provider selected in the configuration.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from i18n_routes.errors import ProviderError
from i18n_routes.llm.base import LLMProvider


class LLMProviderType(str, Enum):
    """Available LLM provider types."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"


def create_llm_provider(
    provider_type: LLMProviderType | str,
    *,
    api_key: str | None = None,
    model: str = "default",
    base_url: str | None = None,
    **kwargs: Any,
) -> LLMProvider:
    """
    Create an LLM provider instance.

    Args:
        provider_type: Type of provider to create (openai or openrouter).
        api_key: API key for the endpoint.
        model: Model name or alias.
        base_url: Override of the provider's default endpoint.
        **kwargs: Additional provider-specific options (timeout).

    Returns:
        LLMProvider instance.

    Raises:
        ProviderError: If provider_type is invalid or the API key is missing.

    Examples:
        provider = create_llm_provider("openai", api_key="sk-...", model="gpt-4")
    """
    if isinstance(provider_type, str):
        normalized = provider_type.lower().replace("_", "-")
        try:
            provider_type = LLMProviderType(normalized)
        except ValueError:
            valid = [p.value for p in LLMProviderType]
            raise ProviderError(
                f"Invalid provider type: {normalized}. Valid options: {valid}"
            ) from None

    if not api_key:
        raise ProviderError(f"{provider_type.value} provider requires an API key")

    from i18n_routes.llm.openai_chat import (
        OPENAI_BASE_URL,
        OPENROUTER_BASE_URL,
        OpenAIChatProvider,
    )

    default_url = {
        LLMProviderType.OPENAI: OPENAI_BASE_URL,
        LLMProviderType.OPENROUTER: OPENROUTER_BASE_URL,
    }[provider_type]

    return OpenAIChatProvider(
        api_key=api_key,
        model=model,
        base_url=base_url or default_url,
        provider_name=provider_type.value,
        **kwargs,
    )
