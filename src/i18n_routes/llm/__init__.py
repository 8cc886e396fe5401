"""
LLM provider abstraction layer.

Supports OpenAI-compatible chat completion backends:
- OpenAI (default)
- OpenRouter
"""

from i18n_routes.llm.base import LLMProvider, LLMResponse
from i18n_routes.llm.factory import LLMProviderType, create_llm_provider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMProviderType",
    "create_llm_provider",
]
