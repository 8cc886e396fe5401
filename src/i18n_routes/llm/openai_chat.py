"""
OpenAI-compatible chat completion provider.

Talks to the OpenAI API directly or to any compatible endpoint such as
OpenRouter. Every completion is a single request: a failed locale is not
retried within a build.
"""

from __future__ import annotations

import time
from typing import Any

from openai import AsyncOpenAI

from i18n_routes.llm.base import LLMProvider, LLMResponse

OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenAIChatProvider(LLMProvider):
    """Chat completions through `openai.AsyncOpenAI`."""

    MODELS = {
        "default": "gpt-4",
        "fast": "gpt-4o-mini",
        "quality": "gpt-4o",
    }

    def __init__(
        self,
        api_key: str,
        model: str = "default",
        base_url: str = OPENAI_BASE_URL,
        timeout: float = 120.0,
        provider_name: str = "openai",
    ):
        """
        Initialize the provider.

        Args:
            api_key: API key for the endpoint.
            model: Model key (from MODELS) or full model name.
            base_url: API base URL.
            timeout: Request timeout in seconds.
            provider_name: Name reported in logs.
        """
        self._model_name = self.MODELS.get(model, model)
        self._provider_name = provider_name
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        return self._provider_name

    @property
    def model(self) -> str:
        return self._model_name

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float = 0.3,
        max_tokens: int = 4096,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Send one chat completion request.

        Errors of the client (connection, status, timeout) propagate to the
        caller unchanged.
        """
        started = time.perf_counter()
        completion = await self._client.chat.completions.create(
            model=self._model_name,
            messages=messages,  # type: ignore[arg-type]
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

        choice = completion.choices[0]
        usage = completion.usage
        return LLMResponse(
            content=(choice.message.content or "").strip(),
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model_name,
            latency_ms=(time.perf_counter() - started) * 1000,
            metadata={"provider": self._provider_name, "finish_reason": choice.finish_reason},
        )
