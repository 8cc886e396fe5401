"""Tests for the LLM provider layer."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from i18n_routes.errors import ProviderError
from i18n_routes.llm import LLMProviderType, LLMResponse, create_llm_provider
from i18n_routes.llm.openai_chat import OPENROUTER_BASE_URL, OpenAIChatProvider


def _completion(content: str) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[
            SimpleNamespace(message=SimpleNamespace(content=content), finish_reason="stop")
        ],
        usage=SimpleNamespace(prompt_tokens=12, completion_tokens=30),
    )


def _stub_client(provider: OpenAIChatProvider, answers: list[Any]) -> list[dict[str, Any]]:
    """Replace the API client; answers are returned or raised in order."""
    requests: list[dict[str, Any]] = []

    async def create(**kwargs: Any) -> SimpleNamespace:
        requests.append(kwargs)
        answer = answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return _completion(answer)

    provider._client = SimpleNamespace(  # type: ignore[assignment]
        chat=SimpleNamespace(completions=SimpleNamespace(create=create))
    )
    return requests


class TestFactory:
    def test_openai(self) -> None:
        provider = create_llm_provider("openai", api_key="sk-test", model="gpt-4")
        assert provider.name == "openai"
        assert provider.model == "gpt-4"

    def test_openrouter(self) -> None:
        provider = create_llm_provider(
            LLMProviderType.OPENROUTER, api_key="sk-or", model="openai/gpt-4o"
        )
        assert provider.name == "openrouter"
        assert isinstance(provider, OpenAIChatProvider)
        assert str(provider._client.base_url).rstrip("/") == OPENROUTER_BASE_URL

    def test_case_insensitive_name(self) -> None:
        assert create_llm_provider("OpenAI", api_key="sk-test").name == "openai"

    def test_invalid_type(self) -> None:
        with pytest.raises(ProviderError, match="Invalid provider type"):
            create_llm_provider("carrier-pigeon", api_key="sk-test")

    def test_missing_key(self) -> None:
        with pytest.raises(ProviderError, match="API key"):
            create_llm_provider("openai", api_key="")


class TestOpenAIChatProvider:
    def test_model_aliases(self) -> None:
        assert OpenAIChatProvider(api_key="sk-test").model == "gpt-4"
        assert OpenAIChatProvider(api_key="sk-test", model="quality").model == "gpt-4o"

    @pytest.mark.asyncio
    async def test_chat(self) -> None:
        provider = OpenAIChatProvider(api_key="sk-test")
        requests = _stub_client(provider, ['  {"code": "fr"}\n'])

        response = await provider.chat("system", "user", temperature=0.1)

        assert isinstance(response, LLMResponse)
        assert response.content == '{"code": "fr"}'
        assert response.total_tokens == 42
        assert requests[0]["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ]
        assert requests[0]["temperature"] == 0.1

    @pytest.mark.asyncio
    async def test_failure_is_not_retried(self) -> None:
        provider = OpenAIChatProvider(api_key="sk-test")
        requests = _stub_client(provider, [ConnectionError("refused"), "never sent"])

        with pytest.raises(ConnectionError):
            await provider.chat("system", "user")
        assert len(requests) == 1
        assert provider._client.max_retries == 0
