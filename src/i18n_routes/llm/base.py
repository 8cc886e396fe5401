"""
Translation provider interface.

The locale translator only needs a chat-style completion: a system prompt
describing the dictionary format and a user prompt carrying the JSON payload.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class LLMResponse:
    """Text returned by a provider, with usage figures when available."""

    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str = ""
    latency_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class LLMProvider(ABC):
    """A chat completion backend."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in log messages."""
        ...

    @property
    @abstractmethod
    def model(self) -> str:
        ...

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float = 0.3,
        max_tokens: int = 4096,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Run one completion.

        Args:
            messages: Chat messages with 'role' and 'content' keys.
            temperature: Sampling temperature.
            max_tokens: Upper bound on generated tokens.

        Raises:
            Exception: Whatever the backend raises; callers decide how to
                recover.
        """
        ...

    async def chat(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.3,
        max_tokens: int = 4096,
        **kwargs: Any,
    ) -> LLMResponse:
        """Send one system message followed by one user message."""
        return await self.complete(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )
