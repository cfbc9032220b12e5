"""Streaming completion backends over the vendor SDKs.

Each backend turns a system prompt plus chat messages into an async
iterator of TextChunk / StreamEvent objects. The SDK clients are created
lazily on first use.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from .completion_client import CompletionBackend, CompletionRequest, StreamEvent, TextChunk
from .config import Config

logger = logging.getLogger(__name__)


class AnthropicBackend:
    def __init__(self, config: Config):
        self.config = config
        self._client = None

    def _get_client(self):
        if self._client is None:
            import anthropic

            self._client = anthropic.AsyncAnthropic(
                api_key=self.config.anthropic_api_key
            )
        return self._client

    async def stream(
        self,
        system_prompt: str,
        messages: list[dict[str, str]],
        request: CompletionRequest,
    ) -> AsyncIterator[TextChunk | StreamEvent]:
        client = self._get_client()
        async with client.messages.stream(
            model=self.config.llm_model,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
            system=system_prompt,
            messages=messages,
        ) as stream:
            async for event in stream:
                if event.type == "text":
                    yield TextChunk(event.text)
                else:
                    yield StreamEvent(event.type, event)


class OpenAIBackend:
    def __init__(self, config: Config):
        self.config = config
        self._client = None

    def _get_client(self):
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(
                api_key=self.config.openai_api_key,
                base_url=self.config.openai_base_url or None,
            )
        return self._client

    async def stream(
        self,
        system_prompt: str,
        messages: list[dict[str, str]],
        request: CompletionRequest,
    ) -> AsyncIterator[TextChunk | StreamEvent]:
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.config.llm_model,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
            messages=[{"role": "system", "content": system_prompt}, *messages],
            stream=True,
        )
        async with response:
            async for chunk in response:
                content = chunk.choices[0].delta.content if chunk.choices else None
                if content:
                    yield TextChunk(content)
                else:
                    yield StreamEvent("chunk", chunk)


BACKENDS = {
    "anthropic": AnthropicBackend,
    "openai": OpenAIBackend,
}


def build_backend(config: Config) -> CompletionBackend:
    """Construct the backend named by `config.llm_provider`."""
    try:
        backend_cls = BACKENDS[config.llm_provider]
    except KeyError:
        raise ValueError(f"Unknown LLM provider: {config.llm_provider}") from None
    logger.info(f"Using {config.llm_provider}/{config.llm_model}")
    return backend_cls(config)
