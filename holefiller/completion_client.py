"""Completion client - one hole-filler round trip against a backend.

Sends the rendered prompt as a single user message, drains the streamed
reply, and pulls the text between the COMPLETION tags. Backend failures are
logged and turned into an empty error result; nothing is raised to the
caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, AsyncIterator, Protocol

from .prompt_builder import (
    COMPLETION_CLOSE_TAG,
    COMPLETION_OPEN_TAG,
    SYSTEM_INSTRUCTION,
)
from .text_source import CancellationToken, TextRange

logger = logging.getLogger(__name__)

COMPLETION_DETAIL = "AI Completion"
ERROR_DETAIL = "Error generating completion"


@dataclass(frozen=True)
class CompletionRequest:
    rendered_prompt: str
    max_tokens: int = 50
    temperature: float = 0.2
    cursor_offset: int = 0
    backend_config: Any = None


@dataclass(frozen=True)
class CompletionResult:
    text: str
    detail: str | None = None

    @property
    def is_error(self) -> bool:
        return self.detail == ERROR_DETAIL


@dataclass(frozen=True)
class InlineCompletionItem:
    insert_text: str
    range: TextRange
    detail: str | None = None


@dataclass(frozen=True)
class TextChunk:
    text: str


@dataclass(frozen=True)
class StreamEvent:
    """Any non-text chunk (usage, message start/stop, ...). Ignored."""

    type: str
    payload: Any = None


class CompletionBackend(Protocol):
    def stream(
        self,
        system_prompt: str,
        messages: list[dict[str, str]],
        request: CompletionRequest,
    ) -> AsyncIterator[Any]: ...


def chunk_text(chunk: Any) -> str | None:
    """Text carried by a stream chunk, or None for events."""
    if isinstance(chunk, TextChunk):
        return chunk.text
    if isinstance(chunk, str):
        return chunk
    if isinstance(chunk, Mapping) and isinstance(chunk.get("text"), str):
        return chunk["text"]
    return None


def extract_completion(
    response: str,
    open_tag: str = COMPLETION_OPEN_TAG,
    close_tag: str = COMPLETION_CLOSE_TAG,
) -> str:
    """Return the text between the first open tag and the first close tag
    after it, or "" when either is missing."""
    start = response.find(open_tag)
    if start == -1:
        return ""
    start += len(open_tag)
    end = response.find(close_tag, start)
    if end == -1:
        return ""
    return response[start:end]


class CompletionClient:
    def __init__(self, backend: CompletionBackend):
        self.backend = backend

    async def complete(
        self,
        request: CompletionRequest,
        token: CancellationToken | None = None,
    ) -> list[CompletionResult]:
        """Run one round trip.

        Returns a single result on success or backend failure, and an empty
        list if `token` was cancelled before the stream was fully drained.
        """
        if token is not None and token.is_cancellation_requested:
            return []

        messages = [{"role": "user", "content": request.rendered_prompt}]
        try:
            response = await self._drain(
                self.backend.stream(SYSTEM_INSTRUCTION, messages, request), token
            )
        except Exception:
            logger.exception("Error generating completion")
            return [CompletionResult(text="", detail=ERROR_DETAIL)]

        if response is None:
            logger.debug("Completion cancelled while streaming")
            return []

        text = extract_completion(response)
        if not text:
            logger.debug(f"No completion tags in response ({len(response)} chars)")
        return [CompletionResult(text=text, detail=COMPLETION_DETAIL)]

    @staticmethod
    async def _drain(
        stream: AsyncIterator[Any], token: CancellationToken | None
    ) -> str | None:
        parts: list[str] = []
        try:
            async for chunk in stream:
                if token is not None and token.is_cancellation_requested:
                    return None
                text = chunk_text(chunk)
                if text is not None:
                    parts.append(text)
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
        return "".join(parts)
