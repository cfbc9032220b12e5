"""Inline completion provider.

Entry point for the host editor: called on every cursor or text event, it
runs the trigger gate and, when allowed, the window -> prompt -> backend
pipeline, then caches the outcome in the session state.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from . import context_window, prompt_builder
from .backends import build_backend
from .completion_client import (
    CompletionBackend,
    CompletionClient,
    CompletionRequest,
    CompletionResult,
    InlineCompletionItem,
)
from .config import Config
from .session import InputFingerprint, SessionState
from .text_source import (
    CancellationToken,
    CursorLocation,
    EditorContext,
    TextRange,
    TextSource,
)
from .trigger_gate import TriggerGate

logger = logging.getLogger(__name__)


def _cancelled(token: CancellationToken | None) -> bool:
    return token is not None and token.is_cancellation_requested


class InlineCompletionProvider:
    """Serves inline completions for one editor session."""

    def __init__(
        self,
        config: Config,
        backend: CompletionBackend | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.client = CompletionClient(backend or build_backend(config))
        self.gate = TriggerGate(
            trigger_delay=config.trigger_delay,
            context_lines=config.context_lines,
        )
        self.state = SessionState()
        self._clock = clock
        self._lock = asyncio.Lock()

    async def provide_inline_completions(
        self,
        source: TextSource,
        position: CursorLocation,
        editor: EditorContext | None = None,
        token: CancellationToken | None = None,
    ) -> list[InlineCompletionItem] | None:
        """Return completions for the cursor, or None for no suggestion."""
        try:
            return await self._provide(source, position, editor, token)
        except Exception:
            logger.exception("Inline completion failed")
            return None

    async def _provide(
        self,
        source: TextSource,
        position: CursorLocation,
        editor: EditorContext | None,
        token: CancellationToken | None,
    ) -> list[InlineCompletionItem] | None:
        window = context_window.extract(source, position, self.config.context_lines)
        position = window.cursor
        fingerprint = InputFingerprint(
            position.line, position.character, window.line_prefix
        )
        logger.debug(f"Completion triggered at {position.line}:{position.character}")

        async with self._lock:
            previous_input = self.state.last_input_fingerprint
            decision = self.gate.decide(
                fingerprint,
                self.state,
                source=source,
                position=position,
                now=self._clock(),
                editor=editor,
                token=token,
            )
        if not decision.allowed:
            logger.debug(f"Not triggering: {decision.reason}")
            return decision.cached_batch
        logger.debug(f"Triggering: {decision.reason}")

        request = self._build_request(source, window)
        logger.info(
            f"Requesting completion from {self.config.llm_provider}/{self.config.llm_model}"
        )
        t0 = time.time()
        results = await self.client.complete(request, token)
        logger.info(
            f"Completion round trip took {time.time() - t0:.2f}s, "
            f"got {len(results)} result(s)"
        )

        async with self._lock:
            if _cancelled(token):
                logger.debug("Request cancelled, discarding response")
                # A newer request may have recorded its own input meanwhile
                if self.state.last_input_fingerprint == fingerprint:
                    self.state.last_input_fingerprint = previous_input
                return None
            self.state.record_round_trip(self._clock())
            batch = self._to_items(results, position)
            if not batch:
                logger.debug("No completion suggestions")
                return None
            self.state.record_batch(batch)

        for item in batch:
            logger.debug(f"  Suggestion: {item.insert_text[:80]!r}")
        return batch

    def _build_request(
        self, source: TextSource, window: context_window.ContextWindow
    ) -> CompletionRequest:
        position = window.cursor
        suffix = ""
        if self.config.include_line_suffix:
            suffix = context_window.extract_line_suffix(source, position)
        prompt = prompt_builder.build(window.text, position.character, suffix)
        return CompletionRequest(
            rendered_prompt=prompt,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            cursor_offset=position.character,
            backend_config=self.config,
        )

    @staticmethod
    def _to_items(
        results: list[CompletionResult], position: CursorLocation
    ) -> list[InlineCompletionItem]:
        insertion = TextRange.empty_at(position)
        return [
            InlineCompletionItem(r.text, insertion, r.detail)
            for r in results
            if r.text
        ]
