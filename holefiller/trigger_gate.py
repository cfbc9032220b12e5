"""Trigger gate - decides whether a cursor event warrants a new completion.

Checks run cheapest first: host signals, then the session cache, then the
rate limit, then the text around the cursor. A denial may hand back the
previously cached batch so the editor keeps showing the same suggestion.
"""

from __future__ import annotations

from dataclasses import dataclass

from .completion_client import InlineCompletionItem
from .context_window import DEFAULT_CONTEXT_LINES
from .session import InputFingerprint, SessionState
from .text_source import (
    CancellationToken,
    CursorLocation,
    EditorContext,
    TextRange,
    TextSource,
)


DEFAULT_TRIGGER_DELAY = 1.0  # seconds


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    reason: str
    cached_batch: list[InlineCompletionItem] | None = None

    @classmethod
    def allow(cls, reason: str) -> GateDecision:
        return cls(True, reason)

    @classmethod
    def deny(
        cls, reason: str, cached_batch: list[InlineCompletionItem] | None = None
    ) -> GateDecision:
        return cls(False, reason, cached_batch)


def is_in_line_comment(line_prefix: str) -> bool:
    return "//" in line_prefix


def is_in_block_comment(text_before_cursor: str) -> bool:
    """True if the last `/*` before the cursor has not been closed."""
    return text_before_cursor.rfind("/*") > text_before_cursor.rfind("*/")


def is_in_comment(source: TextSource, position: CursorLocation) -> bool:
    line_prefix = source.line_at(position.line)[: position.character]
    if is_in_line_comment(line_prefix):
        return True
    text = source.get_text(TextRange(CursorLocation(0, 0), position))
    return is_in_block_comment(text)


def is_in_string(line_prefix: str) -> bool:
    """Quote-balance scan over the line up to the cursor.

    The first unescaped quote opens a string; only the same quote character
    closes it, unless the character right before it is a backslash.
    """
    quote = None
    for i, char in enumerate(line_prefix):
        if char != '"' and char != "'":
            continue
        if quote is None:
            quote = char
        elif char == quote and (i == 0 or line_prefix[i - 1] != "\\"):
            quote = None
    return quote is not None


class TriggerGate:
    def __init__(
        self,
        trigger_delay: float = DEFAULT_TRIGGER_DELAY,
        context_lines: int = DEFAULT_CONTEXT_LINES,
    ):
        self.trigger_delay = trigger_delay
        self.context_lines = context_lines

    def decide(
        self,
        current: InputFingerprint,
        state: SessionState,
        *,
        source: TextSource,
        position: CursorLocation,
        now: float,
        editor: EditorContext | None = None,
        token: CancellationToken | None = None,
    ) -> GateDecision:
        """Run the checks in order and return the first conclusive one.

        Records `current` as the last input once the cache checks pass.
        Never touches the trigger timestamp; that is set by the caller
        after a backend response arrives.
        """
        denial = self._check_host(source, editor, token)
        if denial is not None:
            return denial

        if state.matches_last_input(current):
            return GateDecision.deny(
                "same input as last request", state.last_completion_batch
            )

        current_line = source.line_at(position.line)
        if state.repeats_last_completion(current_line):
            return GateDecision.deny(
                "line matches last completion", state.last_completion_batch
            )

        state.last_input_fingerprint = current

        elapsed = state.seconds_since_trigger(now)
        if elapsed is not None and elapsed < self.trigger_delay:
            return GateDecision.deny(f"triggered too soon ({elapsed:.3f}s)")

        return self._check_context(source, position, current.line_prefix)

    def _check_host(
        self,
        source: TextSource,
        editor: EditorContext | None,
        token: CancellationToken | None,
    ) -> GateDecision | None:
        if token is not None and token.is_cancellation_requested:
            return GateDecision.deny("cancelled")
        if editor is None:
            return None
        if editor.selection_count > 1:
            return GateDecision.deny("multiple selections")
        selected = editor.selected_completion
        if selected is not None:
            typed = source.get_text(selected.range)
            if not selected.text.startswith(typed):
                return GateDecision.deny("selected suggestion disagrees with typed text")
        return None

    def _check_context(
        self, source: TextSource, position: CursorLocation, line_prefix: str
    ) -> GateDecision:
        if line_prefix.strip():
            return GateDecision.allow("line prefix is not empty")

        start = max(0, position.line - self.context_lines)
        previous = (source.line_at(i).strip() for i in range(start, position.line))
        if any(previous):
            return GateDecision.allow("empty line with surrounding context")

        if is_in_comment(source, position):
            return GateDecision.deny("inside a comment")
        if is_in_string(line_prefix):
            return GateDecision.deny("inside a string")
        return GateDecision.deny("no usable context")
