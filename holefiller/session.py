"""Per-session result cache.

One SessionState lives for as long as its provider. It remembers what the
cursor looked like on the last request, the last completion handed out and
the batch it came in, so repeated editor events can be answered without
another round trip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .completion_client import InlineCompletionItem


class InputFingerprint(NamedTuple):
    line: int
    character: int
    line_prefix: str


@dataclass
class SessionState:
    last_trigger_timestamp: float | None = None
    last_input_fingerprint: InputFingerprint | None = None
    last_completion_text: str | None = None
    last_completion_batch: list[InlineCompletionItem] | None = None

    def matches_last_input(self, fingerprint: InputFingerprint) -> bool:
        return self.last_input_fingerprint == fingerprint

    def repeats_last_completion(self, line_text: str) -> bool:
        """True when the line now reads exactly like the last completion,
        i.e. the user most likely just accepted it."""
        if not self.last_completion_text:
            return False
        return line_text.strip() == self.last_completion_text.strip()

    def seconds_since_trigger(self, now: float) -> float | None:
        if self.last_trigger_timestamp is None:
            return None
        return now - self.last_trigger_timestamp

    def record_round_trip(self, now: float) -> None:
        self.last_trigger_timestamp = now

    def record_batch(self, batch: list[InlineCompletionItem]) -> None:
        # Empty batches never replace the fallback
        if not batch:
            return
        for item in batch:
            self.last_completion_text = item.insert_text
        self.last_completion_batch = batch
