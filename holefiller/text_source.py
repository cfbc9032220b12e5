"""Host editor interface.

The provider never talks to an editor directly. Hosts hand it a TextSource
(read-only lines plus range reads), the cursor position, an optional
EditorContext describing selections, and a CancellationToken.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, order=True)
class CursorLocation:
    line: int
    character: int

    def __post_init__(self):
        if self.line < 0 or self.character < 0:
            raise ValueError(
                f"CursorLocation must be non-negative, got {self.line}:{self.character}"
            )


@dataclass(frozen=True)
class TextRange:
    start: CursorLocation
    end: CursorLocation

    @classmethod
    def empty_at(cls, position: CursorLocation) -> TextRange:
        return cls(position, position)


class TextSource(Protocol):
    @property
    def line_count(self) -> int: ...

    def line_at(self, line: int) -> str: ...

    def get_text(self, text_range: TextRange) -> str: ...


class StringTextSource:
    """TextSource over an in-memory string, split on newlines."""

    def __init__(self, text: str):
        self._lines = text.split("\n")

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> str:
        if line < 0 or line >= len(self._lines):
            raise IndexError(f"Line {line} out of range (0-{len(self._lines) - 1})")
        return self._lines[line]

    def get_text(self, text_range: TextRange) -> str:
        start, end = text_range.start, text_range.end
        if end < start:
            start, end = end, start
        last = len(self._lines) - 1
        if start.line > last:
            return ""
        end_line = min(end.line, last)
        end_char = end.character if end.line <= last else len(self._lines[last])

        if start.line == end_line:
            return self._lines[start.line][start.character:end_char]
        parts = [self._lines[start.line][start.character:]]
        parts.extend(self._lines[start.line + 1:end_line])
        parts.append(self._lines[end_line][:end_char])
        return "\n".join(parts)


class CancellationToken:
    """Set by the host when the request it triggered is no longer wanted."""

    def __init__(self):
        self._cancelled = False

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


@dataclass(frozen=True)
class SelectedCompletionInfo:
    """An item currently highlighted in the editor's suggestion list."""

    text: str
    range: TextRange


@dataclass(frozen=True)
class EditorContext:
    selection_count: int = 1
    selected_completion: SelectedCompletionInfo | None = None
