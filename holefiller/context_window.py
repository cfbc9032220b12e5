"""Context window extraction around the cursor."""

from __future__ import annotations

from dataclasses import dataclass

from .text_source import CursorLocation, TextSource

DEFAULT_CONTEXT_LINES = 3


@dataclass(frozen=True)
class ContextWindow:
    start_line: int
    cursor: CursorLocation
    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def preceding_lines(self) -> tuple[str, ...]:
        return self.lines[:-1]

    @property
    def line_prefix(self) -> str:
        return self.lines[-1]


def clamp_position(source: TextSource, position: CursorLocation) -> CursorLocation:
    last_line = max(source.line_count - 1, 0)
    line = min(position.line, last_line)
    text = source.line_at(line) if source.line_count else ""
    if line != position.line:
        return CursorLocation(line, len(text))
    return CursorLocation(line, min(position.character, len(text)))


def extract(
    source: TextSource,
    position: CursorLocation,
    lines_before: int = DEFAULT_CONTEXT_LINES,
) -> ContextWindow:
    """Return up to `lines_before` full lines above the cursor plus the
    current line cut at the cursor.

    Positions past the end of the document (or of the line) are clamped.
    """
    cursor = clamp_position(source, position)
    start_line = max(0, cursor.line - lines_before)

    lines = [source.line_at(i) for i in range(start_line, cursor.line)]
    current = source.line_at(cursor.line) if source.line_count else ""
    lines.append(current[: cursor.character])
    return ContextWindow(start_line=start_line, cursor=cursor, lines=tuple(lines))


def extract_line_suffix(source: TextSource, position: CursorLocation) -> str:
    """Text on the cursor line after the cursor."""
    cursor = clamp_position(source, position)
    if not source.line_count:
        return ""
    return source.line_at(cursor.line)[cursor.character:]
