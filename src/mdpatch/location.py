"""Byte-range value types for mapped document nodes.

Span and Target are frozen (immutable) and safe to share. All offsets are
absolute, 0-indexed positions in the source string, half-open ``[start, end)``.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range ``[start, end)`` of source offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"

    def contains(self, other: Span) -> bool:
        """True if ``other`` lies entirely within this span."""
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: Span) -> bool:
        """True if the two spans share at least one offset."""
        return self.start < other.end and other.start < self.end

    def slice(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class Target:
    """Ranges describing one mapped node.

    Attributes:
        whole: Marker line plus everything nested beneath it
        content: Same range without the marker line (the body)
        lineno: Line of the marker (1-indexed; 0 for the synthetic root)

    """

    whole: Span
    content: Span
    lineno: int = 0

    def __post_init__(self) -> None:
        if not (
            self.whole.start <= self.content.start
            and self.content.end <= self.whole.end
        ):
            raise ValueError(f"content {self.content} is not inside whole {self.whole}")

    @property
    def marker(self) -> Span:
        """The marker line: ``[whole.start, content.start)``."""
        return Span(self.whole.start, self.content.start)

    def text(self, source: str) -> str:
        """Body text of this node in ``source``."""
        return self.content.slice(source)
