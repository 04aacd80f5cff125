"""StructuralEvent and EventKind definitions for the scanner.

The scanner produces a stream of StructuralEvent objects that the map
builder consumes. Events are transient: they are not retained once the
map has been built.

Thread Safety:
StructuralEvent is frozen (immutable) and safe to share across threads.
EventKind is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class EventKind(Enum):
    """Kinds of structural lines recognised by the scanner."""

    HEADING = auto()  # # Title
    BLOCK = auto()  # <!--block:id-->


@dataclass(frozen=True, slots=True)
class StructuralEvent:
    """A marker line found by the scanner.

    Attributes:
        kind: Heading or block
        name: Heading title, or block id
        level: Heading level (number of ``#``); 0 for blocks
        line_start: Offset of the first character of the marker line
        line_end: Offset just past the line's newline (or end of source)
        lineno: Line number of the marker (1-indexed)

    """

    kind: EventKind
    name: str
    level: int
    line_start: int
    line_end: int
    lineno: int

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        name = self.name
        if len(name) > 20:
            name = name[:17] + "..."
        if self.kind is EventKind.HEADING:
            return f"StructuralEvent(H{self.level}, {name!r}, {self.lineno})"
        return f"StructuralEvent(BLOCK, {name!r}, {self.lineno})"
