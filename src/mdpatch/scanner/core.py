"""Single-pass line scanner for structural markers.

Implements a window-based approach: find the end of the line, classify it,
then commit position past its newline. Position only ever moves forward, so
a scan is O(n) in the document length with no backtracking.

Thread Safety:
Scanner instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from mdpatch.config import MapConfig, get_map_config
from mdpatch.events import EventKind, StructuralEvent
from mdpatch.scanner.classifiers import (
    BlockClassifierMixin,
    FenceClassifierMixin,
    HeadingClassifierMixin,
)
from mdpatch.scanner.modes import ScannerMode


class Scanner(
    HeadingClassifierMixin,
    BlockClassifierMixin,
    FenceClassifierMixin,
):
    """Line scanner emitting heading and block marker events.

    Usage:
            >>> scanner = Scanner("# A\\nfoo\\n<!--block:x-->\\n")
            >>> for event in scanner.scan():
            ...     print(event)
        StructuralEvent(H1, 'A', 1)
        StructuralEvent(BLOCK, 'x', 3)

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_config",
        "_pos",
        "_lineno",
        "_line_end",
        "_mode",
        "_fence_char",
        "_fence_count",
    )

    def __init__(self, source: str, config: MapConfig | None = None) -> None:
        """Initialize scanner with source text.

        Args:
            source: Markdown source text
            config: Marker conventions (uses the context's config if None)
        """
        self._source = source
        self._source_len = len(source)
        self._config = config if config is not None else get_map_config()
        self._pos = 0
        self._lineno = 1
        # Offset just past the current line's newline
        self._line_end = 0
        self._mode = ScannerMode.CONTENT

        # Fenced code state
        self._fence_char: str = ""
        self._fence_count: int = 0

    def scan(self) -> Iterator[StructuralEvent]:
        """Scan source into a stream of structural events.

        Yields:
            StructuralEvent objects in document order

        Complexity: O(n) where n = len(source)
        """
        while self._pos < self._source_len:
            event = self._scan_line()
            if event is not None:
                yield event
            self._commit()

    def _scan_line(self) -> StructuralEvent | None:
        line_start = self._pos
        newline = self._source.find("\n", line_start)
        if newline == -1:
            line = self._source[line_start:]
            self._line_end = self._source_len
        else:
            line = self._source[line_start:newline]
            self._line_end = newline + 1

        if line.endswith("\r"):
            line = line[:-1]

        if self._mode == ScannerMode.CODE_FENCE:
            if self._is_closing_fence(line):
                self._mode = ScannerMode.CONTENT
                self._fence_char = ""
                self._fence_count = 0
            return None

        indent, content_start = self._calc_indent(line)
        if indent >= 4:
            # Indented code
            return None

        content = line[content_start:]
        if not content:
            return None

        if self._try_open_fence(content):
            return None

        return self._try_classify_heading(content, line_start) or self._try_classify_block(
            content, line_start
        )

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position.

        Spaces count as 1, tabs expand to next multiple of 4.

        Returns:
            (indent_spaces, content_start_index)
        """
        indent = 0
        pos = 0
        line_len = len(line)
        while pos < line_len:
            char = line[pos]
            if char == " ":
                indent += 1
                pos += 1
            elif char == "\t":
                indent += 4 - (indent % 4)
                pos += 1
            else:
                break
        return indent, pos

    def _commit(self) -> None:
        """Advance past the current line. Always makes progress."""
        self._pos = self._line_end
        self._lineno += 1

    def _make_event(
        self, kind: EventKind, name: str, line_start: int, *, level: int = 0
    ) -> StructuralEvent:
        return StructuralEvent(
            kind=kind,
            name=name,
            level=level,
            line_start=line_start,
            line_end=self._line_end,
            lineno=self._lineno,
        )


def scan(source: str, config: MapConfig | None = None) -> list[StructuralEvent]:
    """Scan ``source`` and return all structural events."""
    return list(Scanner(source, config).scan())
