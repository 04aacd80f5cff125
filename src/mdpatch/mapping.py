"""Build a DocumentMap from the scanner's event stream.

The map builder keeps an explicit stack of open headings. A heading of
level L closes every open heading whose level is >= L, ending it at the new
heading's line start, and then opens under the nearest remaining (shallower)
heading. Blocks are flat: each ends at the next marker line of any kind.
Everything still open at end of document ends at ``len(source)``.

Example:
    >>> document_map = build_map("# A\\nfoo\\n## B\\nbar\\n# C\\nbaz\\n")
    >>> document_map.headings[canonical_key(("A", "B"))].content
    Span(start=13, end=17)

Thread Safety:
    ``build_map`` is a pure function. DocumentMap is frozen and its tables
    are read-only views.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from mdpatch.address import HeadingPath, canonical_key, split_key
from mdpatch.config import MapConfig, get_map_config
from mdpatch.errors import DuplicateAddressError
from mdpatch.events import EventKind, StructuralEvent
from mdpatch.location import Span, Target
from mdpatch.scanner import Scanner
from mdpatch.utils.logger import get_logger

logger = get_logger(__name__)


class TargetType(Enum):
    """Kinds of addressable nodes."""

    HEADING = "heading"
    BLOCK = "block"


@dataclass(frozen=True, slots=True)
class DocumentMap:
    """Resolvable targets for one document snapshot.

    Offsets are only valid for the exact source the map was built from;
    build a new map after every edit.

    Attributes:
        headings: Canonical heading key -> Target
        blocks: Block id -> Target
        root: Synthetic container spanning the whole document, addressed
            by the empty heading path
        length: Length of the source the map describes

    """

    headings: Mapping[str, Target]
    blocks: Mapping[str, Target]
    root: Target
    length: int

    def table(self, target_type: TargetType) -> Mapping[str, Target]:
        match target_type:
            case TargetType.HEADING:
                return self.headings
            case TargetType.BLOCK:
                return self.blocks

    def entries(self) -> Iterator[tuple[TargetType, HeadingPath | str, Target]]:
        """Yield ``(target_type, address, target)`` in document order.

        The root container comes first, as heading path ``()``.
        """
        yield TargetType.HEADING, (), self.root
        rows: list[tuple[int, int, TargetType, HeadingPath | str, Target]] = []
        for key, target in self.headings.items():
            rows.append((target.whole.start, 0, TargetType.HEADING, split_key(key), target))
        for block_id, target in self.blocks.items():
            rows.append((target.whole.start, 1, TargetType.BLOCK, block_id, target))
        rows.sort(key=lambda row: (row[0], row[1]))
        for _, _, target_type, address, target in rows:
            yield target_type, address, target

    @property
    def count(self) -> int:
        """Number of addressable headings and blocks, not counting the root."""
        return len(self.headings) + len(self.blocks)


@dataclass(slots=True)
class _OpenHeading:
    level: int
    path: HeadingPath
    key: str
    whole_start: int
    content_start: int
    lineno: int


class MapBuilder:
    """Consumes StructuralEvents and accumulates Targets.

    Single-use: create one per source string.
    """

    __slots__ = (
        "_length",
        "_config",
        "_stack",
        "_headings",
        "_blocks",
        "_seen",
        "_open_block",
    )

    def __init__(self, length: int, config: MapConfig) -> None:
        self._length = length
        self._config = config
        self._stack: list[_OpenHeading] = []
        self._headings: dict[str, Target] = {}
        self._blocks: dict[str, Target] = {}
        # (target_type, key) -> line of the node currently owning the key
        self._seen: dict[tuple[TargetType, str], int] = {}
        # (block id, whole start, content start, lineno)
        self._open_block: tuple[str, int, int, int] | None = None

    def feed(self, event: StructuralEvent) -> None:
        self._close_block(event.line_start)
        if event.kind is EventKind.HEADING:
            self._open_heading(event)
        else:
            self._claim(TargetType.BLOCK, event.name, event.name, event.lineno)
            self._open_block = (event.name, event.line_start, event.line_end, event.lineno)

    def finish(self) -> DocumentMap:
        self._close_block(self._length)
        while self._stack:
            self._close_heading(self._stack.pop(), self._length)

        logger.debug(
            "Mapped %d headings and %d blocks over %d characters",
            len(self._headings),
            len(self._blocks),
            self._length,
        )
        whole = Span(0, self._length)
        return DocumentMap(
            headings=MappingProxyType(self._headings),
            blocks=MappingProxyType(self._blocks),
            root=Target(whole=whole, content=whole, lineno=0),
            length=self._length,
        )

    def _open_heading(self, event: StructuralEvent) -> None:
        while self._stack and self._stack[-1].level >= event.level:
            self._close_heading(self._stack.pop(), event.line_start)

        parent_path = self._stack[-1].path if self._stack else ()
        path = (*parent_path, event.name)
        key = canonical_key(path)
        self._claim(TargetType.HEADING, key, path, event.lineno)
        self._stack.append(
            _OpenHeading(
                level=event.level,
                path=path,
                key=key,
                whole_start=event.line_start,
                content_start=event.line_end,
                lineno=event.lineno,
            )
        )

    def _close_heading(self, heading: _OpenHeading, end: int) -> None:
        self._headings[heading.key] = Target(
            whole=Span(heading.whole_start, end),
            content=Span(heading.content_start, end),
            lineno=heading.lineno,
        )

    def _close_block(self, end: int) -> None:
        if self._open_block is None:
            return
        block_id, whole_start, content_start, lineno = self._open_block
        self._open_block = None
        self._blocks[block_id] = Target(
            whole=Span(whole_start, end),
            content=Span(content_start, end),
            lineno=lineno,
        )

    def _claim(
        self, target_type: TargetType, key: str, address: HeadingPath | str, lineno: int
    ) -> None:
        """Register a key, applying the duplicate policy."""
        previous = self._seen.get((target_type, key))
        if previous is not None:
            if self._config.duplicate_policy == "reject":
                raise DuplicateAddressError(target_type.value, address, previous, lineno)
            logger.warning(
                "Duplicate %s %r on lines %d and %d; keeping line %d",
                target_type.value,
                address,
                previous,
                lineno,
                lineno,
            )
        self._seen[(target_type, key)] = lineno


def build_map(source: str, config: MapConfig | None = None) -> DocumentMap:
    """Scan ``source`` and build its DocumentMap.

    Args:
        source: Markdown source text
        config: Marker conventions and duplicate policy (uses the context's
            config if None)

    Returns:
        DocumentMap for this exact source

    Raises:
        DuplicateAddressError: Two nodes share an address and the policy
            is "reject"
    """
    config = config if config is not None else get_map_config()
    builder = MapBuilder(len(source), config)
    for event in Scanner(source, config).scan():
        builder.feed(event)
    return builder.finish()
