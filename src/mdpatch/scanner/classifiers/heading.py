"""ATX heading classifier mixin."""

from mdpatch.address import clean_title
from mdpatch.config import MapConfig
from mdpatch.events import EventKind, StructuralEvent


class HeadingClassifierMixin:
    """Mixin providing ATX heading classification."""

    _config: MapConfig

    def _make_event(
        self, kind: EventKind, name: str, line_start: int, *, level: int = 0
    ) -> StructuralEvent:
        """Create event for the current line. Implemented by Scanner."""
        raise NotImplementedError

    def _try_classify_heading(self, content: str, line_start: int) -> StructuralEvent | None:
        """Try to classify content as an ATX heading.

        ATX headings start with 1..max_heading_level # characters followed by
        space/tab/end. Trailing # sequences are removed if preceded by space.

        Args:
            content: Line content with leading indent and newline stripped
            line_start: Position in source where line starts

        Returns:
            Event if valid heading, None otherwise.
        """
        level = 0
        pos = 0
        while pos < len(content) and content[pos] == "#":
            level += 1
            pos += 1

        if level == 0 or level > self._config.max_heading_level:
            return None

        # Must be followed by space, tab, or end
        if pos < len(content) and content[pos] not in " \t":
            return None

        title = content[pos:].strip()

        # Remove closing # sequence (if preceded by space)
        if title.endswith("#"):
            trailing_start = len(title)
            while trailing_start > 0 and title[trailing_start - 1] == "#":
                trailing_start -= 1
            if trailing_start == 0:
                title = ""
            elif title[trailing_start - 1] in " \t":
                title = title[: trailing_start - 1].rstrip()

        return self._make_event(EventKind.HEADING, clean_title(title), line_start, level=level)
