"""Block marker classifier mixin."""

from mdpatch.config import MapConfig
from mdpatch.events import EventKind, StructuralEvent
from mdpatch.scanner.modes import BLOCK_ID_CHARS


class BlockClassifierMixin:
    """Mixin providing block marker classification.

    A marker line is ``block_prefix`` + id + ``block_suffix`` with nothing
    else on the line but trailing whitespace.
    """

    _config: MapConfig

    def _make_event(
        self, kind: EventKind, name: str, line_start: int, *, level: int = 0
    ) -> StructuralEvent:
        """Create event for the current line. Implemented by Scanner."""
        raise NotImplementedError

    def _try_classify_block(self, content: str, line_start: int) -> StructuralEvent | None:
        prefix = self._config.block_prefix
        suffix = self._config.block_suffix

        if not content.startswith(prefix):
            return None

        rest = content[len(prefix) :].rstrip()
        if suffix:
            if not rest.endswith(suffix):
                return None
            block_id = rest[: -len(suffix)]
        else:
            block_id = rest

        if not block_id or any(char not in BLOCK_ID_CHARS for char in block_id):
            return None

        return self._make_event(EventKind.BLOCK, block_id, line_start)
