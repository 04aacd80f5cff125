"""Scanner operating modes and character sets."""

from __future__ import annotations

import string
from enum import Enum, auto


class ScannerMode(Enum):
    """Scanner operating modes.

    - CONTENT: Between marker lines, classifying every line
    - CODE_FENCE: Inside fenced code; only a closing fence is recognised

    """

    CONTENT = auto()
    CODE_FENCE = auto()


FENCE_CHARS: frozenset[str] = frozenset("`~")

# Characters allowed in a block id
BLOCK_ID_CHARS: frozenset[str] = frozenset(string.ascii_letters + string.digits + "-_")
