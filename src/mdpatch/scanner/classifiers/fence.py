"""Fenced code classifier mixin.

Marker-like lines inside fenced code are code, not structure, so the
scanner switches to CODE_FENCE mode until the matching closing fence.
"""

from mdpatch.scanner.modes import FENCE_CHARS, ScannerMode


class FenceClassifierMixin:
    """Mixin providing fenced code open/close detection."""

    # These will be set by the Scanner class
    _fence_char: str
    _fence_count: int
    _mode: ScannerMode

    def _try_open_fence(self, content: str) -> bool:
        """Enter CODE_FENCE mode if content opens a fenced code block.

        Fenced code blocks start with 3+ backticks or tildes.
        Backtick fences cannot have backticks in the info string.

        Args:
            content: Line content with leading indent stripped

        Returns:
            True if a fence was opened.
        """
        if not content or content[0] not in FENCE_CHARS:
            return False

        fence_char = content[0]
        count = 0
        while count < len(content) and content[count] == fence_char:
            count += 1

        if count < 3:
            return False

        if fence_char == "`" and "`" in content[count:]:
            return False

        self._fence_char = fence_char
        self._fence_count = count
        self._mode = ScannerMode.CODE_FENCE
        return True

    def _is_closing_fence(self, line: str) -> bool:
        """Check if line is a closing fence for the current code block.

        Closing fences may be indented 0-3 spaces, must use the opening
        character at least as many times, and may be followed only by
        whitespace.
        """
        indent = 0
        while indent < len(line) and line[indent] == " ":
            indent += 1

        if indent >= 4:
            return False

        content = line[indent:]
        count = 0
        while count < len(content) and content[count] == self._fence_char:
            count += 1

        if count < self._fence_count:
            return False

        return content[count:].strip() == ""
