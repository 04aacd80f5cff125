"""Tests for heading and block line classification."""

import pytest

from mdpatch.config import MapConfig
from mdpatch.events import EventKind
from mdpatch.scanner import Scanner, scan


def _single(source: str, config: MapConfig | None = None):
    events = scan(source, config)
    assert len(events) == 1, events
    return events[0]


class TestHeadingClassification:
    """ATX heading recognition."""

    @pytest.mark.parametrize(
        ("line", "level", "title"),
        [
            ("# Title", 1, "Title"),
            ("## Two words", 2, "Two words"),
            ("###### Six", 6, "Six"),
            ("#\tTabbed", 1, "Tabbed"),
            ("#   Padded   ", 1, "Padded"),
            ("   # Indented", 1, "Indented"),
            ("## Closed ##", 2, "Closed"),
            ("# Ends with C#", 1, "Ends with C#"),
            ("#", 1, ""),
            ("### ###", 3, ""),
        ],
    )
    def test_heading_lines(self, line: str, level: int, title: str) -> None:
        event = _single(line + "\n")
        assert event.kind is EventKind.HEADING
        assert event.level == level
        assert event.name == title

    @pytest.mark.parametrize(
        "line",
        [
            "#NoSpace",
            "####### Seven",
            "    # Indented code",
            "plain text",
            "text with # inside",
            "",
        ],
    )
    def test_not_headings(self, line: str) -> None:
        assert scan(line + "\n") == []

    def test_max_heading_level_is_configurable(self) -> None:
        config = MapConfig(max_heading_level=8)
        event = _single("######## Eight\n", config)
        assert event.level == 8

        assert scan("### Three\n", MapConfig(max_heading_level=2)) == []

    def test_carriage_return_is_not_part_of_title(self) -> None:
        event = _single("# Windows\r\nbody\r\n")
        assert event.name == "Windows"
        assert event.line_end == len("# Windows\r\n")

    def test_key_separator_removed_from_title(self) -> None:
        event = _single("# A\x1fB\n")
        assert event.name == "AB"


class TestBlockClassification:
    """Block marker recognition."""

    def test_comment_marker(self) -> None:
        event = _single("<!--block:intro-->\n")
        assert event.kind is EventKind.BLOCK
        assert event.name == "intro"
        assert event.level == 0

    def test_trailing_whitespace_allowed(self) -> None:
        assert _single("<!--block:a_b-9-->  \n").name == "a_b-9"

    @pytest.mark.parametrize(
        "line",
        [
            "<!--block:-->",
            "<!--block:has space-->",
            "<!--block:x--> trailing text",
            "<!--block:x",
            "text <!--block:x-->",
            "^caret",
        ],
    )
    def test_not_blocks(self, line: str) -> None:
        assert scan(line + "\n") == []

    def test_caret_style(self) -> None:
        config = MapConfig.for_block_style("caret")
        event = _single("^note-1\n", config)
        assert event.kind is EventKind.BLOCK
        assert event.name == "note-1"
        assert scan("<!--block:x-->\n", config) == []


class TestEventOffsets:
    """Line spans and line numbers carried by events."""

    def test_offsets_and_linenos(self) -> None:
        source = "intro\n# A\nfoo\n<!--block:x-->\nbar"
        events = scan(source)
        heading, block = events

        assert heading.line_start == 6
        assert heading.line_end == 10
        assert heading.lineno == 2

        assert block.line_start == 14
        assert block.line_end == 29
        assert block.lineno == 4

    def test_last_line_without_newline(self) -> None:
        source = "text\n# Last"
        event = _single(source)
        assert event.line_start == 5
        assert event.line_end == len(source)

    def test_scanner_is_lazy_iterator(self) -> None:
        iterator = Scanner("# A\n# B\n").scan()
        assert next(iterator).name == "A"
        assert next(iterator).name == "B"
        with pytest.raises(StopIteration):
            next(iterator)

    def test_empty_source(self) -> None:
        assert scan("") == []
