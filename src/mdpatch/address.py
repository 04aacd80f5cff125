"""Address canonicalization and display formatting.

A heading is addressed by its path of titles from the document root; a
block by its literal id. Map tables are keyed by a canonical string that
joins path components with ``KEY_SEPARATOR``, an ASCII control character
that the scanner never accepts inside a title. The user-facing delimiter
(``::`` by default) is only used for presentation and argument parsing.

Example:
    >>> canonical_key(("Intro", "Usage"))
    'Intro\\x1fUsage'
    >>> parse_heading_path("Intro::Usage")
    ('Intro', 'Usage')
"""

from __future__ import annotations

from collections.abc import Sequence

# ASCII unit separator
KEY_SEPARATOR = "\x1f"

DEFAULT_DELIMITER = "::"

HeadingPath = tuple[str, ...]
Address = HeadingPath | str


def canonical_key(address: str | Sequence[str]) -> str:
    """Return the map key for a heading path or block id."""
    if isinstance(address, str):
        return address
    return KEY_SEPARATOR.join(address)


def split_key(key: str) -> HeadingPath:
    """Inverse of canonical_key for heading paths."""
    return tuple(key.split(KEY_SEPARATOR))


def parse_heading_path(text: str, delimiter: str = DEFAULT_DELIMITER) -> HeadingPath:
    """Split a display string into a heading path.

    The empty string denotes the root path ``()``.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    if text == "":
        return ()
    return tuple(text.split(delimiter))


def format_heading_path(path: Sequence[str], delimiter: str = DEFAULT_DELIMITER) -> str:
    return delimiter.join(path)


def clean_title(title: str) -> str:
    """Strip characters that may not appear in a canonical key component."""
    if KEY_SEPARATOR in title:
        title = title.replace(KEY_SEPARATOR, "")
    return title
