"""Human-readable dump of a DocumentMap.

Read-only: rendering never touches the map or the document.
"""

from __future__ import annotations

import re

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from mdpatch.address import DEFAULT_DELIMITER, format_heading_path
from mdpatch.mapping import DocumentMap, TargetType

TYPE_STYLE: dict[TargetType, str] = {
    TargetType.HEADING: "cyan",
    TargetType.BLOCK: "magenta",
}

PREVIEW_WIDTH = 60


def _preview(text: str, width: int = PREVIEW_WIDTH) -> str:
    line = " ".join(text.split())
    if len(line) > width:
        return line[: width - 1] + "…"
    return line


def render_map(
    source: str,
    document_map: DocumentMap,
    pattern: re.Pattern[str] | None = None,
    *,
    delimiter: str = DEFAULT_DELIMITER,
) -> Table:
    """Build a table listing every target in document order.

    Args:
        source: The text ``document_map`` was built from
        document_map: Map to display
        pattern: Only list entries whose display address matches (``search``)
        delimiter: Separator used to display heading paths
    """
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("TYPE", no_wrap=True)
    table.add_column("TARGET", no_wrap=True, max_width=50, style="bold")
    table.add_column("LINE", no_wrap=True, justify="right")
    table.add_column("WHOLE", no_wrap=True)
    table.add_column("CONTENT", no_wrap=True)
    table.add_column("PREVIEW", max_width=PREVIEW_WIDTH)

    for target_type, address, target in document_map.entries():
        if isinstance(address, str):
            display = address
        else:
            display = format_heading_path(address, delimiter)
        if pattern is not None and not pattern.search(display):
            continue

        label = display if address != () else "<root>"
        table.add_row(
            Text(target_type.value, style=TYPE_STYLE[target_type]),
            Text(label),
            str(target.lineno) if target.lineno else "",
            str(target.whole),
            str(target.content),
            Text(_preview(target.text(source))),
        )
    return table


def print_map(
    source: str,
    document_map: DocumentMap,
    pattern: re.Pattern[str] | None = None,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    console: Console | None = None,
) -> None:
    """Print the map of ``source`` to ``console`` (stdout by default)."""
    console = console or Console()
    table = render_map(source, document_map, pattern, delimiter=delimiter)
    console.print(table)
    console.print(f"  [dim]{table.row_count} targets[/dim]")
