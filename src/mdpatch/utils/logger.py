"""Logging helpers for mdpatch.

Library modules only ever call ``get_logger``; handlers are installed by
``configure_logging``, which the command line calls once at startup.

Example:
    >>> from mdpatch.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Mapping document")
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "mdpatch"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` under the ``mdpatch`` namespace.

    Example:
        >>> get_logger("mymodule").name
        'mdpatch.mymodule'
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool, console: Console | None = None) -> None:
    """Send log records to ``console`` (stderr by default) through rich.

    Debug records are shown only when ``verbose`` is set.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
    )
