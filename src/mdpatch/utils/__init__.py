"""Utility modules for mdpatch.

Provides:
- logger: get_logger and configure_logging
"""

from mdpatch.utils.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
