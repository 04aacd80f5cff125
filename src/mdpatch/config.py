"""ContextVar-based map configuration for mdpatch.

Provides context-local configuration using Python's ContextVars (PEP 567).
The markup conventions recognised by the scanner, and the policy for
duplicate addresses, are read from the active config unless a config is
passed explicitly.

Usage:
    from mdpatch import apply_patch
    from mdpatch.config import MapConfig, map_config_context

    with map_config_context(MapConfig(block_prefix="^", block_suffix="")):
        new_text = apply_patch(text, instruction)

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Literal

DuplicatePolicy = Literal["reject", "last_wins"]

DUPLICATE_POLICIES: tuple[str, ...] = ("reject", "last_wins")

# Named block marker conventions: style -> (prefix, suffix)
BLOCK_STYLES: dict[str, tuple[str, str]] = {
    "comment": ("<!--block:", "-->"),
    "caret": ("^", ""),
}


@dataclass(frozen=True, slots=True)
class MapConfig:
    """Immutable map configuration.

    Attributes:
        max_heading_level: Longest run of ``#`` recognised as a heading marker
        block_prefix: Text that opens a block marker line
        block_suffix: Text that closes a block marker line (may be empty)
        duplicate_policy: "reject" raises DuplicateAddressError,
            "last_wins" keeps the later node

    """

    max_heading_level: int = 6
    block_prefix: str = "<!--block:"
    block_suffix: str = "-->"
    duplicate_policy: DuplicatePolicy = "reject"

    def __post_init__(self) -> None:
        if self.max_heading_level < 1:
            raise ValueError(
                f"max_heading_level must be positive, got {self.max_heading_level}"
            )
        if not self.block_prefix:
            raise ValueError("block_prefix must not be empty")
        if self.duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicate_policy must be one of {DUPLICATE_POLICIES}, "
                f"got {self.duplicate_policy!r}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> MapConfig:
        """Create MapConfig from dictionary.

        Only includes keys that are valid MapConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = MapConfig.from_dict({
            ...     "duplicate_policy": "last_wins",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.duplicate_policy
            'last_wins'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def for_block_style(cls, style: str, **overrides: Any) -> MapConfig:
        """Create MapConfig using one of the named BLOCK_STYLES."""
        try:
            prefix, suffix = BLOCK_STYLES[style]
        except KeyError:
            raise ValueError(f"unknown block style {style!r}") from None
        return cls(block_prefix=prefix, block_suffix=suffix, **overrides)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: MapConfig = MapConfig()

_map_config: ContextVar[MapConfig] = ContextVar(
    "map_config",
    default=_DEFAULT_CONFIG,
)


def get_map_config() -> MapConfig:
    """Get the active map configuration for this context."""
    return _map_config.get()


def set_map_config(config: MapConfig) -> None:
    """Set map configuration for the current context."""
    _map_config.set(config)


def reset_map_config() -> None:
    """Reset to the default configuration."""
    _map_config.set(_DEFAULT_CONFIG)


@contextmanager
def map_config_context(config: MapConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with map_config_context(MapConfig(duplicate_policy="last_wins")):
        ...     document_map = build_map(text)

    """
    previous = _map_config.get()
    _map_config.set(config)
    try:
        yield
    finally:
        _map_config.set(previous)


__all__ = [
    "BLOCK_STYLES",
    "DUPLICATE_POLICIES",
    "DuplicatePolicy",
    "MapConfig",
    "get_map_config",
    "map_config_context",
    "reset_map_config",
    "set_map_config",
]
