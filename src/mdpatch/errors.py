"""Exception classes for mdpatch.

Provides standardized exceptions for error handling throughout mdpatch.
Every failure of the editing core is raised before a new document is
produced, so the caller's original text stays authoritative.
"""

from __future__ import annotations

from collections.abc import Sequence


def _format_address(address: str | Sequence[str]) -> str:
    if isinstance(address, str):
        return repr(address)
    if not address:
        return "<root>"
    return " > ".join(repr(part) for part in address)


class MdpatchError(Exception):
    """Base exception for all mdpatch errors.

    Subclass this for specific error categories.
    """

    pass


class UnresolvedAddressError(MdpatchError, LookupError):
    """Requested heading path or block id is not present in the document map."""

    def __init__(self, target_type: str, address: str | Sequence[str]) -> None:
        """Initialize with the address that failed to resolve.

        Args:
            target_type: "heading" or "block"
            address: Heading path (sequence of titles) or block id
        """
        self.target_type = target_type
        self.address = address if isinstance(address, str) else tuple(address)
        super().__init__(f"{target_type} not found: {_format_address(address)}")


class InvalidInstructionError(MdpatchError, ValueError):
    """Instruction is structurally nonsensical.

    Raised before any document is scanned, e.g. for an unknown operation or
    target type, or a modifier used outside its valid combination.
    """

    pass


class DuplicateAddressError(MdpatchError):
    """Two nodes in one document resolve to the same canonical key."""

    def __init__(
        self,
        target_type: str,
        address: str | Sequence[str],
        first_lineno: int,
        second_lineno: int,
    ) -> None:
        """Initialize duplicate address error.

        Args:
            target_type: "heading" or "block"
            address: The address both nodes share
            first_lineno: Line of the earlier node (1-indexed)
            second_lineno: Line of the later node (1-indexed)
        """
        self.target_type = target_type
        self.address = address if isinstance(address, str) else tuple(address)
        self.first_lineno = first_lineno
        self.second_lineno = second_lineno
        super().__init__(
            f"duplicate {target_type} {_format_address(address)} "
            f"(lines {first_lineno} and {second_lineno})"
        )


class MalformedPayloadError(MdpatchError):
    """External instruction payload cannot be parsed into instructions."""

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize payload error.

        Args:
            message: Description of the problem
            index: Position of the offending instruction in the payload (optional)
        """
        self.message = message
        self.index = index
        location = f"instruction {index}: " if index is not None else ""
        super().__init__(f"{location}{message}")
