"""Resolve typed addresses against a DocumentMap.

Heading paths are matched by exact canonical key: no partial or fuzzy
matching and no case folding. The empty heading path addresses the
synthetic root container.
"""

from __future__ import annotations

from collections.abc import Sequence

from mdpatch.address import canonical_key
from mdpatch.config import MapConfig
from mdpatch.errors import InvalidInstructionError, UnresolvedAddressError
from mdpatch.location import Target
from mdpatch.mapping import DocumentMap, TargetType, build_map


def resolve(
    document_map: DocumentMap,
    target_type: TargetType,
    address: str | Sequence[str],
) -> Target:
    """Look up the Target for ``address``.

    Args:
        document_map: Map of the current document snapshot
        target_type: Which table to search
        address: Heading path (sequence of titles) or block id

    Returns:
        The matching Target

    Raises:
        InvalidInstructionError: A heading address given as a plain string,
            or a block address that is not one
        UnresolvedAddressError: No node has this address
    """
    match target_type:
        case TargetType.HEADING:
            if isinstance(address, str):
                raise InvalidInstructionError(
                    f"heading address must be a sequence of titles, got {address!r}"
                )
            if not address:
                return document_map.root
        case TargetType.BLOCK:
            if not isinstance(address, str):
                raise InvalidInstructionError(f"block address must be an id, got {address!r}")

    target = document_map.table(target_type).get(canonical_key(address))
    if target is None:
        raise UnresolvedAddressError(target_type.value, address)
    return target


def query(
    source: str,
    target_type: TargetType,
    address: str | Sequence[str],
    config: MapConfig | None = None,
) -> str:
    """Return the body text of the node at ``address`` in ``source``."""
    target = resolve(build_map(source, config), target_type, address)
    return target.text(source)
