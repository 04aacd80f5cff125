"""
mdpatch: structural editing for Markdown documents.

Address a region of a document by heading path or block id instead of by
character offsets, and edit it with a splice that leaves every byte outside
the region untouched.

Quick Start:
    >>> from mdpatch import Instruction, Operation, TargetType, apply_patch, query
    >>> doc = "# A\\nfoo\\n## B\\nbar\\n# C\\nbaz\\n"
    >>> query(doc, TargetType.HEADING, ("A", "B"))
    'bar\\n'
    >>> apply_patch(doc, Instruction(Operation.APPEND, TargetType.HEADING, ("A",), "extra\\n"))
    '# A\\nfoo\\n## B\\nbar\\nextra\\n# C\\nbaz\\n'

Block markers:
    A line of the form ``<!--block:ID-->`` opens a block that runs to the
    next heading or block marker. Use ``MapConfig(block_prefix="^",
    block_suffix="")`` for ``^ID`` lines instead.

Installation:
    pip install mdpatch
"""

__version__ = "0.3.0"

from mdpatch.address import (
    DEFAULT_DELIMITER,
    KEY_SEPARATOR,
    canonical_key,
    format_heading_path,
    parse_heading_path,
)
from mdpatch.config import (
    MapConfig,
    get_map_config,
    map_config_context,
    reset_map_config,
    set_map_config,
)
from mdpatch.errors import (
    DuplicateAddressError,
    InvalidInstructionError,
    MalformedPayloadError,
    MdpatchError,
    UnresolvedAddressError,
)
from mdpatch.events import EventKind, StructuralEvent
from mdpatch.location import Span, Target
from mdpatch.mapping import DocumentMap, TargetType, build_map
from mdpatch.patch import (
    Instruction,
    Operation,
    PatchResult,
    apply_patch,
    apply_patches,
    splice,
)
from mdpatch.resolver import query, resolve
from mdpatch.scanner import Scanner, scan
from mdpatch.serialization import (
    instructions_from_json,
    instructions_to_json,
    map_to_dict,
    map_to_json,
)

__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "apply_patch",
    "apply_patches",
    "build_map",
    "query",
    "resolve",
    "splice",
    # Types
    "DocumentMap",
    "Instruction",
    "Operation",
    "PatchResult",
    "Span",
    "Target",
    "TargetType",
    # Scanner
    "EventKind",
    "Scanner",
    "StructuralEvent",
    "scan",
    # Addresses
    "DEFAULT_DELIMITER",
    "KEY_SEPARATOR",
    "canonical_key",
    "format_heading_path",
    "parse_heading_path",
    # Serialization
    "instructions_from_json",
    "instructions_to_json",
    "map_to_dict",
    "map_to_json",
    # Configuration (ContextVar-based)
    "MapConfig",
    "get_map_config",
    "set_map_config",
    "reset_map_config",
    "map_config_context",
    # Errors
    "MdpatchError",
    "DuplicateAddressError",
    "InvalidInstructionError",
    "MalformedPayloadError",
    "UnresolvedAddressError",
]
