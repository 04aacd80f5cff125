"""Patch engine: resolve an instruction and splice the document.

Every edit is a single substring operation
``source[:start] + content + source[end:]`` where ``[start, end)`` is
derived from the resolved Target:

============== ===============================================
operation      spliced range
============== ===============================================
replace        content (whole marker line too with
               ``replace_heading_line``)
append         empty range at content.end
prepend        empty range at content.start
insert-before  empty range at whole.start
insert-after   empty range at whole.end
delete         whole (instruction content is ignored)
============== ===============================================

Applying several instructions re-scans the document before each one,
since any splice shifts the offsets of everything after it.

Thread Safety:
    All functions are pure. Strings are immutable, so a failed instruction
    can never leave a partially edited document behind.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from mdpatch.address import HeadingPath
from mdpatch.config import MapConfig, get_map_config
from mdpatch.errors import InvalidInstructionError, MdpatchError
from mdpatch.location import Span, Target
from mdpatch.mapping import TargetType, build_map
from mdpatch.resolver import resolve
from mdpatch.utils.logger import get_logger

logger = get_logger(__name__)


class Operation(Enum):
    """Edit operations."""

    REPLACE = "replace"
    APPEND = "append"
    PREPEND = "prepend"
    INSERT_BEFORE = "insert-before"
    INSERT_AFTER = "insert-after"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class Instruction:
    """One edit against one addressed node.

    Attributes:
        operation: What to do
        target_type: Which kind of node ``address`` names
        address: Heading path (tuple of titles) or block id
        content: Text to insert or substitute
        replace_heading_line: For ``replace`` on a heading, also replace the
            heading's own marker line; ``content`` must then supply it

    """

    operation: Operation
    target_type: TargetType
    address: HeadingPath | str
    content: str = ""
    replace_heading_line: bool = False

    def validate(self) -> None:
        """Reject structurally invalid instructions.

        Raises:
            InvalidInstructionError: Unknown operation or target type, address
                of the wrong shape, or ``replace_heading_line`` outside
                ``replace`` on ``heading``
        """
        if not isinstance(self.operation, Operation):
            raise InvalidInstructionError(f"unknown operation {self.operation!r}")
        if not isinstance(self.target_type, TargetType):
            raise InvalidInstructionError(f"unknown target type {self.target_type!r}")
        if not isinstance(self.content, str):
            raise InvalidInstructionError("content must be a string")

        match self.target_type:
            case TargetType.HEADING:
                if not isinstance(self.address, tuple) or not all(
                    isinstance(part, str) for part in self.address
                ):
                    raise InvalidInstructionError(
                        f"heading address must be a tuple of titles, got {self.address!r}"
                    )
            case TargetType.BLOCK:
                if not isinstance(self.address, str) or not self.address:
                    raise InvalidInstructionError(
                        f"block address must be a non-empty id, got {self.address!r}"
                    )

        if self.replace_heading_line and not (
            self.operation is Operation.REPLACE and self.target_type is TargetType.HEADING
        ):
            raise InvalidInstructionError(
                "replace_heading_line is only valid for 'replace' operations "
                "on 'heading' targets"
            )


@dataclass(slots=True)
class PatchResult:
    """Outcome of applying a sequence of instructions.

    Attributes:
        document: Text after every successful instruction
        applied: Number of instructions applied
        errors: ``(index, error)`` for each skipped instruction

    """

    document: str
    applied: int = 0
    errors: list[tuple[int, MdpatchError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def splice(source: str, start: int, end: int, content: str) -> str:
    """Replace ``source[start:end]`` with ``content``."""
    if not 0 <= start <= end <= len(source):
        raise ValueError(f"splice range [{start}, {end}) outside source of length {len(source)}")
    return source[:start] + content + source[end:]


def plan(target: Target, instruction: Instruction) -> Span:
    """Return the ``[start, end)`` range the instruction splices.

    Insertions return an empty range at the insertion point.
    """
    whole = target.whole
    content = target.content
    match instruction.operation:
        case Operation.REPLACE:
            if instruction.replace_heading_line:
                return Span(whole.start, content.end)
            return content
        case Operation.APPEND:
            return Span(content.end, content.end)
        case Operation.PREPEND:
            return Span(content.start, content.start)
        case Operation.INSERT_BEFORE:
            return Span(whole.start, whole.start)
        case Operation.INSERT_AFTER:
            return Span(whole.end, whole.end)
        case Operation.DELETE:
            return whole
    raise InvalidInstructionError(f"unknown operation {instruction.operation!r}")


def apply_patch(source: str, instruction: Instruction, config: MapConfig | None = None) -> str:
    """Apply one instruction and return the new document.

    Args:
        source: Current document text
        instruction: Edit to apply
        config: Marker conventions (uses the context's config if None)

    Returns:
        New document text; ``source`` itself is never modified

    Raises:
        InvalidInstructionError: Before any scanning, for a malformed instruction
        DuplicateAddressError: The document has ambiguous addresses
        UnresolvedAddressError: No node has the instruction's address
    """
    instruction.validate()
    document_map = build_map(source, config)
    target = resolve(document_map, instruction.target_type, instruction.address)
    span = plan(target, instruction)
    inserted = "" if instruction.operation is Operation.DELETE else instruction.content

    logger.debug(
        "%s %s %r at %s",
        instruction.operation.value,
        instruction.target_type.value,
        instruction.address,
        span,
    )
    return splice(source, span.start, span.end, inserted)


def apply_patches(
    source: str,
    instructions: Iterable[Instruction],
    config: MapConfig | None = None,
    *,
    continue_on_error: bool = False,
) -> PatchResult:
    """Apply instructions strictly in order, re-mapping before each one.

    Args:
        source: Initial document text
        instructions: Edits to apply in sequence
        config: Marker conventions (uses the context's config if None)
        continue_on_error: Record failures and carry on with the last good
            document instead of raising

    Returns:
        PatchResult with the final document

    Raises:
        MdpatchError: The first failure, unless ``continue_on_error`` is set
    """
    config = config if config is not None else get_map_config()
    result = PatchResult(document=source)
    for index, instruction in enumerate(instructions):
        try:
            result.document = apply_patch(result.document, instruction, config)
        except MdpatchError as exc:
            if not continue_on_error:
                raise
            logger.warning("Skipping instruction %d: %s", index, exc)
            result.errors.append((index, exc))
        else:
            result.applied += 1
    return result
