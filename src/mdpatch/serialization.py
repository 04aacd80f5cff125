"""JSON instruction payloads and DocumentMap export.

Instruction payloads are a single JSON object or an array of objects:

    [
      {"operation": "append", "targetType": "heading",
       "target": ["Intro", "Usage"], "content": "More text\\n"},
      {"operation": "delete", "targetType": "block", "target": "old-note"},
      {"operation": "replace", "targetType": "heading", "target": ["Intro"],
       "content": "# Introduction\\nNew body\\n", "replaceHeading": true}
    ]

Map output is deterministic (sorted keys).

Thread Safety:
    All functions are pure.

"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from mdpatch.address import DEFAULT_DELIMITER, parse_heading_path
from mdpatch.errors import InvalidInstructionError, MalformedPayloadError
from mdpatch.location import Target
from mdpatch.mapping import DocumentMap, TargetType
from mdpatch.patch import Instruction, Operation

_INSTRUCTION_KEYS = frozenset({"operation", "targetType", "target", "content", "replaceHeading"})


def instruction_from_dict(data: Any, index: int | None = None) -> Instruction:
    """Build an Instruction from one payload object.

    Raises:
        MalformedPayloadError: Missing keys or values of the wrong JSON type
        InvalidInstructionError: Unknown operation or target type names, or
            an invalid combination
    """
    if not isinstance(data, dict):
        raise MalformedPayloadError(
            f"expected an object, got {type(data).__name__}", index
        )

    unknown = sorted(set(data) - _INSTRUCTION_KEYS)
    if unknown:
        raise MalformedPayloadError(f"unknown keys: {', '.join(unknown)}", index)

    for key in ("operation", "targetType", "target"):
        if key not in data:
            raise MalformedPayloadError(f"missing required key {key!r}", index)

    operation_name = data["operation"]
    target_type_name = data["targetType"]
    if not isinstance(operation_name, str) or not isinstance(target_type_name, str):
        raise MalformedPayloadError("'operation' and 'targetType' must be strings", index)

    try:
        operation = Operation(operation_name)
    except ValueError:
        raise InvalidInstructionError(f"unknown operation {operation_name!r}") from None
    try:
        target_type = TargetType(target_type_name)
    except ValueError:
        raise InvalidInstructionError(f"unknown target type {target_type_name!r}") from None

    content = data.get("content", "")
    if not isinstance(content, str):
        raise MalformedPayloadError("'content' must be a string", index)

    replace_heading = data.get("replaceHeading", False)
    if not isinstance(replace_heading, bool):
        raise MalformedPayloadError("'replaceHeading' must be a boolean", index)

    instruction = Instruction(
        operation=operation,
        target_type=target_type,
        address=_address_from_json(target_type, data["target"], index),
        content=content,
        replace_heading_line=replace_heading,
    )
    instruction.validate()
    return instruction


def _address_from_json(target_type: TargetType, raw: Any, index: int | None) -> tuple[str, ...] | str:
    match target_type:
        case TargetType.HEADING:
            if isinstance(raw, str):
                return parse_heading_path(raw, DEFAULT_DELIMITER)
            if isinstance(raw, list) and all(isinstance(part, str) for part in raw):
                return tuple(raw)
            raise MalformedPayloadError("heading 'target' must be a list of strings", index)
        case TargetType.BLOCK:
            if isinstance(raw, str):
                return raw
            raise MalformedPayloadError("block 'target' must be a string", index)


def instructions_from_json(data: str) -> list[Instruction]:
    """Parse a JSON payload into instructions.

    A single object is treated as a one-element list.

    Raises:
        MalformedPayloadError: Payload is not JSON or not instruction-shaped
        InvalidInstructionError: An instruction is structurally invalid
    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as exc:
        raise MalformedPayloadError(f"could not parse patch as JSON: {exc}") from exc

    if not isinstance(raw, list):
        return [instruction_from_dict(raw)]
    return [instruction_from_dict(item, index) for index, item in enumerate(raw)]


def instruction_to_dict(instruction: Instruction) -> dict[str, Any]:
    address = instruction.address
    result: dict[str, Any] = {
        "operation": instruction.operation.value,
        "targetType": instruction.target_type.value,
        "target": list(address) if isinstance(address, tuple) else address,
        "content": instruction.content,
    }
    if instruction.replace_heading_line:
        result["replaceHeading"] = True
    return result


def instructions_to_json(instructions: Iterable[Instruction], *, indent: int | None = None) -> str:
    return json.dumps(
        [instruction_to_dict(instruction) for instruction in instructions],
        sort_keys=True,
        indent=indent,
    )


def _target_to_dict(target: Target, source: str | None) -> dict[str, Any]:
    result: dict[str, Any] = {
        "lineno": target.lineno,
        "whole": {"start": target.whole.start, "end": target.whole.end},
        "content": {"start": target.content.start, "end": target.content.end},
    }
    if source is not None:
        result["text"] = target.text(source)
    return result


def map_to_dict(document_map: DocumentMap, source: str | None = None) -> dict[str, Any]:
    """Convert a DocumentMap to a JSON-compatible dict.

    Headings are listed in document order, each with its ``path`` as a list
    of titles. The root container is listed separately. When ``source`` is given each entry also
    carries its body text.
    """
    return {
        "length": document_map.length,
        "root": _target_to_dict(document_map.root, source),
        "heading": [
            {"path": list(address), **_target_to_dict(target, source)}
            for target_type, address, target in document_map.entries()
            if target_type is TargetType.HEADING and address
        ],
        "block": {
            block_id: _target_to_dict(target, source)
            for block_id, target in document_map.blocks.items()
        },
    }


def map_to_json(
    document_map: DocumentMap,
    source: str | None = None,
    *,
    indent: int | None = None,
) -> str:
    """Serialize a DocumentMap to a JSON string (sorted keys)."""
    return json.dumps(
        map_to_dict(document_map, source),
        sort_keys=True,
        indent=indent,
    )
