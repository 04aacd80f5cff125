"""
mdpatch: edit Markdown documents by heading path or block id.

Usage:
  mdpatch <command> [options]

Commands:
  print-map  Show the headings and blocks that can be targeted.
  patch      Apply one operation given on the command line.
  apply      Apply a JSON list of instructions.
  query      Print the content of one heading or block.
"""

from __future__ import annotations

import argparse
import dataclasses
import re
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from mdpatch import __version__
from mdpatch.address import DEFAULT_DELIMITER, parse_heading_path
from mdpatch.config import BLOCK_STYLES, DUPLICATE_POLICIES, MapConfig
from mdpatch.debug import print_map
from mdpatch.errors import MdpatchError
from mdpatch.mapping import TargetType, build_map
from mdpatch.patch import Instruction, Operation, apply_patch, apply_patches
from mdpatch.resolver import query
from mdpatch.serialization import instructions_from_json, map_to_json
from mdpatch.utils.logger import configure_logging

err_console = Console(stderr=True)


def _read_text(path: str) -> str:
    """Read a file without newline translation; ``-`` reads stdin."""
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_text(path: str, text: str) -> None:
    """Write a file without newline translation; ``-`` writes stdout."""
    if path == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def _address(target_type: TargetType, target: str, delimiter: str) -> tuple[str, ...] | str:
    if target_type is TargetType.HEADING:
        return parse_heading_path(target, delimiter)
    return target


def _config(args: argparse.Namespace) -> MapConfig:
    return MapConfig.for_block_style(args.block_style, duplicate_policy=args.on_duplicate)


# =========================================================================
# Commands
# =========================================================================


def run_print_map(args: argparse.Namespace) -> int:
    document = _read_text(args.path)
    document_map = build_map(document, _config(args))

    if args.json:
        _write_text("-", map_to_json(document_map, document, indent=2) + "\n")
        return 0

    pattern = re.compile(args.regex) if args.regex else None
    print_map(document, document_map, pattern, delimiter=args.delimiter)
    return 0


def run_patch(args: argparse.Namespace) -> int:
    target_type = TargetType(args.target_type)
    instruction = Instruction(
        operation=Operation(args.operation),
        target_type=target_type,
        address=_address(target_type, args.target, args.delimiter),
        replace_heading_line=args.replace_heading,
    )
    # Validate before reading content from stdin
    instruction.validate()

    instruction = dataclasses.replace(instruction, content=_read_text(args.input or "-"))
    document = _read_text(args.document_path)
    patched = apply_patch(document, instruction, _config(args))
    _write_text(args.output or args.document_path, patched)
    return 0


def run_apply(args: argparse.Namespace) -> int:
    instructions = instructions_from_json(_read_text(args.patch))
    document = _read_text(args.path)

    result = apply_patches(
        document,
        instructions,
        _config(args),
        continue_on_error=args.continue_on_error,
    )
    for index, error in result.errors:
        err_console.print(f"[yellow]skipped instruction {index}:[/yellow] {escape(str(error))}")

    _write_text(args.output or args.path, result.document)
    return 0 if result.ok else 1


def run_query(args: argparse.Namespace) -> int:
    document = _read_text(args.document_path)
    target_type = TargetType(args.target_type)
    value = query(
        document,
        target_type,
        _address(target_type, args.target, args.delimiter),
        _config(args),
    )
    _write_text(args.output or "-", value)
    return 0


# =========================================================================
# Parser
# =========================================================================


def _delimiter(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("delimiter must not be empty")
    return value


def _add_delimiter(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-d",
        "--delimiter",
        default=DEFAULT_DELIMITER,
        type=_delimiter,
        help="Heading path delimiter to use in place of '::'.",
    )


def _add_target_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "target_type",
        metavar="TARGET_TYPE",
        choices=[t.value for t in TargetType],
        help="Target type ('heading' or 'block').",
    )
    p.add_argument(
        "target",
        metavar="TARGET",
        help="Target ('::'-delimited for headings); see `mdpatch print-map`.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdpatch",
        description="Edit Markdown documents by heading path or block id.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"mdpatch {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging on stderr."
    )
    parser.add_argument(
        "--block-style",
        choices=sorted(BLOCK_STYLES),
        default="comment",
        help="Block marker convention: '<!--block:id-->' (comment) or '^id' (caret).",
    )
    parser.add_argument(
        "--on-duplicate",
        choices=DUPLICATE_POLICIES,
        default="reject",
        help="What to do when two headings or blocks share an address.",
    )

    subparsers = parser.add_subparsers(title="commands", metavar="<command>", dest="command")
    subparsers.required = True

    p = subparsers.add_parser("print-map", help="Show identified patchable targets.")
    p.add_argument("path", help="Document to map.")
    p.add_argument(
        "regex",
        nargs="?",
        help="Limit displayed targets to those matching this regular expression.",
    )
    p.add_argument("--json", action="store_true", help="Print the map as JSON.")
    _add_delimiter(p)
    p.set_defaults(func=run_print_map)

    p = subparsers.add_parser("patch", help="Apply a single operation.")
    p.add_argument(
        "operation",
        metavar="OPERATION",
        choices=[op.value for op in Operation],
        help="Operation to perform ('replace', 'append', ...).",
    )
    _add_target_arguments(p)
    p.add_argument("document_path", metavar="DOCUMENT", help="Document to patch.")
    p.add_argument("-i", "--input", help="Path to content to insert; reads stdin by default.")
    p.add_argument(
        "-o",
        "--output",
        help="Path to write output to; use '-' for stdout. Defaults to patching in place.",
    )
    p.add_argument(
        "--replace-heading",
        action="store_true",
        help="Replace the heading line as well as its content.",
    )
    _add_delimiter(p)
    p.set_defaults(func=run_patch)

    p = subparsers.add_parser("apply", help="Apply a JSON patch file.")
    p.add_argument("path", help="Document to patch.")
    p.add_argument("patch", help="JSON patch file; use '-' for stdin.")
    p.add_argument(
        "-o",
        "--output",
        help="Path to write output to; use '-' for stdout. Defaults to patching in place.",
    )
    p.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Skip failing instructions instead of aborting.",
    )
    p.set_defaults(func=run_apply)

    p = subparsers.add_parser("query", help="Print the content of a target.")
    _add_target_arguments(p)
    p.add_argument("document_path", metavar="DOCUMENT", help="Document to query.")
    p.add_argument("-o", "--output", help="Path to write output to; defaults to stdout.")
    _add_delimiter(p)
    p.set_defaults(func=run_query)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, err_console)

    try:
        return args.func(args)
    except MdpatchError as exc:
        err_console.print(f"[red]error:[/red] {escape(str(exc))}")
    except UnicodeDecodeError as exc:
        err_console.print(f"[red]error:[/red] input is not valid UTF-8: {escape(str(exc))}")
    except re.error as exc:
        err_console.print(f"[red]error:[/red] invalid regular expression: {escape(str(exc))}")
    except OSError as exc:
        err_console.print(f"[red]error:[/red] {escape(str(exc))}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
