"""Property-based tests for map and patch invariants using Hypothesis.

Generated documents use unique heading titles and block ids so that every
node is addressable under the default "reject" duplicate policy.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from mdpatch import (
    DocumentMap,
    Instruction,
    Operation,
    TargetType,
    apply_patch,
    build_map,
    canonical_key,
    query,
)
from mdpatch.address import split_key

PLAIN_LINES = st.sampled_from(["", "text", "more text", "  indented", "- item", "a # b"])

LINE_KINDS = st.one_of(
    st.tuples(st.just("heading"), st.integers(min_value=1, max_value=4)),
    st.just(("block", 0)),
    st.just(("text", 0)),
)


@st.composite
def documents(draw, *, trailing_newline: bool | None = None) -> str:
    kinds = draw(st.lists(LINE_KINDS, max_size=25))
    lines: list[str] = []
    for index, (kind, level) in enumerate(kinds):
        if kind == "heading":
            lines.append("#" * level + f" T{index}")
        elif kind == "block":
            lines.append(f"<!--block:b{index}-->")
        else:
            lines.append(draw(PLAIN_LINES))
    if not lines:
        return ""
    if trailing_newline is None:
        trailing_newline = draw(st.booleans())
    return "\n".join(lines) + ("\n" if trailing_newline else "")


# Replacement bodies: whole lines with no markers
BODIES = st.lists(PLAIN_LINES, max_size=4).map(lambda lines: "".join(f"{line}\n" for line in lines))


def _all_targets(document_map: DocumentMap):
    yield document_map.root
    yield from document_map.headings.values()
    yield from document_map.blocks.values()


def _lookup(document_map: DocumentMap, target_type: TargetType, address):
    if address == ():
        return document_map.root
    return document_map.table(target_type)[canonical_key(address)]


def _addresses(document_map: DocumentMap) -> list[tuple[TargetType, tuple[str, ...] | str]]:
    result: list[tuple[TargetType, tuple[str, ...] | str]] = [(TargetType.HEADING, ())]
    result.extend((TargetType.HEADING, split_key(key)) for key in document_map.headings)
    result.extend((TargetType.BLOCK, block_id) for block_id in document_map.blocks)
    return result


class TestMapInvariants:
    """Structural invariants of every DocumentMap."""

    @given(documents())
    @settings(max_examples=200)
    def test_ranges_are_ordered_and_in_bounds(self, source: str) -> None:
        document_map = build_map(source)
        for target in _all_targets(document_map):
            whole, content = target.whole, target.content
            assert 0 <= whole.start <= content.start <= content.end <= whole.end <= len(source)

    @given(documents())
    @settings(max_examples=200)
    def test_root_spans_document(self, source: str) -> None:
        root = build_map(source).root
        assert root.whole.end == root.content.end == len(source)

    @given(documents())
    @settings(max_examples=200)
    def test_ancestors_contain_descendants(self, source: str) -> None:
        document_map = build_map(source)
        paths = {split_key(key): target for key, target in document_map.headings.items()}
        for path, target in paths.items():
            for other_path, other in paths.items():
                if len(other_path) > len(path) and other_path[: len(path)] == path:
                    assert target.whole.contains(other.whole)
                    assert target.whole != other.whole

    @given(documents())
    @settings(max_examples=200)
    def test_siblings_ordered_and_disjoint(self, source: str) -> None:
        document_map = build_map(source)
        by_parent: dict[tuple[str, ...], list] = {}
        for key, target in document_map.headings.items():
            path = split_key(key)
            by_parent.setdefault(path[:-1], []).append((target.lineno, target))
        for siblings in by_parent.values():
            siblings.sort(key=lambda item: item[0])
            for (_, left), (_, right) in zip(siblings, siblings[1:]):
                assert left.whole.end <= right.whole.start

    @given(documents())
    @settings(max_examples=200)
    def test_blocks_disjoint_and_nested_in_headings(self, source: str) -> None:
        document_map = build_map(source)
        blocks = list(document_map.blocks.values())
        for i, block in enumerate(blocks):
            for other in blocks[i + 1 :]:
                assert not block.whole.overlaps(other.whole)
            for heading in document_map.headings.values():
                assert heading.whole.contains(block.whole) or not heading.whole.overlaps(
                    block.whole
                )


class TestPatchProperties:
    """Arithmetic and round-trip properties of apply_patch."""

    @given(documents(), BODIES, st.data())
    @settings(max_examples=150)
    def test_length_arithmetic(self, source: str, body: str, data: st.DataObject) -> None:
        document_map = build_map(source)
        target_type, address = data.draw(st.sampled_from(_addresses(document_map)))
        target = _lookup(document_map, target_type, address)

        for operation in (
            Operation.APPEND,
            Operation.PREPEND,
            Operation.INSERT_BEFORE,
            Operation.INSERT_AFTER,
        ):
            result = apply_patch(source, Instruction(operation, target_type, address, body))
            assert len(result) == len(source) + len(body)

        deleted = apply_patch(source, Instruction(Operation.DELETE, target_type, address, body))
        assert len(deleted) == len(source) - len(target.whole)

        replaced = apply_patch(source, Instruction(Operation.REPLACE, target_type, address, body))
        assert len(replaced) == len(source) - len(target.content) + len(body)

    @given(documents(trailing_newline=True), BODIES, st.data())
    @settings(max_examples=150)
    def test_replace_round_trip(self, source: str, body: str, data: st.DataObject) -> None:
        target_type, address = data.draw(st.sampled_from(_addresses(build_map(source))))
        result = apply_patch(source, Instruction(Operation.REPLACE, target_type, address, body))
        assert query(result, target_type, address) == body

    @given(documents(trailing_newline=True), BODIES, st.data())
    @settings(max_examples=150)
    def test_replace_idempotent(self, source: str, body: str, data: st.DataObject) -> None:
        target_type, address = data.draw(st.sampled_from(_addresses(build_map(source))))
        instruction = Instruction(Operation.REPLACE, target_type, address, body)
        once = apply_patch(source, instruction)
        assert apply_patch(once, instruction) == once

    @given(documents(), BODIES, st.data())
    @settings(max_examples=150)
    def test_bytes_outside_splice_untouched(
        self, source: str, body: str, data: st.DataObject
    ) -> None:
        document_map = build_map(source)
        target_type, address = data.draw(st.sampled_from(_addresses(document_map)))
        content = _lookup(document_map, target_type, address).content
        result = apply_patch(source, Instruction(Operation.REPLACE, target_type, address, body))
        assert result[: content.start] == source[: content.start]
        assert result[content.start + len(body) :] == source[content.end :]
