"""Whitespace and script-boundary passes over a justhtml node tree.

Each pass mutates the tree in place and is meant to run in this order:

1. `remove_comments`
2. `remove_inter_element_whitespace`
3. `process_newlines`
4. `insert_between_wide_and_narrow`

The passes walk the tree with explicit stacks, so deeply nested documents
do not hit the recursion limit. Elements in `skip_tags` (metadata elements
and `pre` by default) are never entered by the whitespace and spacing
passes.

The same passes are available as transform specs (see
`thinspace.transforms_spec`) that can be compiled once and applied to many
trees.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, cast

from justhtml.node import Element, Text

from .constants import ASCII_WHITESPACE, DEFAULT_SKIP_TAGS, PHRASING_ELEMENTS
from .navigation import next_visible_text_node, prev_visible_text_node
from .node import child_nodes, clone_element, containers, is_comment, is_element, is_text, set_children
from .runes import (
    has_ascii_whitespace_head,
    has_ascii_whitespace_tail,
    should_have_thin_space,
    should_reserve_space_between_runes,
    should_reserve_space_between_texts,
)
from .transforms_spec import (
    DropComments,
    EditDocument,
    InsertBetweenWideAndNarrow,
    NormalizeNewlines,
    RemoveInterElementWhitespace,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Collection
    from typing import Any, Protocol

    from justhtml.node import Node

    class NodeCallback(Protocol):
        def __call__(self, node: Node) -> None: ...

    class ReportCallback(Protocol):
        def __call__(self, msg: str, *, node: Any | None = None) -> None: ...


_NEWLINE_AND_SPACE_RE = re.compile(r"[\t\n\f\r ]*\n[\t\n\f\r ]*")
_SPACE_RE = re.compile(r"[\t\n\f\r ]+")


# -----------------
# Shared helpers
# -----------------


def _is_skipped(node: Node, skip_tags: Collection[str]) -> bool:
    return is_element(node) and node.name in skip_tags


def _is_phrasing_element(node: Node | None) -> bool:
    return node is not None and is_element(node) and node.name in PHRASING_ELEMENTS


def _insert_transient_slots(parent: Node) -> None:
    # An empty text node between every two adjacent elements gives the
    # passes a uniform place to put spacing decisions at element boundaries.
    children = parent.children
    out: list[Node] = []
    for i, child in enumerate(children):
        if i and is_element(child) and is_element(children[i - 1]):
            out.append(Text(""))
        out.append(child)
    if len(out) != len(children):
        set_children(parent, out)


def _remove_empty_text_children(parent: Node) -> None:
    children = parent.children
    kept = [child for child in children if not (is_text(child) and not child.data)]
    if len(kept) != len(children):
        set_children(parent, kept)


def _walk_levels(root: Node, skip_tags: Collection[str], visit: Callable[[Node], None]) -> None:
    """Call ``visit`` on every container, parents before children.

    Transient slots are inserted before a container is visited and empty
    text children are pruned once its whole subtree has been processed.
    """

    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, finished = stack.pop()
        if finished:
            _remove_empty_text_children(node)
            continue
        if _is_skipped(node, skip_tags):
            continue

        if child_nodes(node):
            _insert_transient_slots(node)
            visit(node)
            stack.append((node, True))
        stack.extend((child, False) for child in reversed(containers(node)))


# -----------------
# Passes
# -----------------


def remove_comments(
    root: Node,
    *,
    callback: NodeCallback | None = None,
    report: ReportCallback | None = None,
) -> None:
    """Remove every comment, merging the text nodes it separated."""

    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        children = child_nodes(node)
        out: list[Node] = []
        after_comment = False
        for child in children:
            if is_comment(child):
                if callback is not None:
                    callback(child)
                if report is not None:
                    report("Dropped comment", node=child)
                after_comment = True
                continue
            if after_comment and is_text(child) and out and is_text(out[-1]):
                out[-1].data += child.data
            else:
                out.append(child)
            after_comment = False
        if len(out) != len(children):
            set_children(node, out)
        stack.extend(reversed(containers(node)))


def remove_inter_element_whitespace(
    root: Node,
    *,
    skip_tags: Collection[str] = DEFAULT_SKIP_TAGS,
    callback: NodeCallback | None = None,
    report: ReportCallback | None = None,
) -> None:
    """Collapse whitespace-only text to one space or drop it.

    The space survives only as the sole child of its parent or between two
    phrasing elements, where it is rendered.
    """

    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if _is_skipped(node, skip_tags):
            continue

        children = child_nodes(node)
        out: list[Node] = []
        for i, child in enumerate(children):
            if not is_text(child) or child.data.strip(ASCII_WHITESPACE):
                out.append(child)
                continue

            # The previous sibling is the last one kept so far.
            prev = out[-1] if out else None
            nxt = children[i + 1] if i + 1 < len(children) else None
            changed = child.data != " "
            child.data = " "
            if (prev is None and nxt is None) or (_is_phrasing_element(prev) and _is_phrasing_element(nxt)):
                out.append(child)
                if changed:
                    if callback is not None:
                        callback(child)
                    if report is not None:
                        report("Collapsed inter-element whitespace", node=child)
                continue

            if callback is not None:
                callback(child)
            if report is not None:
                report("Removed inter-element whitespace", node=child)

        if len(out) != len(children):
            set_children(node, out)
        stack.extend(reversed(containers(node)))


def _normalized_text(text: Text, index: int, *, ascend: bool) -> str:
    data = text.data
    prev = prev_visible_text_node(text, ascend=ascend, index=index)
    nxt = next_visible_text_node(text, ascend=ascend, index=index)

    out = ""
    if data and (data.strip(ASCII_WHITESPACE) or "\n" not in data):
        if prev is not None and (has_ascii_whitespace_tail(prev.data) or has_ascii_whitespace_head(data)):
            if should_reserve_space_between_texts(prev.data, data):
                out += " "
        for piece in _NEWLINE_AND_SPACE_RE.split(data):
            if out and piece and should_reserve_space_between_runes(out[-1], piece[0]):
                out += " "
            out += piece
        if nxt is not None and (has_ascii_whitespace_tail(data) or has_ascii_whitespace_head(nxt.data)):
            if should_reserve_space_between_texts(data, nxt.data):
                out += " "
    elif prev is not None and nxt is not None:
        # Empty slot or a wrapped line break between two texts.
        if has_ascii_whitespace_tail(prev.data) or has_ascii_whitespace_head(nxt.data) or data:
            if should_reserve_space_between_texts(prev.data, nxt.data):
                out = " "

    return _SPACE_RE.sub(" ", out)


def process_newlines(
    root: Node,
    *,
    skip_tags: Collection[str] = DEFAULT_SKIP_TAGS,
    ascend: bool = False,
    callback: NodeCallback | None = None,
    report: ReportCallback | None = None,
) -> None:
    """Collapse whitespace runs that contain a line break.

    Such a run becomes one space when the characters it separates are both
    narrow, and nothing otherwise. Runs at the edges of a text node are
    decided against the neighboring visible text, even inside another
    inline element.
    """

    def visit(node: Node) -> None:
        # Decide every text at this level from the original content before
        # rewriting any of them.
        replacements = [
            (child, _normalized_text(child, i, ascend=ascend))
            for i, child in enumerate(node.children)
            if is_text(child)
        ]
        for text, data in replacements:
            if data == text.data:
                continue
            text.data = data
            if callback is not None:
                callback(text)
            if report is not None:
                report("Normalized whitespace in text node", node=text)

    _walk_levels(root, skip_tags, visit)


def _split_at_script_boundaries(data: str) -> list[str]:
    tokens: list[str] = []
    start = 0
    for i in range(1, len(data)):
        if should_have_thin_space(data[i - 1], data[i]):
            tokens.append(data[start:i])
            start = i
    tokens.append(data[start:])
    return tokens


def insert_between_wide_and_narrow(
    root: Node,
    marker: Element,
    *,
    skip_tags: Collection[str] = DEFAULT_SKIP_TAGS,
    ascend: bool = False,
    callback: NodeCallback | None = None,
    report: ReportCallback | None = None,
) -> None:
    """Insert a copy of ``marker`` at every wide/narrow text transition.

    Transitions are found inside text nodes (which are split there) and
    between a text node and the visible text next to it, so a gap with an
    inline element in it (``foo<br>あ``) gets a marker on each side.
    ``callback`` receives each inserted copy.

    With ``ascend=True`` the same gap is reachable from more than one
    nesting level and is marked only once.
    """

    if not isinstance(marker, Element) or not is_element(marker):
        raise TypeError(f"marker must be an Element, got {type(marker).__name__}")

    # Text nodes that already have a marker in front of them.
    spaced: set[Node] = set()

    def wants_marker(before: str, after: Text) -> bool:
        if not should_have_thin_space(before[-1], after.data[0]):
            return False
        if ascend:
            if after in spaced:
                return False
            spaced.add(after)
        return True

    def new_marker() -> Element:
        clone = clone_element(marker)
        if callback is not None:
            callback(clone)
        if report is not None:
            report(f"Inserted <{clone.name}> between wide and narrow text", node=clone)
        return clone

    def visit(node: Node) -> None:
        children = node.children
        out: list[Node] = []
        # Splits are applied after the whole level has been decided, so
        # lookups from later siblings still see the original text.
        heads: list[tuple[Text, str]] = []
        for i, child in enumerate(children):
            if not is_text(child):
                out.append(child)
                continue

            before = prev_visible_text_node(child, ascend=ascend, index=i)
            after = next_visible_text_node(child, ascend=ascend, index=i)

            if not child.data:
                if before is not None and after is not None and wants_marker(before.data, after):
                    out.append(new_marker())
                out.append(child)
                continue

            if before is not None and wants_marker(before.data, child):
                out.append(new_marker())
            tokens = _split_at_script_boundaries(child.data)
            out.append(child)
            for token in tokens[1:]:
                out.append(new_marker())
                out.append(Text(token))
            if len(tokens) > 1:
                heads.append((child, tokens[0]))
            if after is not None and wants_marker(tokens[-1], after):
                out.append(new_marker())

        for text, data in heads:
            text.data = data
        if len(out) != len(children):
            set_children(node, out)

    _walk_levels(root, skip_tags, visit)


# -----------------
# Compilation
# -----------------


Transform = DropComments | RemoveInterElementWhitespace | NormalizeNewlines | InsertBetweenWideAndNarrow | EditDocument

_TRANSFORM_CLASSES: tuple[type[object], ...] = (
    DropComments,
    RemoveInterElementWhitespace,
    NormalizeNewlines,
    InsertBetweenWideAndNarrow,
    EditDocument,
)


@dataclass(frozen=True, slots=True)
class _CompiledDropCommentsTransform:
    kind: Literal["drop_comments"]
    callback: NodeCallback | None
    report: ReportCallback | None


@dataclass(frozen=True, slots=True)
class _CompiledWhitespaceTransform:
    kind: Literal["remove_inter_element_whitespace", "normalize_newlines"]
    skip_tags: frozenset[str]
    ascend: bool
    callback: NodeCallback | None
    report: ReportCallback | None


@dataclass(frozen=True, slots=True)
class _CompiledInsertMarkerTransform:
    kind: Literal["insert_marker"]
    marker: Element
    skip_tags: frozenset[str]
    ascend: bool
    callback: NodeCallback | None
    report: ReportCallback | None


@dataclass(frozen=True, slots=True)
class _CompiledEditDocumentTransform:
    kind: Literal["edit_document"]
    callback: NodeCallback


CompiledTransform = (
    _CompiledDropCommentsTransform
    | _CompiledWhitespaceTransform
    | _CompiledInsertMarkerTransform
    | _CompiledEditDocumentTransform
)


def compile_transforms(transforms: list[Transform] | tuple[Transform, ...]) -> list[CompiledTransform]:
    if not transforms:
        return []

    compiled: list[CompiledTransform] = []
    for t in transforms:
        if not isinstance(t, _TRANSFORM_CLASSES):
            raise TypeError(f"Unsupported transform: {type(t).__name__}")
        if not t.enabled:
            continue
        if isinstance(t, DropComments):
            compiled.append(_CompiledDropCommentsTransform(kind="drop_comments", callback=t.callback, report=t.report))
            continue
        if isinstance(t, RemoveInterElementWhitespace):
            compiled.append(
                _CompiledWhitespaceTransform(
                    kind="remove_inter_element_whitespace",
                    skip_tags=t.skip_tags,
                    ascend=False,
                    callback=t.callback,
                    report=t.report,
                )
            )
            continue
        if isinstance(t, NormalizeNewlines):
            compiled.append(
                _CompiledWhitespaceTransform(
                    kind="normalize_newlines",
                    skip_tags=t.skip_tags,
                    ascend=t.ascend,
                    callback=t.callback,
                    report=t.report,
                )
            )
            continue
        if isinstance(t, InsertBetweenWideAndNarrow):
            compiled.append(
                _CompiledInsertMarkerTransform(
                    kind="insert_marker",
                    marker=t.marker,
                    skip_tags=t.skip_tags,
                    ascend=t.ascend,
                    callback=t.callback,
                    report=t.report,
                )
            )
            continue
        t = cast("EditDocument", t)
        compiled.append(_CompiledEditDocumentTransform(kind="edit_document", callback=t.func))

    return compiled


# -----------------
# Application
# -----------------


def apply_compiled_transforms(root: Node, compiled: list[CompiledTransform]) -> None:
    """Run compiled transforms over ``root`` strictly in order."""

    for t in compiled:
        k = t.kind
        if k == "drop_comments":
            t = cast("_CompiledDropCommentsTransform", t)
            remove_comments(root, callback=t.callback, report=t.report)
        elif k == "remove_inter_element_whitespace":
            t = cast("_CompiledWhitespaceTransform", t)
            remove_inter_element_whitespace(root, skip_tags=t.skip_tags, callback=t.callback, report=t.report)
        elif k == "normalize_newlines":
            t = cast("_CompiledWhitespaceTransform", t)
            process_newlines(root, skip_tags=t.skip_tags, ascend=t.ascend, callback=t.callback, report=t.report)
        elif k == "insert_marker":
            t = cast("_CompiledInsertMarkerTransform", t)
            insert_between_wide_and_narrow(
                root,
                t.marker,
                skip_tags=t.skip_tags,
                ascend=t.ascend,
                callback=t.callback,
                report=t.report,
            )
        elif k == "edit_document":
            t = cast("_CompiledEditDocumentTransform", t)
            t.callback(root)
        else:
            raise TypeError(f"Unsupported compiled transform: {type(t).__name__}")


def apply_transforms(root: Node, transforms: list[Transform] | tuple[Transform, ...]) -> None:
    apply_compiled_transforms(root, compile_transforms(transforms))


__all__ = [
    "CompiledTransform",
    "DropComments",
    "EditDocument",
    "InsertBetweenWideAndNarrow",
    "NormalizeNewlines",
    "RemoveInterElementWhitespace",
    "Transform",
    "apply_compiled_transforms",
    "apply_transforms",
    "compile_transforms",
    "insert_between_wide_and_narrow",
    "process_newlines",
    "remove_comments",
    "remove_inter_element_whitespace",
]
