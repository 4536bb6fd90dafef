"""Find the text that visually touches a node.

Phrasing (inline) elements are transparent to these searches; any other
element is opaque and ends the search. By default a search stays among
the node's siblings. ``ascend=True`` also climbs out through ancestors
to continue from the nearest one that has a sibling in that direction.

``index`` is an optional hint: the position of ``node`` in its parent's
children.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import PHRASING_ELEMENTS
from .node import child_nodes, index_in_parent, is_element, is_text

if TYPE_CHECKING:
    from justhtml.node import Node, Text


def _is_opaque(node: Node) -> bool:
    return is_element(node) and node.name not in PHRASING_ELEMENTS


def _next_leaf(node: Node, index: int | None, ascend: bool) -> tuple[Node | None, int | None]:
    cur, i = node, index
    while True:
        parent = cur.parent
        if parent is None:
            return None, None
        i = index_in_parent(cur, i) + 1
        if i < len(parent.children):
            cur = parent.children[i]
            break
        if not ascend:
            return None, None
        cur, i = parent, None

    # Descend to the first visible leaf.
    while True:
        if _is_opaque(cur):
            return None, None
        children = child_nodes(cur)
        if not children:
            return cur, i
        cur, i = children[0], 0


def _prev_leaf(node: Node, index: int | None, ascend: bool) -> tuple[Node | None, int | None]:
    cur, i = node, index
    while True:
        parent = cur.parent
        if parent is None:
            return None, None
        i = index_in_parent(cur, i) - 1
        if i >= 0:
            cur = parent.children[i]
            break
        if not ascend:
            return None, None
        cur, i = parent, None

    # Descend to the last visible leaf.
    while True:
        if _is_opaque(cur):
            return None, None
        children = child_nodes(cur)
        if not children:
            return cur, i
        cur, i = children[-1], len(children) - 1


def next_visible_node(node: Node, *, ascend: bool = False, index: int | None = None) -> Node | None:
    return _next_leaf(node, index, ascend)[0]


def prev_visible_node(node: Node, *, ascend: bool = False, index: int | None = None) -> Node | None:
    return _prev_leaf(node, index, ascend)[0]


def next_visible_text_node(node: Node, *, ascend: bool = False, index: int | None = None) -> Text | None:
    cur: Node | None = node
    while True:
        cur, index = _next_leaf(cur, index, ascend)
        if cur is None:
            return None
        if is_text(cur) and cur.data:
            return cur


def prev_visible_text_node(node: Node, *, ascend: bool = False, index: int | None = None) -> Text | None:
    cur: Node | None = node
    while True:
        cur, index = _prev_leaf(cur, index, ascend)
        if cur is None:
            return None
        if is_text(cur) and cur.data:
            return cur


def first_rune_after(node: Node, *, ascend: bool = False) -> str | None:
    text = next_visible_text_node(node, ascend=ascend)
    if text is None:
        return None
    return text.data[0]


def last_rune_before(node: Node, *, ascend: bool = False) -> str | None:
    text = prev_visible_text_node(node, ascend=ascend)
    if text is None:
        return None
    return text.data[-1]


__all__ = [
    "first_rune_after",
    "last_rune_before",
    "next_visible_node",
    "next_visible_text_node",
    "prev_visible_node",
    "prev_visible_text_node",
]
