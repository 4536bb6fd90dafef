"""Child access and edits over justhtml's node tree.

justhtml nodes carry a ``parent`` pointer and a ``children`` list. Sibling
steps go through ``index_in_parent``, which takes the node's position as a
hint so that walks over a wide level stay linear.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from justhtml.node import Element, Text

if TYPE_CHECKING:
    from justhtml.node import Node


def is_text(node: Node) -> bool:
    return node.name == "#text"


def is_comment(node: Node) -> bool:
    return node.name == "#comment"


def is_element(node: Node) -> bool:
    name = node.name
    return not name.startswith("#") and name != "!doctype"


def child_nodes(node: Node) -> list[Node]:
    if is_text(node):
        return []
    return getattr(node, "children", None) or []


def _template_content(node: Node) -> Node | None:
    return getattr(node, "template_content", None)


def containers(node: Node) -> list[Node]:
    """Children that hold content, then the template contents if any."""

    found = [child for child in child_nodes(node) if child_nodes(child) or _template_content(child) is not None]
    tc = _template_content(node)
    if tc is not None:
        found.append(tc)
    return found


def index_in_parent(node: Node, hint: int | None = None) -> int:
    parent = node.parent
    if parent is None:
        raise ValueError(f"{node.name} has no parent")
    siblings = parent.children
    if hint is not None and 0 <= hint < len(siblings) and siblings[hint] is node:
        return hint
    for i, child in enumerate(siblings):
        if child is node:
            return i
    raise ValueError(f"{node.name} is not listed among its parent's children")


def set_children(parent: Node, children: list[Node]) -> None:
    """Replace the child list of ``parent`` in one step.

    Nodes that were children and are not in ``children`` are detached.
    """

    kept = set(children)
    for child in parent.children or []:
        if child not in kept:
            child.parent = None
    for child in children:
        child.parent = parent
    parent.children = children


def clone_element(template: Element) -> Element:
    """Copy ``template`` and its element and text descendants.

    Every copy gets its own attribute dict.
    """

    clone = Element(template.name, dict(template.attrs or {}), template.namespace)
    stack: list[tuple[Node, Element]] = [(template, clone)]
    while stack:
        src, dst = stack.pop()
        for child in child_nodes(src):
            if is_text(child):
                dst.append_child(Text(child.data))
            elif is_element(child):
                copy = Element(child.name, dict(child.attrs or {}), child.namespace)
                dst.append_child(copy)
                stack.append((child, copy))
    return clone


__all__ = [
    "child_nodes",
    "clone_element",
    "containers",
    "index_in_parent",
    "is_comment",
    "is_element",
    "is_text",
    "set_children",
]
