"""The fixed whitespace and spacing pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from justhtml import JustHTML
from justhtml.context import FragmentContext
from justhtml.node import Element

from .constants import THIN_SPACE_CLASS
from .transforms import (
    DropComments,
    InsertBetweenWideAndNarrow,
    NormalizeNewlines,
    RemoveInterElementWhitespace,
    Transform,
    apply_compiled_transforms,
    compile_transforms,
)

if TYPE_CHECKING:
    from justhtml.node import Node
    from justhtml.tokens import ParseError


def default_marker() -> Element:
    """``<span class="thin-space">``, styled by ``THIN_SPACE_CSS``."""
    return Element("span", {"class": THIN_SPACE_CLASS}, "html")


def parse(html: str, *, fragment: bool = False, errors: list[ParseError] | None = None) -> JustHTML:
    """Parse ``html`` as a document, or as the content of a ``<div>``.

    Nothing is sanitized: comments, unknown elements and attributes are
    kept for the passes and the serializer. Parse errors are appended to
    ``errors`` when a list is given.
    """

    context = FragmentContext("div") if fragment else None
    doc = JustHTML(html, fragment_context=context, sanitize=False, collect_errors=errors is not None)
    if errors is not None:
        errors.extend(doc.errors)
    return doc


def typeset_transforms(
    marker: Element | str | None = None,
    *,
    ascend: bool = False,
    drop_comments: bool = True,
) -> list[Transform]:
    """Comments, inter-element whitespace, newlines, then script boundaries.

    The order matters: each pass relies on the cleanup done by the ones
    before it.
    """

    if marker is None:
        marker = default_marker()
    return [
        DropComments(enabled=drop_comments),
        RemoveInterElementWhitespace(),
        NormalizeNewlines(ascend=ascend),
        InsertBetweenWideAndNarrow(marker, ascend=ascend),
    ]


def typeset(
    root: Node,
    marker: Element | str | None = None,
    *,
    ascend: bool = False,
    drop_comments: bool = True,
) -> None:
    """Run the whole pipeline over ``root`` in place."""

    compiled = compile_transforms(typeset_transforms(marker, ascend=ascend, drop_comments=drop_comments))
    apply_compiled_transforms(root, compiled)


def typeset_html(
    html: str,
    marker: Element | str | None = None,
    *,
    fragment: bool = False,
    ascend: bool = False,
    drop_comments: bool = True,
    errors: list[ParseError] | None = None,
) -> str:
    """Parse ``html``, typeset it and serialize the result."""

    doc = parse(html, fragment=fragment, errors=errors)
    typeset(doc.root, marker, ascend=ascend, drop_comments=drop_comments)
    return doc.to_html(pretty=False)


__all__ = ["default_marker", "parse", "typeset", "typeset_html", "typeset_transforms"]
