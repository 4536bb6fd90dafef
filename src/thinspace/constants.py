"""Element-name vocabularies shared by the passes."""

from __future__ import annotations

# https://infra.spec.whatwg.org/#ascii-whitespace
ASCII_WHITESPACE = "\t\n\f\r "

# Elements whose content is not rendered as flowed text.
METADATA_ELEMENTS = frozenset(
    {
        "base",
        "link",
        "meta",
        "noscript",
        "script",
        "style",
        "template",
        "title",
    }
)

WHITESPACE_PRESERVING_ELEMENTS = frozenset({"pre"})

# Parsed as plain text: an element inserted here would not survive a reparse.
TEXT_ONLY_ELEMENTS = frozenset(
    {
        "iframe",
        "noembed",
        "noframes",
        "noscript",
        "plaintext",
        "script",
        "style",
        "textarea",
        "title",
        "xmp",
    }
)

# Whitespace and spacing passes never enter these.
DEFAULT_SKIP_TAGS = METADATA_ELEMENTS | TEXT_ONLY_ELEMENTS | WHITESPACE_PRESERVING_ELEMENTS

# https://html.spec.whatwg.org/multipage/dom.html#phrasing-content
PHRASING_ELEMENTS = frozenset(
    {
        "a",
        "abbr",
        "area",
        "audio",
        "b",
        "bdi",
        "bdo",
        "br",
        "button",
        "canvas",
        "cite",
        "code",
        "data",
        "datalist",
        "del",
        "dfn",
        "em",
        "embed",
        "i",
        "iframe",
        "img",
        "input",
        "ins",
        "kbd",
        "label",
        "link",
        "map",
        "mark",
        "math",
        "meta",
        "meter",
        "noscript",
        "object",
        "output",
        "picture",
        "progress",
        "q",
        "ruby",
        "s",
        "samp",
        "script",
        "select",
        "slot",
        "small",
        "span",
        "strong",
        "sub",
        "sup",
        "svg",
        "template",
        "textarea",
        "time",
        "u",
        "var",
        "video",
        "wbr",
    }
)

THIN_SPACE_CLASS = "thin-space"

# U+2006 SIX-PER-EM SPACE rendered after every marker.
THIN_SPACE_CSS = ".thin-space:after{content:\"\\2006\"}"
