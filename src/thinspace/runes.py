"""Character classification for whitespace and script-boundary decisions.

A "rune" here is a one-character string. Functions that look at a
neighboring character accept ``None`` for "there is no such character";
``None`` is never whitespace, never wide and never punctuation.
"""

from __future__ import annotations

import unicodedata

from .constants import ASCII_WHITESPACE

_WIDE_WIDTHS = frozenset({"W", "F"})


def is_ascii_whitespace(ch: str | None) -> bool:
    """Tab, LF, FF, CR and space: the HTML definition, not Unicode's."""
    return ch is not None and len(ch) == 1 and ch in ASCII_WHITESPACE


def is_wide(ch: str | None) -> bool:
    """East-Asian Wide or Fullwidth."""
    if ch is None:
        return False
    return unicodedata.east_asian_width(ch) in _WIDE_WIDTHS


def is_space(ch: str | None) -> bool:
    return ch is not None and ch.isspace()


def is_punctuation(ch: str | None) -> bool:
    if ch is None:
        return False
    return unicodedata.category(ch)[0] == "P"


def first_rune(text: str) -> str | None:
    return text[0] if text else None


def last_rune(text: str) -> str | None:
    return text[-1] if text else None


def has_ascii_whitespace_head(text: str) -> bool:
    return bool(text) and text[0] in ASCII_WHITESPACE


def has_ascii_whitespace_tail(text: str) -> bool:
    return bool(text) and text[-1] in ASCII_WHITESPACE


def has_leading_newline_run(text: str) -> bool:
    """Whether the whitespace run at the start of ``text`` contains a newline.

    Such whitespace comes from source line wrapping and can be trimmed
    entirely, unlike deliberate inline spacing.
    """

    for ch in text:
        if ch == "\n":
            return True
        if ch not in ASCII_WHITESPACE:
            return False
    return False


def has_trailing_newline_run(text: str) -> bool:
    """Mirror of :func:`has_leading_newline_run` for the end of ``text``."""

    for ch in reversed(text):
        if ch == "\n":
            return True
        if ch not in ASCII_WHITESPACE:
            return False
    return False


def should_reserve_space_between_runes(r0: str | None, r1: str | None) -> bool:
    """A space is kept between two characters only if both are narrow.

    Wide glyphs carry enough visual spacing of their own.
    """

    if r0 is None or r1 is None:
        return False
    return not is_wide(r0) and not is_wide(r1)


def should_reserve_space_between_texts(d0: str, d1: str) -> bool:
    """Apply the rune rule across the boundary between two text payloads.

    Newline-bearing whitespace at the touching edges is ignored so the
    characters that actually meet after collapsing are compared.
    """

    if not d0 and not d1:
        return False

    if has_trailing_newline_run(d0):
        d0 = d0.rstrip(ASCII_WHITESPACE)
    if has_leading_newline_run(d1):
        d1 = d1.lstrip(ASCII_WHITESPACE)

    return should_reserve_space_between_runes(last_rune(d0), first_rune(d1))


def should_have_thin_space(r0: str | None, r1: str | None) -> bool:
    """Whether a thin space belongs between two adjacent characters.

    True exactly when one side is wide and the other narrow, ignoring
    spaces and punctuation on either side.
    """

    if r0 is None or r1 is None:
        return False
    if is_space(r0) or is_space(r1):
        return False
    if is_punctuation(r0) or is_punctuation(r1):
        return False
    return is_wide(r0) != is_wide(r1)


__all__ = [
    "first_rune",
    "has_ascii_whitespace_head",
    "has_ascii_whitespace_tail",
    "has_leading_newline_run",
    "has_trailing_newline_run",
    "is_ascii_whitespace",
    "is_punctuation",
    "is_space",
    "is_wide",
    "last_rune",
    "should_have_thin_space",
    "should_reserve_space_between_runes",
    "should_reserve_space_between_texts",
]
