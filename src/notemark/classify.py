"""Per-line classification.

Each line is classified on its own, never by looking at its neighbours.
Folding uses the classification to decide which lines belong to the same
block; the line-join pass uses ``starts_block`` to decide where a visible
break would land in front of block-level content.
"""

from __future__ import annotations

import re
from enum import Enum, auto

from notemark.protect import PLACEHOLDER_MARK, is_placeholder_line


class LineKind(Enum):
    """Shape of a single source line.

    - BLANK: Empty or whitespace only
    - CODE: A protected code fragment placeholder
    - QUOTE: Starts with ``>`` (or its escaped form ``&gt;``)
    - UNORDERED_ITEM: ``-``, ``*`` or ``+`` followed by a space
    - ORDERED_ITEM: Digits, a period and a space
    - HEADING: ``#`` to ``###`` followed by a space
    - RULE: ``---`` or ``***`` alone on the line
    - TEXT: Anything else

    """

    BLANK = auto()
    CODE = auto()
    QUOTE = auto()
    UNORDERED_ITEM = auto()
    ORDERED_ITEM = auto()
    HEADING = auto()
    RULE = auto()
    TEXT = auto()


# Quote marker, literal or already entity-escaped, then one optional space
QUOTE_MARKER_RE = re.compile(r"^(?:>|&gt;)(?: |$)")
UNORDERED_ITEM_RE = re.compile(r"^[-*+] (.*)$")
ORDERED_ITEM_RE = re.compile(r"^\d+\. (.+)$")
HEADING_RE = re.compile(r"^#{1,3} ")
RULE_RE = re.compile(r"^(?:---|\*\*\*)$")

# Next-line shapes that suppress a soft break in the line-join pass
_BLOCK_START_RE = re.compile(r"^(?:[-*+#<>]|&gt;|\d+\.|" + PLACEHOLDER_MARK + ")")


def classify_line(line: str) -> LineKind:
    """Classify one line of (code-extracted) source."""
    trimmed = line.strip()
    if not trimmed:
        return LineKind.BLANK
    if is_placeholder_line(line):
        return LineKind.CODE
    if QUOTE_MARKER_RE.match(trimmed):
        return LineKind.QUOTE
    if UNORDERED_ITEM_RE.match(trimmed):
        return LineKind.UNORDERED_ITEM
    if ORDERED_ITEM_RE.match(trimmed):
        return LineKind.ORDERED_ITEM
    if HEADING_RE.match(line):
        return LineKind.HEADING
    if RULE_RE.match(line):
        return LineKind.RULE
    return LineKind.TEXT


def quote_body(line: str) -> str:
    """Strip the quote marker and one following space from a QUOTE line."""
    trimmed = line.strip()
    marker = QUOTE_MARKER_RE.match(trimmed)
    return trimmed[marker.end() :] if marker else trimmed


def item_body(line: str) -> str:
    """Strip the list marker from an UNORDERED_ITEM or ORDERED_ITEM line."""
    trimmed = line.strip()
    match = UNORDERED_ITEM_RE.match(trimmed) or ORDERED_ITEM_RE.match(trimmed)
    return match.group(1) if match else trimmed


def starts_block(line: str) -> bool:
    """Return True if the trimmed line opens with block-level syntax or markup.

    Covers list markers, heading markers, quote markers (literal or escaped),
    digit-period markers, tag openers and protected code fragments.
    """
    return _BLOCK_START_RE.match(line.strip()) is not None


__all__ = [
    "LineKind",
    "classify_line",
    "item_body",
    "quote_body",
    "starts_block",
]
