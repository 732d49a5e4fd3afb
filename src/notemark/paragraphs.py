"""Line joining and paragraph wrapping.

Two stages of the renderer live here:

join_lines:
    A blank line (``\\n\\n``) becomes a paragraph boundary. For every other
    newline a ``<br>`` soft break is inserted between the two lines unless:

    - the current line's trimmed text ends with ``:``
    - the next line is blank
    - the next line's trimmed text starts with block-level syntax or markup
      (see ``notemark.classify.starts_block``)

    The colon rule covers both a label line introducing a list and a label
    line followed by ordinary prose; neither gets a break.

wrap_paragraphs:
    Wraps everything in one ``<p>`` pair, then splits the paragraph around
    each top-level block element so no heading, rule, list, quote or code
    block ends up inside a paragraph. Soft breaks left dangling at a
    paragraph edge are dropped, and empty ``<p></p>`` pairs collapse.
"""

from __future__ import annotations

import re

from notemark.classify import starts_block

PARAGRAPH_BREAK = "</p><p>"
SOFT_BREAK = "<br>"

# Block-level elements that must not sit inside a paragraph; hr has no close tag
BLOCK_TAG_RE = re.compile(r"<(/?)(h[1-6]|ul|ol|blockquote|pre|hr)>")
_LEADING_BREAKS_RE = re.compile(r"<p>(?:<br>)+")
_TRAILING_BREAKS_RE = re.compile(r"(?:<br>)+</p>")
_EMPTY_PARAGRAPH = "<p></p>"


def wants_soft_break(current: str, following: str) -> bool:
    """Decide whether a newline between two lines renders as ``<br>``."""
    if current.strip().endswith(":"):
        return False
    if not following.strip():
        return False
    return not starts_block(following)


def join_lines(text: str) -> str:
    """Turn newlines into paragraph boundaries, soft breaks or nothing."""
    lines = text.replace("\n\n", PARAGRAPH_BREAK).split("\n")
    parts: list[str] = []
    last = len(lines) - 1
    for idx, line in enumerate(lines):
        parts.append(line)
        if idx < last and wants_soft_break(line, lines[idx + 1]):
            parts.append(SOFT_BREAK)
    return "".join(parts)


def _split_around_blocks(html: str) -> str:
    """Close the paragraph before, and reopen it after, each top-level block."""
    parts: list[str] = []
    depth = 0
    pos = 0
    for match in BLOCK_TAG_RE.finditer(html):
        parts.append(html[pos : match.start()])
        closing, name = match.group(1), match.group(2)
        tag = match.group(0)
        if name == "hr":
            parts.append(f"</p>{tag}<p>" if depth == 0 else tag)
        elif not closing:
            parts.append(f"</p>{tag}" if depth == 0 else tag)
            depth += 1
        elif depth > 0:
            depth -= 1
            parts.append(f"{tag}<p>" if depth == 0 else tag)
        else:
            # Stray closing tag with nothing open
            parts.append(tag)
        pos = match.end()
    parts.append(html[pos:])
    return "".join(parts)


def wrap_paragraphs(text: str) -> str:
    """Wrap text in paragraphs, keeping block elements outside them."""
    html = _split_around_blocks(f"<p>{text}</p>")
    html = _LEADING_BREAKS_RE.sub("<p>", html)
    html = _TRAILING_BREAKS_RE.sub("</p>", html)
    return html.replace(_EMPTY_PARAGRAPH, "")


__all__ = [
    "join_lines",
    "wants_soft_break",
    "wrap_paragraphs",
]
