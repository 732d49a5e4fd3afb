"""Escaping of angle brackets the engine did not generate.

Runs after all markup generation. A lexical scan finds every tag whose name
is on the engine's allowlist; every ``<`` or ``>`` outside those tags is
replaced by its entity. This is not an HTML parser: it only looks at the
text around each bracket.

Allowlisted tags typed into a note survive, with two limits that keep the
block structure of the preview intact:

- A structural tag (heading, list, list item, quote, preformatted) is kept
  only if it pairs with a matching close tag, properly nested, within the
  same paragraph. An unpaired one is escaped like any other bracket.
- A paragraph tag is kept only as part of a ``</p><p>`` paragraph boundary.

Markup the engine generates always satisfies both, so only hand-typed tags
are affected.

Example:
    >>> escape_unrecognized("<em>a</em> < b <script>")
    '<em>a</em> &lt; b &lt;script&gt;'
    >>> escape_unrecognized("text <ul> more")
    'text &lt;ul&gt; more'
"""

from __future__ import annotations

import re
from collections import Counter

# Tag names the renderer itself produces
ENGINE_TAGS: frozenset[str] = frozenset(
    {
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "p",
        "strong",
        "em",
        "del",
        "code",
        "pre",
        "ul",
        "ol",
        "li",
        "blockquote",
        "a",
        "img",
        "hr",
        "br",
    }
)

# Tags that open a block and must be closed again
PAIRED_TAGS: frozenset[str] = frozenset(
    {"h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "li", "blockquote", "pre"}
)

# Longest names first so "pre" is not cut short at "p". Attributes never span a
# protected placeholder.
_TAG_NAMES = "|".join(sorted(ENGINE_TAGS, key=len, reverse=True))
ENGINE_TAG_RE = re.compile(rf"<(/?)({_TAG_NAMES})(?:\s[^<>\x00]*)?/?>")


def escape_brackets(s: str) -> str:
    """Escape every angle bracket in s."""
    return s.replace("<", "&lt;").replace(">", "&gt;")


def is_engine_tag(s: str) -> bool:
    """Return True if s is exactly one allowlisted tag."""
    return ENGINE_TAG_RE.fullmatch(s) is not None


def _is_boundary(matches: list[re.Match[str]], idx: int) -> bool:
    """Return True if matches[idx] opens an adjacent ``</p><p>`` pair."""
    if idx + 1 >= len(matches):
        return False
    close, following = matches[idx], matches[idx + 1]
    return (
        close.group(0) == "</p>"
        and following.group(0) == "<p>"
        and following.start() == close.end()
    )


def unpaired_tags(matches: list[re.Match[str]]) -> set[int]:
    """Return indexes of allowlisted tags that would unbalance the output.

    Args:
        matches: Every ``ENGINE_TAG_RE`` match in the text, in order

    Returns:
        Indexes into matches of tags to escape
    """
    bad: set[int] = set()
    stack: list[tuple[str, int]] = []
    open_names: Counter[str] = Counter()

    def drop_open() -> None:
        bad.update(idx for _, idx in stack)
        stack.clear()
        open_names.clear()

    idx = 0
    while idx < len(matches):
        match = matches[idx]
        closing, name = match.group(1), match.group(2)
        if name == "p":
            if _is_boundary(matches, idx):
                # Blocks never continue into the next paragraph
                drop_open()
                idx += 2
                continue
            bad.add(idx)
        elif name in PAIRED_TAGS:
            if match.group(0).endswith("/>"):
                bad.add(idx)
            elif not closing:
                stack.append((name, idx))
                open_names[name] += 1
            elif open_names[name]:
                while True:
                    open_name, open_idx = stack.pop()
                    open_names[open_name] -= 1
                    if open_name == name:
                        break
                    bad.add(open_idx)
            else:
                bad.add(idx)
        idx += 1

    drop_open()
    return bad


def escape_unrecognized(text: str) -> str:
    """Escape angle brackets that are not part of a kept allowlisted tag."""
    if "<" not in text and ">" not in text:
        return text

    matches = list(ENGINE_TAG_RE.finditer(text))
    unpaired = unpaired_tags(matches)
    parts: list[str] = []
    pos = 0
    for idx, match in enumerate(matches):
        if idx in unpaired:
            continue
        parts.append(escape_brackets(text[pos : match.start()]))
        parts.append(match.group(0))
        pos = match.end()
    parts.append(escape_brackets(text[pos:]))
    return "".join(parts)


__all__ = [
    "ENGINE_TAGS",
    "PAIRED_TAGS",
    "escape_brackets",
    "escape_unrecognized",
    "is_engine_tag",
    "unpaired_tags",
]
