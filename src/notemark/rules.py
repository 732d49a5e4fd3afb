"""Ordered inline substitution rules.

Each rule is a (pattern, replacement) pair applied globally to the whole text;
the next rule sees the previous rule's full output. Order is load-bearing:

1. Headings ``###``, ``##``, ``#`` (line-anchored, most specific first, so
   ``### x`` never reaches the level-2 or level-1 rule)
2. ``***triple***`` before ``**double**`` before ``*single*`` emphasis;
   run the other way round and the triple form could never match
3. ``~~strikethrough~~``
4. Code spans before links, so link-like text inside code is kept
5. ``[text](url)`` links, then ``![alt](url)`` images
6. ``---`` and ``***`` horizontal rules (line-anchored)

Emphasis needs non-empty, single-line content, which leaves a lone ``***``
line for the horizontal-rule rule. Code spans are entity-escaped like fenced
code and stashed in the protected store as finished markup, so no later rule
can rewrite their content.

Link text, alt text and URLs never contain the delimiter that opens them, so
a failed match attempt stops at the next ``[`` or ``(`` and a line full of
brackets is scanned in linear time. A URL also stops at whitespace.

Limits:
    - Rules run after list folding has put a whole list on one line, so an
      emphasis marker can pair across items: ``- *a`` followed by ``- b*``
      yields ``<li><em>a</li><li>b</em></li>``.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable
from dataclasses import dataclass

from notemark.code import code_escape
from notemark.config import RenderConfig
from notemark.protect import ProtectedStore

Replacement = str | Callable[[re.Match[str]], str]


@dataclass(frozen=True, slots=True)
class Rule:
    """One global text rewrite.

    Attributes:
        name: Short identifier, used in logs and tests
        pattern: Compiled pattern matched across the whole text
        replacement: ``re.sub`` template or callable taking the match

    """

    name: str
    pattern: re.Pattern[str]
    replacement: Replacement

    def apply(self, text: str) -> str:
        """Apply this rule to every match in text."""
        return self.pattern.sub(self.replacement, text)


HEADING_3 = Rule("heading_3", re.compile(r"^### (.*)$", re.M), r"<h3>\1</h3>")
HEADING_2 = Rule("heading_2", re.compile(r"^## (.*)$", re.M), r"<h2>\1</h2>")
HEADING_1 = Rule("heading_1", re.compile(r"^# (.*)$", re.M), r"<h1>\1</h1>")

STRONG_EMPHASIS = Rule(
    "strong_emphasis", re.compile(r"\*\*\*(.+?)\*\*\*"), r"<strong><em>\1</em></strong>"
)
STRONG = Rule("strong", re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>")
EMPHASIS = Rule("emphasis", re.compile(r"\*([^*\n]+?)\*"), r"<em>\1</em>")

STRIKETHROUGH = Rule("strikethrough", re.compile(r"~~(.+?)~~"), r"<del>\1</del>")

HORIZONTAL_RULE_DASHES = Rule("hr_dashes", re.compile(r"^---$", re.M), "<hr>")
HORIZONTAL_RULE_STARS = Rule("hr_stars", re.compile(r"^\*\*\*$", re.M), "<hr>")

CODE_SPAN_RE = re.compile(r"`([^`\n]+)`")
# A link never starts right after "!", that form belongs to the image rule.
# Attribute values never contain a placeholder, so restored markup cannot
# land inside a quoted attribute.
LINK_RE = re.compile(r"(?<!!)\[([^\[\]\n]+)\]\(([^()\s\x00]+)\)")
IMAGE_RE = re.compile(r"!\[([^\[\]\n\x00]*)\]\(([^()\s\x00]+)\)")


def attr_escape(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute.

    Entities already present are decoded first so ``&amp;`` is not doubled.
    """
    return html.escape(html.unescape(value.strip()), quote=True)


def _code_span(store: ProtectedStore) -> Callable[[re.Match[str]], str]:
    def replace(match: re.Match[str]) -> str:
        return store.stash(f"<code>{code_escape(match.group(1))}</code>")

    return replace


def _link(config: RenderConfig) -> Callable[[re.Match[str]], str]:
    target = f' target="{config.link_target}"' if config.link_target else ""

    def replace(match: re.Match[str]) -> str:
        return f'<a href="{attr_escape(match.group(2))}"{target}>{match.group(1)}</a>'

    return replace


def _image(match: re.Match[str]) -> str:
    return f'<img src="{attr_escape(match.group(2))}" alt="{attr_escape(match.group(1))}" />'


def inline_rules(config: RenderConfig, store: ProtectedStore) -> tuple[Rule, ...]:
    """Build the ordered rule table for one render call.

    Args:
        config: Active render configuration
        store: Per-render store that receives code span markup

    Returns:
        Rules in application order
    """
    rules: list[Rule] = [
        HEADING_3,
        HEADING_2,
        HEADING_1,
        STRONG_EMPHASIS,
        STRONG,
        EMPHASIS,
    ]
    if config.strikethrough_enabled:
        rules.append(STRIKETHROUGH)
    rules.extend(
        (
            Rule("code_span", CODE_SPAN_RE, _code_span(store)),
            Rule("link", LINK_RE, _link(config)),
            Rule("image", IMAGE_RE, _image),
            HORIZONTAL_RULE_DASHES,
            HORIZONTAL_RULE_STARS,
        )
    )
    return tuple(rules)


def apply_rules(text: str, rules: tuple[Rule, ...]) -> str:
    """Apply rules in order, each one to the entire text."""
    for rule in rules:
        text = rule.apply(text)
    return text


__all__ = [
    "Rule",
    "apply_rules",
    "attr_escape",
    "inline_rules",
]
