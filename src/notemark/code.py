"""Fenced and indented code extraction.

First stage of the renderer. Code is rendered to its final markup here and
moved into the ProtectedStore, so backticks, asterisks, underscores and
brackets inside code are never touched by later stages.

Fenced blocks:
    ```lang
    content
    ```

    The opening line is three backticks plus an optional language tag, the
    closing line is three backticks alone. Content is entity-escaped and
    stripped of surrounding blank lines.

Unterminated fences:
    An opening fence with no closing fence before end of input is left
    literal. Its lines fall through to the later stages as plain text.

Indented lines:
    A line starting with four spaces and carrying non-blank content becomes a
    one-line code fragment with the four spaces removed.
"""

from __future__ import annotations

import html
import re

from notemark.config import RenderConfig
from notemark.protect import ProtectedStore
from notemark.utils.logger import get_logger

logger = get_logger(__name__)

FENCE_OPEN_RE = re.compile(r"^```([A-Za-z0-9_+-]*)\s*$")
FENCE_CLOSE_RE = re.compile(r"^```\s*$")
INDENT = "    "


def code_escape(s: str) -> str:
    """Escape code content so it displays literally."""
    return html.escape(s, quote=False)


def render_fenced(body: str, lang: str, config: RenderConfig) -> str:
    """Render a fenced block to its final markup."""
    lang_class = f' class="{config.code_class_prefix}{lang}"' if lang else ""
    content = code_escape(body.strip("\n"))
    return f"<pre><code{lang_class}>{content}</code></pre>"


def render_indented(line: str) -> str:
    """Render one indented line to its final markup."""
    return f"<pre><code>{code_escape(line[len(INDENT):])}</code></pre>"


def _find_close(lines: list[str], start: int) -> int:
    """Return index of the closing fence at or after start, or -1."""
    for idx in range(start, len(lines)):
        if FENCE_CLOSE_RE.match(lines[idx]):
            return idx
    return -1


def extract_code(text: str, store: ProtectedStore, config: RenderConfig) -> str:
    """Replace code blocks with protected placeholders.

    Args:
        text: Normalized source (``\\n`` line endings, no NUL characters)
        store: Per-render store receiving the finished code markup
        config: Active render configuration

    Returns:
        Text with every fenced block collapsed to one placeholder line and
        every indented code line replaced by a placeholder line.
    """
    lines = text.split("\n")
    out: list[str] = []
    # Once a fence has no closing line, no later fence can have one either
    unclosed = False
    idx = 0
    while idx < len(lines):
        line = lines[idx]

        opening = FENCE_OPEN_RE.match(line)
        if opening and not unclosed:
            close = _find_close(lines, idx + 1)
            if close != -1:
                body = "\n".join(lines[idx + 1 : close])
                out.append(store.stash(render_fenced(body, opening.group(1), config)))
                idx = close + 1
                continue
            unclosed = True
            logger.debug("Unterminated code fence at line %d left literal", idx + 1)

        if line.startswith(INDENT) and line[len(INDENT) :].strip():
            out.append(store.stash(render_indented(line)))
        else:
            out.append(line)
        idx += 1

    return "\n".join(out)


__all__ = ["code_escape", "extract_code", "render_fenced", "render_indented"]
