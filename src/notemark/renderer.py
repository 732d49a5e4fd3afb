"""Markdown-to-HTML renderer for the note preview.

Runs the stages in order, each consuming the previous stage's full output:

1. Code extraction (fenced blocks, indented lines) into the protected store
2. Blockquote folding
3. List folding
4. Inline substitution rules
5. Line joining (paragraph boundaries and soft breaks)
6. Escaping of angle brackets the engine did not generate
7. Protected fragment restore, then paragraph wrap & cleanup

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single Renderer instance
and call render() concurrently without synchronization.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from notemark.code import extract_code
from notemark.config import RenderConfig, get_render_config
from notemark.escaping import escape_unrecognized
from notemark.folding import fold_blockquotes, fold_lists
from notemark.paragraphs import join_lines, wrap_paragraphs
from notemark.profiling import get_render_accumulator
from notemark.protect import PLACEHOLDER_MARK, ProtectedStore
from notemark.rules import apply_rules, inline_rules
from notemark.utils.logger import get_logger

logger = get_logger(__name__)


def normalize_source(text: str) -> str:
    """Normalize line endings and replace NUL with U+FFFD.

    NUL is reserved for protected fragment placeholders.
    """
    if "\r" in text:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
    if PLACEHOLDER_MARK in text:
        text = text.replace(PLACEHOLDER_MARK, "\ufffd")
    return text


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render, ensuring thread safety when sharing
    Renderer instances across threads.
    """

    config: RenderConfig
    store: ProtectedStore = field(default_factory=ProtectedStore)


class Renderer:
    """Render note text to display markup.

    Usage:
        >>> renderer = Renderer()
        >>> renderer.render("# Hello **World**")
        '<h1>Hello <strong>World</strong></h1>'

    Args:
        config: Fixed configuration. When None, the configuration active in
            the current context (see ``notemark.config``) is read per call.
    """

    __slots__ = ("_config",)

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> RenderConfig:
        return self._config or get_render_config()

    def render(self, text: str) -> str:
        """Render markdown text to HTML.

        Total for every string: malformed syntax degrades to best-effort
        output. Empty or whitespace-only text yields the configured
        placeholder.

        Raises:
            TypeError: If text is not a str
        """
        if not isinstance(text, str):
            raise TypeError(f"render() expects str, got {type(text).__name__}")

        config = self.config
        if not text.strip():
            return config.placeholder

        ctx = RenderContext(config=config)
        html = normalize_source(text)
        html = extract_code(html, ctx.store, config)
        html = fold_blockquotes(html)
        html = fold_lists(html)
        html = apply_rules(html, inline_rules(config, ctx.store))
        html = join_lines(html)
        html = escape_unrecognized(html)
        html = ctx.store.restore(html)
        html = wrap_paragraphs(html)

        logger.debug(
            "Rendered %d chars to %d chars (%d protected fragments)",
            len(text),
            len(html),
            len(ctx.store),
        )

        acc = get_render_accumulator()
        if acc is not None:
            acc.record_render(source_length=len(text), output_length=len(html))

        return html


__all__ = [
    "RenderContext",
    "Renderer",
    "normalize_source",
]
