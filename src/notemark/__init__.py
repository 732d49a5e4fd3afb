"""
notemark: Live-preview Markdown Renderer for Plain-Text Notes

A single-pass, rule-driven converter from note text to HTML. Designed to run
synchronously after every keystroke: no I/O, no shared state, deterministic
output, and no exceptions for any string input.

Quick Start:
    >>> from notemark import render
    >>> render("# Hello, World!")
    '<h1>Hello, World!</h1>'

    >>> # Or use the high-level Markdown class
    >>> from notemark import Markdown
    >>> md = Markdown(link_target=None)
    >>> md("See [docs](https://example.com)")
    '<p>See <a href="https://example.com">docs</a></p>'

Supported syntax:
    Headings (levels 1-3), ***bold italic***, **bold**, *italic*,
    ~~strikethrough~~, `code`, [links](url), ![images](url), --- and ***
    rules, "- " / "* " / "+ " and "1. " lists, "> " quotes, fenced code
    blocks with a language tag, and four-space indented code lines.

Installation:
    pip install notemark
"""

from collections.abc import Iterable

from notemark.cache import DictRenderCache, RenderCache, hash_config, hash_content
from notemark.classify import LineKind, classify_line
from notemark.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from notemark.errors import ConfigError, NotemarkError
from notemark.escaping import ENGINE_TAGS, escape_unrecognized
from notemark.folding import FoldKind, FoldState
from notemark.preview import Preview, PreviewSession
from notemark.profiling import RenderAccumulator, get_render_accumulator, profiled_render
from notemark.renderer import Renderer
from notemark.rules import Rule, inline_rules
from notemark.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def _cached_render(
    renderer: Renderer,
    text: str,
    config: RenderConfig,
    cache: RenderCache | None,
) -> str:
    if cache is None or not isinstance(text, str):
        return renderer.render(text)

    config_hash = hash_config(config)
    content_hash = hash_content(text)
    cached = cache.get(content_hash, config_hash)
    if cached is not None:
        logger.debug("Render cache hit for content %s", content_hash[:12])
        return cached

    html = renderer.render(text)
    cache.put(content_hash, config_hash, html)
    return html


def render(
    text: str,
    *,
    config: RenderConfig | None = None,
    cache: RenderCache | None = None,
) -> str:
    """Render note text to HTML.

    Args:
        text: Raw note text
        config: Render configuration (uses the active context config if None)
        cache: Optional content-addressed render cache

    Returns:
        HTML string; the configured placeholder for empty input

    Example:
        >>> render("- one\\n- two")
        '<ul><li>one</li><li>two</li></ul>'
    """
    active = config or get_render_config()
    return _cached_render(Renderer(active), text, active, cache)


class Markdown:
    """High-level processor holding one immutable configuration.

    Usage:
        >>> md = Markdown(placeholder="<p><em>Empty note</em></p>")
        >>> md("")
        '<p><em>Empty note</em></p>'

        >>> md.render_many(["# A", "# B"])
        ['<h1>A</h1>', '<h1>B</h1>']

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Markdown instances concurrently from different threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        placeholder: str = "",
        link_target: str | None = "_blank",
        code_class_prefix: str = "language-",
        strikethrough: bool = True,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            placeholder: Markup returned for empty input
            link_target: ``target`` attribute of generated links (None omits it)
            code_class_prefix: Class prefix for fenced code language tags
            strikethrough: Enable ~~strikethrough~~ syntax

        Raises:
            ConfigError: If an option value is invalid
        """
        self._config = RenderConfig(
            placeholder=placeholder,
            link_target=link_target,
            code_class_prefix=code_class_prefix,
            strikethrough_enabled=strikethrough,
        )
        self._renderer = Renderer()

    @property
    def config(self) -> RenderConfig:
        return self._config

    def __call__(self, text: str, *, cache: RenderCache | None = None) -> str:
        """Render note text to HTML.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with render_config_context(self._config):
            return _cached_render(self._renderer, text, self._config, cache)

    def render_many(
        self,
        texts: Iterable[str],
        *,
        cache: RenderCache | None = None,
    ) -> list[str]:
        """Render several notes with the config set once for the batch."""
        with render_config_context(self._config):
            return [_cached_render(self._renderer, text, self._config, cache) for text in texts]


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "render",
    "Markdown",
    "Renderer",
    # Render cache
    "DictRenderCache",
    "RenderCache",
    "hash_config",
    "hash_content",
    # Engine building blocks
    "ENGINE_TAGS",
    "FoldKind",
    "FoldState",
    "LineKind",
    "Rule",
    "classify_line",
    "escape_unrecognized",
    "inline_rules",
    # Live preview
    "Preview",
    "PreviewSession",
    # Profiling
    "RenderAccumulator",
    "profiled_render",
    "get_render_accumulator",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "ConfigError",
    "NotemarkError",
]
