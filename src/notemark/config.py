"""ContextVar-based render configuration for notemark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per render call and read by every stage of that call.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # In Markdown class
    md = Markdown(link_target=None)
    html = md("# Hello")  # Sets config internally via ContextVar

    # Direct renderer usage (advanced)
    from notemark.config import set_render_config, reset_render_config, RenderConfig

    set_render_config(RenderConfig(placeholder="<p>Nothing here</p>"))
    try:
        html = Renderer().render(text)
    finally:
        reset_render_config()

    # Or use the context manager
    with render_config_context(RenderConfig(strikethrough_enabled=False)):
        html = Renderer().render(text)

"""

import re
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from notemark.errors import ConfigError

_CLASS_PREFIX_RE = re.compile(r"^[A-Za-z0-9_-]*$")


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        placeholder: Markup returned for empty or whitespace-only input
        link_target: Value of the ``target`` attribute on generated links,
            or None to omit the attribute
        code_class_prefix: Prefix of the class set on fenced code blocks
            that carry a language tag
        strikethrough_enabled: Enable ~~strikethrough~~ syntax

    """

    placeholder: str = ""
    link_target: str | None = "_blank"
    code_class_prefix: str = "language-"
    strikethrough_enabled: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.placeholder, str):
            raise ConfigError("placeholder", f"expected str, got {type(self.placeholder).__name__}")
        if self.link_target is not None:
            if not isinstance(self.link_target, str) or not self.link_target:
                raise ConfigError("link_target", "expected a non-empty str or None")
            if any(c in self.link_target for c in "\"'<> "):
                raise ConfigError("link_target", f"unsafe attribute value {self.link_target!r}")
        if not isinstance(self.code_class_prefix, str) or not _CLASS_PREFIX_RE.match(
            self.code_class_prefix
        ):
            raise ConfigError(
                "code_class_prefix",
                f"must contain only letters, digits, '_' or '-', got {self.code_class_prefix!r}",
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Useful when settings come from an application config file. Only keys
        that are valid RenderConfig fields are used; unknown keys are ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                RenderConfig attribute names.

        Returns:
            New RenderConfig instance with values from dict.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "link_target": None,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.link_target is None
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local).

    Returns:
        The active RenderConfig for this thread/context.

    """
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Args:
        config: RenderConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: RenderConfig to use within the context.

    Yields:
        None

    Example:
        >>> with render_config_context(RenderConfig(link_target=None)):
        ...     html = Renderer().render("[a](b)")
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
