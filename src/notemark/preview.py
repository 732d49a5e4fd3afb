"""Live preview session for the note editor.

The editor re-renders the preview after each edit and again when a note is
opened. Every edit gets a monotonically increasing revision number; a
rendered result is published only if its revision is newer than the one on
screen. A late result for an older edit is discarded instead of overwriting
newer content.

Usage:
    >>> session = PreviewSession()
    >>> session.update("# Hello").html
    '<h1>Hello</h1>'
    >>> session.update("").html == WELCOME_PLACEHOLDER
    True

    # Rendering off the UI thread
    >>> revision = session.begin()
    >>> preview = session.render(revision, "*late*")
    >>> session.publish(preview)
    True

Thread Safety:
    Revision allocation and publishing are guarded by a lock. Rendering
    itself holds no lock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from notemark.config import RenderConfig
from notemark.renderer import Renderer
from notemark.utils.logger import get_logger

logger = get_logger(__name__)

# Shown when the note is empty
WELCOME_PLACEHOLDER = (
    '<div class="welcome-message"><p>Start typing to see the preview...</p></div>'
)


@dataclass(frozen=True, slots=True)
class Preview:
    """Rendered markup tagged with the edit revision it belongs to."""

    revision: int
    html: str


class PreviewSession:
    """Serializes preview renders for one editor.

    Args:
        config: Render configuration. Defaults to one whose placeholder is
            the welcome message.
    """

    __slots__ = ("_current", "_lock", "_next_revision", "_renderer")

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._renderer = Renderer(config or RenderConfig(placeholder=WELCOME_PLACEHOLDER))
        self._lock = threading.Lock()
        self._next_revision = 0
        self._current = Preview(revision=0, html=self._renderer.config.placeholder)

    @property
    def current(self) -> Preview:
        """Most recently published preview."""
        with self._lock:
            return self._current

    def begin(self) -> int:
        """Allocate the revision number for a new edit."""
        with self._lock:
            self._next_revision += 1
            return self._next_revision

    def render(self, revision: int, text: str) -> Preview:
        """Render text for the given revision without publishing it."""
        return Preview(revision=revision, html=self._renderer.render(text))

    def publish(self, preview: Preview) -> bool:
        """Publish a rendered preview unless a newer one is already shown.

        Returns:
            True if the preview was applied, False if it was stale
        """
        with self._lock:
            if preview.revision <= self._current.revision:
                logger.debug(
                    "Discarding stale preview r%d (showing r%d)",
                    preview.revision,
                    self._current.revision,
                )
                return False
            self._current = preview
            return True

    def update(self, text: str) -> Preview:
        """Render and publish synchronously; returns the preview now shown."""
        self.publish(self.render(self.begin(), text))
        return self.current


__all__ = [
    "Preview",
    "PreviewSession",
    "WELCOME_PLACEHOLDER",
]
