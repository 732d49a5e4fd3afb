"""Exception classes for notemark.

Rendering itself never raises for string input: malformed markdown degrades
to best-effort output. These exceptions cover programmer errors only, such as
an invalid configuration value.
"""

from __future__ import annotations


class NotemarkError(Exception):
    """Base exception for all notemark errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(NotemarkError):
    """Invalid render configuration.

    Raised when a RenderConfig field has a value the renderer cannot use.
    """

    def __init__(self, field_name: str, message: str) -> None:
        """Initialize config error.

        Args:
            field_name: Name of the offending RenderConfig field
            message: Description of the problem
        """
        self.field_name = field_name
        self.message = message
        super().__init__(f"RenderConfig.{field_name}: {message}")
