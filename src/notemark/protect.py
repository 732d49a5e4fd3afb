"""Out-of-band storage for finished markup fragments.

Code blocks and code spans are rendered to their final markup as soon as they
are recognised, then swapped for a placeholder so that no later stage
(folding, inline rules, line joining, escaping) can see their content.
Placeholders are restored once escaping is done.

A placeholder is ``\\x00<index>\\x00``. NUL never survives input
normalisation, so user text cannot forge one.

Thread Safety:
    One ProtectedStore per render() call. No shared mutable state.
"""

from __future__ import annotations

import re

PLACEHOLDER_MARK = "\x00"

_PLACEHOLDER_RE = re.compile(r"\x00(\d+)\x00")
_WHOLE_LINE_RE = re.compile(r"^\x00\d+\x00$")


def is_placeholder_line(line: str) -> bool:
    """Return True if the line is exactly one protected placeholder."""
    return _WHOLE_LINE_RE.match(line) is not None


class ProtectedStore:
    """Indexed store of protected markup fragments.

    Usage:
        >>> store = ProtectedStore()
        >>> token = store.stash("<code>*x*</code>")
        >>> store.restore(f"see {token}")
        'see <code>*x*</code>'
    """

    __slots__ = ("_fragments",)

    def __init__(self) -> None:
        self._fragments: list[str] = []

    def stash(self, markup: str) -> str:
        """Store finished markup and return the placeholder that stands for it."""
        self._fragments.append(markup)
        return f"{PLACEHOLDER_MARK}{len(self._fragments) - 1}{PLACEHOLDER_MARK}"

    def restore(self, text: str) -> str:
        """Replace every placeholder in text with its stored markup."""
        if not self._fragments:
            return text
        return _PLACEHOLDER_RE.sub(lambda m: self._fragments[int(m.group(1))], text)

    def __len__(self) -> int:
        return len(self._fragments)
