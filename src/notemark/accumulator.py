"""Block accumulator for folding contiguous same-kind lines.

Adopts the StringBuilder pattern: lines are appended to a list and joined
once when the block is flushed.

Thread Safety:
    Accumulators are local to one fold pass of one render() call.
"""

from __future__ import annotations


class BlockAccumulator:
    """Ordered lines of one block, flushed exactly once.

    Usage:
        >>> acc = BlockAccumulator("<ul>", "</ul>", item="<li>{}</li>")
        >>> _ = acc.append("one").append("two")
        >>> acc.build()
        '<ul><li>one</li><li>two</li></ul>'

    Args:
        opening: Markup emitted before the first line
        closing: Markup emitted after the last line
        item: Format string applied to every line
        separator: Markup placed between formatted lines
    """

    __slots__ = ("_closing", "_item", "_lines", "_opening", "_separator", "_flushed")

    def __init__(self, opening: str, closing: str, *, item: str = "{}", separator: str = "") -> None:
        self._opening = opening
        self._closing = closing
        self._item = item
        self._separator = separator
        self._lines: list[str] = []
        self._flushed = False

    def append(self, line: str) -> BlockAccumulator:
        """Append one line to the block.

        Returns:
            self for method chaining
        """
        self._lines.append(line)
        return self

    def build(self) -> str:
        """Render the accumulated lines as one markup fragment.

        Raises:
            RuntimeError: If the block was already flushed
        """
        if self._flushed:
            raise RuntimeError("block accumulator flushed twice")
        self._flushed = True
        body = self._separator.join(self._item.format(line) for line in self._lines)
        return f"{self._opening}{body}{self._closing}"

    @property
    def flushed(self) -> bool:
        return self._flushed

    def __len__(self) -> int:
        """Return number of accumulated lines."""
        return len(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)
