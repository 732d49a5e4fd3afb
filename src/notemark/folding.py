"""Blockquote and list folding.

Both stages scan text line by line and fold contiguous lines of one block
kind into a single markup fragment placed on one line. The open block is an
explicit finite-state value threaded through a reduction over the lines:

    IDLE ──quote line──▶ IN_QUOTE
    IDLE ──"- item"────▶ IN_UNORDERED_LIST
    IDLE ──"1. item"───▶ IN_ORDERED_LIST

Any non-IDLE state flushes back to IDLE on a non-matching line (including a
blank line), on a line of a different kind, or at end of input. A line of a
different kind opens the new block right after the flush, so an unordered
list followed by an ordered one yields two adjacent fragments.

IDLE is both the initial and the terminal state: every opened accumulator is
flushed exactly once.

Limits:
    - One quote level: a marker inside an open quote body stays literal.
    - No list nesting: every item is a flat sibling whatever its indentation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from notemark.accumulator import BlockAccumulator
from notemark.classify import LineKind, classify_line, item_body, quote_body


class FoldKind(Enum):
    """Open-block states of the folding state machine."""

    IDLE = auto()
    IN_QUOTE = auto()
    IN_UNORDERED_LIST = auto()
    IN_ORDERED_LIST = auto()


@dataclass(frozen=True, slots=True)
class FoldState:
    """Current fold state: a kind plus its open accumulator (None when IDLE)."""

    kind: FoldKind = FoldKind.IDLE
    block: BlockAccumulator | None = None

    @property
    def is_idle(self) -> bool:
        return self.kind is FoldKind.IDLE


IDLE = FoldState()

# Accumulator factory per open-block state
_BLOCK_FACTORIES: dict[FoldKind, Callable[[], BlockAccumulator]] = {
    FoldKind.IN_QUOTE: lambda: BlockAccumulator("<blockquote>", "</blockquote>", separator="<br>"),
    FoldKind.IN_UNORDERED_LIST: lambda: BlockAccumulator("<ul>", "</ul>", item="<li>{}</li>"),
    FoldKind.IN_ORDERED_LIST: lambda: BlockAccumulator("<ol>", "</ol>", item="<li>{}</li>"),
}

# Which line kinds open or continue a block, per fold stage
QUOTE_KINDS: dict[LineKind, FoldKind] = {LineKind.QUOTE: FoldKind.IN_QUOTE}
LIST_KINDS: dict[LineKind, FoldKind] = {
    LineKind.UNORDERED_ITEM: FoldKind.IN_UNORDERED_LIST,
    LineKind.ORDERED_ITEM: FoldKind.IN_ORDERED_LIST,
}


def flush(state: FoldState, out: list[str]) -> FoldState:
    """Emit the open block (if any) and return to IDLE."""
    if state.block is not None:
        out.append(state.block.build())
    return IDLE


def step(
    state: FoldState,
    line: str,
    out: list[str],
    kinds: dict[LineKind, FoldKind],
    body: Callable[[str], str],
) -> FoldState:
    """Advance the state machine by one line.

    Args:
        state: State before this line
        line: Source line
        out: Output lines; flushed fragments and pass-through lines go here
        kinds: Line kinds this stage folds, mapped to their open-block state
        body: Extracts the block content from a matching line

    Returns:
        State after this line
    """
    target = kinds.get(classify_line(line))
    if target is None:
        state = flush(state, out)
        out.append(line)
        return state

    if state.kind is not target:
        flush(state, out)
        state = FoldState(target, _BLOCK_FACTORIES[target]())

    assert state.block is not None
    state.block.append(body(line))
    return state


def _fold(text: str, kinds: dict[LineKind, FoldKind], body: Callable[[str], str]) -> str:
    out: list[str] = []
    state = IDLE
    for line in text.split("\n"):
        state = step(state, line, out, kinds, body)
    state = flush(state, out)
    assert state.is_idle
    return "\n".join(out)


def fold_blockquotes(text: str) -> str:
    """Fold contiguous quote lines into ``<blockquote>`` fragments.

    Lines are joined by soft breaks inside the fragment.

    Example:
        >>> fold_blockquotes("> a\\n> b\\n\\nafter")
        '<blockquote>a<br>b</blockquote>\\n\\nafter'
    """
    return _fold(text, QUOTE_KINDS, quote_body)


def fold_lists(text: str) -> str:
    """Fold contiguous list items into ``<ul>`` / ``<ol>`` fragments.

    Example:
        >>> fold_lists("- a\\n- b\\n1. c")
        '<ul><li>a</li><li>b</li></ul>\\n<ol><li>c</li></ol>'
    """
    return _fold(text, LIST_KINDS, item_body)


__all__ = [
    "FoldKind",
    "FoldState",
    "IDLE",
    "LIST_KINDS",
    "QUOTE_KINDS",
    "flush",
    "fold_blockquotes",
    "fold_lists",
    "step",
]
