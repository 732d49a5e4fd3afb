"""notemark RenderAccumulator: opt-in profiling for preview rendering.

The preview re-renders after every edit, so render time matters. This module
accumulates:
- Total profiling time
- Source and output length
- Number of render calls

Zero overhead when disabled (get_render_accumulator() returns None).

Example:
    from notemark import render
    from notemark.profiling import profiled_render

    with profiled_render() as metrics:
        html = render("# Hello **World**")

    print(metrics.summary())
    # {"total_ms": 0.2, "source_length": 17, "output_length": 37, "render_calls": 1}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class RenderAccumulator:
    """Accumulated metrics during rendering.

    Attributes:
        start_time: Profiling start timestamp.
        source_length: Total length of sources rendered.
        output_length: Total length of markup produced.
        render_calls: Number of render() calls recorded.

    """

    start_time: float = field(default_factory=perf_counter)
    source_length: int = 0
    output_length: int = 0
    render_calls: int = 0

    def record_render(self, source_length: int, output_length: int) -> None:
        """Record a render call.

        Args:
            source_length: Length of the source string rendered.
            output_length: Length of the markup returned.

        """
        self.render_calls += 1
        self.source_length += source_length
        self.output_length += output_length

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of render metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "source_length": self.source_length,
            "output_length": self.output_length,
            "render_calls": self.render_calls,
        }


_accumulator: ContextVar[RenderAccumulator | None] = ContextVar(
    "render_accumulator",
    default=None,
)


def get_render_accumulator() -> RenderAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_render() -> Iterator[RenderAccumulator]:
    """Context manager for profiled rendering.

    Creates a RenderAccumulator and makes it available via
    get_render_accumulator() for the duration of the with block.

    Yields:
        RenderAccumulator that will be populated during render calls.

    """
    acc = RenderAccumulator()
    token: Token[RenderAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
