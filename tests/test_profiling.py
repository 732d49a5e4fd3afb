"""Tests for notemark.profiling: render profiling API."""

from notemark import render
from notemark.profiling import (
    RenderAccumulator,
    get_render_accumulator,
    profiled_render,
)


class TestGetRenderAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_render_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_render():
            pass
        assert get_render_accumulator() is None


class TestProfiledRender:
    def test_yields_accumulator(self) -> None:
        with profiled_render() as acc:
            assert isinstance(acc, RenderAccumulator)
            assert get_render_accumulator() is acc

    def test_records_render_call(self) -> None:
        with profiled_render() as acc:
            render("# Hello")
        assert acc.render_calls == 1
        assert acc.source_length == 7
        assert acc.output_length == len("<h1>Hello</h1>")

    def test_records_multiple_calls(self) -> None:
        with profiled_render() as acc:
            render("# One")
            render("# Two")
            render("# Three")
        assert acc.render_calls == 3

    def test_empty_input_not_recorded(self) -> None:
        with profiled_render() as acc:
            render("")
            render("   ")
        assert acc.render_calls == 0

    def test_total_duration_positive(self) -> None:
        with profiled_render() as acc:
            render("# Hello **World**")
        assert acc.total_duration_ms > 0

    def test_nested_contexts(self) -> None:
        with profiled_render() as outer:
            render("a")
            with profiled_render() as inner:
                render("b")
            render("c")
        assert outer.render_calls == 2
        assert inner.render_calls == 1


class TestSummary:
    def test_empty_summary(self) -> None:
        summary = RenderAccumulator().summary()
        assert summary["render_calls"] == 0
        assert summary["source_length"] == 0
        assert summary["output_length"] == 0

    def test_summary_keys(self) -> None:
        with profiled_render() as acc:
            render("# Hello\n\nWorld")
        assert set(acc.summary()) == {"total_ms", "source_length", "output_length", "render_calls"}
