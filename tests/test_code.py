"""Tests for fenced and indented code extraction."""

import pytest

from notemark.code import extract_code, render_fenced, render_indented
from notemark.config import RenderConfig
from notemark.protect import ProtectedStore, is_placeholder_line


@pytest.fixture
def store() -> ProtectedStore:
    return ProtectedStore()


def extract(text: str, store: ProtectedStore, config: RenderConfig | None = None) -> str:
    return extract_code(text, store, config or RenderConfig())


class TestFencedBlocks:
    """Fenced blocks collapse to one placeholder line."""

    def test_block_becomes_placeholder(self, store: ProtectedStore) -> None:
        out = extract("before\n```py\nx = 1\n```\nafter", store)
        lines = out.split("\n")
        assert lines[0] == "before"
        assert is_placeholder_line(lines[1])
        assert lines[2] == "after"
        assert store.restore(lines[1]) == '<pre><code class="language-py">x = 1</code></pre>'

    def test_content_is_not_interpreted(self, store: ProtectedStore) -> None:
        out = extract("```\n# not a heading\n- not a list\n```", store)
        assert store.restore(out) == "<pre><code># not a heading\n- not a list</code></pre>"

    def test_surrounding_blank_lines_stripped(self, store: ProtectedStore) -> None:
        out = extract("```\n\ncode\n\n```", store)
        assert store.restore(out) == "<pre><code>code</code></pre>"

    def test_indentation_inside_fence_kept(self, store: ProtectedStore) -> None:
        out = extract("```\n    x\n```", store)
        assert store.restore(out) == "<pre><code>    x</code></pre>"
        assert len(store) == 1

    def test_language_tag_characters(self, store: ProtectedStore) -> None:
        out = extract("```c++\nint x;\n```", store)
        assert 'class="language-c++"' in store.restore(out)

    def test_trailing_whitespace_on_fences(self, store: ProtectedStore) -> None:
        out = extract("```sh  \nls\n```  ", store)
        assert store.restore(out) == '<pre><code class="language-sh">ls</code></pre>'

    def test_class_prefix_from_config(self, store: ProtectedStore) -> None:
        out = extract("```go\nx\n```", store, RenderConfig(code_class_prefix=""))
        assert store.restore(out) == '<pre><code class="go">x</code></pre>'

    def test_two_blocks(self, store: ProtectedStore) -> None:
        out = extract("```\na\n```\n```\nb\n```", store)
        assert len(store) == 2
        assert all(is_placeholder_line(line) for line in out.split("\n"))


class TestUnterminatedFence:
    """An opening fence without a closing fence stays literal."""

    def test_left_literal(self, store: ProtectedStore) -> None:
        source = "```py\nprint(1)"
        assert extract(source, store) == source
        assert len(store) == 0

    def test_later_fence_also_literal(self, store: ProtectedStore) -> None:
        source = "```a\none\n```b\ntwo"
        assert extract(source, store) == source

    def test_indented_lines_still_extracted(self, store: ProtectedStore) -> None:
        out = extract("```\n    code", store)
        first, second = out.split("\n")
        assert first == "```"
        assert is_placeholder_line(second)

    def test_space_in_language_is_not_a_fence(self, store: ProtectedStore) -> None:
        source = "```two words\nx\n```"
        out = extract(source, store)
        # The bare closing line opens a fence of its own, which never closes
        assert out == source


class TestIndentedLines:
    def test_indented_line(self, store: ProtectedStore) -> None:
        out = extract("    x = 1", store)
        assert store.restore(out) == "<pre><code>x = 1</code></pre>"

    def test_each_line_separately(self, store: ProtectedStore) -> None:
        out = extract("    a\n    b", store)
        assert len(store) == 2
        assert store.restore(out) == "<pre><code>a</code></pre>\n<pre><code>b</code></pre>"

    def test_blank_indented_line_untouched(self, store: ProtectedStore) -> None:
        assert extract("    ", store) == "    "
        assert len(store) == 0

    def test_three_spaces_is_not_code(self, store: ProtectedStore) -> None:
        assert extract("   x", store) == "   x"

    def test_extra_indent_kept(self, store: ProtectedStore) -> None:
        out = extract("      deeper", store)
        assert store.restore(out) == "<pre><code>  deeper</code></pre>"


class TestRenderHelpers:
    def test_render_fenced_escapes(self) -> None:
        assert render_fenced("a < b & c", "", RenderConfig()) == (
            "<pre><code>a &lt; b &amp; c</code></pre>"
        )

    def test_render_fenced_keeps_quotes(self) -> None:
        assert render_fenced("say \"hi\"", "", RenderConfig()) == (
            '<pre><code>say "hi"</code></pre>'
        )

    def test_render_indented(self) -> None:
        assert render_indented("    <b>") == "<pre><code>&lt;b&gt;</code></pre>"
