"""Tests for the content-addressed render cache."""

import pytest

from notemark import DictRenderCache, Markdown, RenderConfig, render
from notemark.cache import hash_config, hash_content


class TestDictRenderCache:
    def test_get_miss(self) -> None:
        cache = DictRenderCache()
        assert cache.get("c", "k") is None
        assert cache.misses == 1

    def test_put_then_get(self) -> None:
        cache = DictRenderCache()
        cache.put("c", "k", "<p>x</p>")
        assert cache.get("c", "k") == "<p>x</p>"
        assert cache.hits == 1
        assert len(cache) == 1

    def test_empty_string_is_cached(self) -> None:
        cache = DictRenderCache()
        cache.put("c", "k", "")
        assert cache.get("c", "k") == ""

    def test_lru_eviction(self) -> None:
        cache = DictRenderCache(maxsize=2)
        cache.put("a", "k", "A")
        cache.put("b", "k", "B")
        cache.get("a", "k")
        cache.put("c", "k", "C")
        assert cache.get("b", "k") is None
        assert cache.get("a", "k") == "A"
        assert cache.get("c", "k") == "C"

    def test_unbounded(self) -> None:
        cache = DictRenderCache(maxsize=None)
        for i in range(500):
            cache.put(str(i), "k", "x")
        assert len(cache) == 500

    @pytest.mark.parametrize("maxsize", [0, -1])
    def test_invalid_maxsize(self, maxsize: int) -> None:
        with pytest.raises(ValueError, match="maxsize"):
            DictRenderCache(maxsize=maxsize)

    def test_clear(self) -> None:
        cache = DictRenderCache()
        cache.put("a", "k", "A")
        cache.clear()
        assert len(cache) == 0


class TestHashing:
    def test_content_hash_stable(self) -> None:
        assert hash_content("# a") == hash_content("# a")
        assert hash_content("# a") != hash_content("# b")

    def test_config_hash_distinguishes_fields(self) -> None:
        base = hash_config(RenderConfig())
        assert base == hash_config(RenderConfig())
        assert base != hash_config(RenderConfig(link_target=None))
        assert base != hash_config(RenderConfig(strikethrough_enabled=False))
        assert base != hash_config(RenderConfig(placeholder="x"))


class TestCachedRendering:
    def test_second_render_is_hit(self) -> None:
        cache = DictRenderCache()
        render("**x**", cache=cache)
        render("**x**", cache=cache)
        assert cache.misses == 1
        assert cache.hits == 1

    def test_config_is_part_of_key(self) -> None:
        cache = DictRenderCache()
        with_target = render("[a](b)", cache=cache)
        without = render("[a](b)", config=RenderConfig(link_target=None), cache=cache)
        assert with_target != without
        assert len(cache) == 2

    def test_markdown_instances_share_cache_safely(self) -> None:
        cache = DictRenderCache()
        assert Markdown(strikethrough=True)("~~a~~", cache=cache) == "<p><del>a</del></p>"
        assert Markdown(strikethrough=False)("~~a~~", cache=cache) == "<p>~~a~~</p>"
