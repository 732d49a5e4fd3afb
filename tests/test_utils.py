"""Tests for notemark.utils helpers."""

import logging

import pytest

from notemark.config import RenderConfig
from notemark.utils import get_logger, hash_str, set_log_level
from notemark.utils.hashing import hash_fields


class TestGetLogger:
    def test_prefixes_name(self) -> None:
        assert get_logger("mymodule").name == "notemark.mymodule"

    def test_package_names_unchanged(self) -> None:
        assert get_logger("notemark.renderer").name == "notemark.renderer"
        assert get_logger("notemark").name == "notemark"

    def test_returns_stdlib_logger(self) -> None:
        assert isinstance(get_logger("x"), logging.Logger)

    def test_root_has_null_handler(self) -> None:
        handlers = logging.getLogger("notemark").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestSetLogLevel:
    @pytest.fixture(autouse=True)
    def restore_level(self):
        root = logging.getLogger("notemark")
        previous = root.level
        yield
        root.setLevel(previous)

    def test_sets_root_level(self) -> None:
        root = set_log_level(logging.DEBUG)
        assert root.name == "notemark"
        assert get_logger("renderer").getEffectiveLevel() == logging.DEBUG

    def test_accepts_level_name(self) -> None:
        assert set_log_level("WARNING").level == logging.WARNING


class TestHashStr:
    def test_sha256(self) -> None:
        assert hash_str("hello", truncate=16) == "2cf24dba5fb0a30e"

    def test_full_length(self) -> None:
        assert len(hash_str("hello")) == 64

    def test_md5(self) -> None:
        assert hash_str("hello", algorithm="md5") == "5d41402abc4b2a76b9719d911017c592"


class TestDebugLogging:
    def test_unterminated_fence_logged(self, caplog) -> None:
        from notemark import render

        with caplog.at_level(logging.DEBUG, logger="notemark"):
            render("```py\nx")
        assert any("Unterminated code fence" in r.getMessage() for r in caplog.records)

    def test_stale_preview_logged(self, caplog) -> None:
        from notemark import PreviewSession

        session = PreviewSession()
        preview = session.render(session.begin(), "x")
        session.publish(preview)
        with caplog.at_level(logging.DEBUG, logger="notemark"):
            session.publish(preview)
        assert any("stale preview" in r.getMessage() for r in caplog.records)


class TestHashFields:
    def test_equal_configs_hash_equal(self) -> None:
        assert hash_fields(RenderConfig()) == hash_fields(RenderConfig())

    def test_field_change_changes_hash(self) -> None:
        assert hash_fields(RenderConfig()) != hash_fields(RenderConfig(placeholder="x"))

    def test_truncate(self) -> None:
        assert len(hash_fields(RenderConfig(), truncate=12)) == 12
