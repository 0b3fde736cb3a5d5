"""Tests for defensive text coercion."""

from __future__ import annotations

import logging

import pytest

from memoscope.text.normalize import coerce_text, join_texts, normalize


class TestCoerceText:
    def test_string_is_returned_unchanged(self) -> None:
        assert coerce_text("Hello World", "test") == "Hello World"

    def test_none_becomes_empty(self) -> None:
        assert coerce_text(None, "test") == ""

    def test_number_is_stringified(self) -> None:
        assert coerce_text(42, "test") == "42"

    def test_bytes_are_decoded(self) -> None:
        assert coerce_text("café".encode(), "test") == "café"

    def test_invalid_utf8_does_not_raise(self) -> None:
        assert coerce_text(b"\xff\xfeok", "test").endswith("ok")

    def test_list_is_joined(self) -> None:
        assert coerce_text(["a", 1, None], "test") == "a 1 "

    def test_non_string_input_is_logged_with_context_tag(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="memoscope.text.normalize"):
            coerce_text(3.5, "pain.analyze")
        assert "pain.analyze" in caplog.text
        assert "float" in caplog.text

    def test_string_input_is_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="memoscope.text.normalize"):
            coerce_text("plain", "pain.analyze")
        assert caplog.records == []

    def test_unstringifiable_object_yields_empty(self) -> None:
        class Broken:
            def __str__(self) -> str:
                raise RuntimeError("boom")

        assert coerce_text(Broken(), "test") == ""


class TestNormalize:
    def test_lowercases(self) -> None:
        assert normalize("We Believe EVERYONE", "test") == "we believe everyone"

    def test_never_raises_on_odd_input(self) -> None:
        assert normalize({"a": 1}, "test") == "{'a': 1}"


class TestJoinTexts:
    def test_skips_empty_parts_and_strips(self) -> None:
        assert join_texts(["  one ", None, "", "two"], "test") == "one two"

    def test_all_empty_yields_empty(self) -> None:
        assert join_texts([None, "  "], "test") == ""
