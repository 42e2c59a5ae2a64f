"""Unit tests for request sanitization helpers.

Run with: pytest tests/unit/api/test_sanitization.py -v
"""

import pytest

from leadassign.api.sanitization import (
    sanitize_email,
    sanitize_for_sql_like,
    sanitize_html,
    sanitize_phone,
    sanitize_string,
)


class TestSanitizeString:
    """Tests for free-text sanitization."""

    def test_strips_whitespace_and_null_bytes(self):
        assert sanitize_string("  hello\x00 world  ") == "hello world"

    def test_removes_angle_brackets(self):
        assert sanitize_string("<script>alert(1)</script>") == "scriptalert(1)/script"

    def test_removes_javascript_protocol(self):
        assert sanitize_string("JavaScript:alert(1)") == "alert(1)"

    def test_removes_event_handlers(self):
        assert sanitize_string("img onerror=boom") == "img boom"

    def test_truncates(self):
        assert sanitize_string("abcdef", max_length=3) == "abc"

    def test_empty_passthrough(self):
        assert sanitize_string("") == ""


class TestSanitizeHtml:
    def test_escapes_entities(self):
        assert sanitize_html('Tom & "Jerry"') == "Tom &amp; &quot;Jerry&quot;"


class TestSanitizeEmail:
    """Tests for email normalization."""

    def test_lowercases_and_trims(self):
        assert sanitize_email("  Dana@Acme.IO ") == "dana@acme.io"

    @pytest.mark.parametrize("value", ["", "dana", "dana@acme", "da na@acme.io", "@acme.io"])
    def test_invalid(self, value):
        assert sanitize_email(value) is None


class TestSanitizePhone:
    """Tests for phone normalization."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("+1 (555) 010-2030", "+15550102030"),
            ("555 0102", "5550102"),
            ("+44 20 7946 0958", "+442079460958"),
        ],
    )
    def test_valid(self, value, expected):
        assert sanitize_phone(value) == expected

    @pytest.mark.parametrize("value", ["", "0800 123", "ext. 12", "+"])
    def test_invalid(self, value):
        assert sanitize_phone(value) is None


class TestSanitizeForSqlLike:
    def test_escapes_wildcards(self):
        assert sanitize_for_sql_like("50%_off\\") == "50\\%\\_off\\\\"

    def test_plain_text_unchanged(self):
        assert sanitize_for_sql_like("acme") == "acme"
