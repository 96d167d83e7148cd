"""Tests for tag parsing and field truncation."""
from app.constants import Tag
from app.services.normalization import normalize_tags, parse_tag, truncate


class TestParseTag:
    def test_case_insensitive(self):
        assert parse_tag("broken_link") == Tag.BROKEN_LINK
        assert parse_tag(" Slow_Loading ") == Tag.SLOW_LOADING

    def test_unknown_values(self):
        assert parse_tag("NOT_A_TAG") is None
        assert parse_tag("") is None
        assert parse_tag(None) is None


class TestNormalizeTags:
    def test_drops_unknown_and_keeps_order(self):
        assert normalize_tags(["login_issue", "nope", "BLANK_SCREEN"]) == ["LOGIN_ISSUE", "BLANK_SCREEN"]

    def test_drops_repeats(self):
        assert normalize_tags(["MOBILE_VIEW", "mobile_view", "MOBILE_VIEW"]) == ["MOBILE_VIEW"]

    def test_caps_after_filtering(self):
        values = ["junk"] * 5 + [tag.value for tag in Tag]
        result = normalize_tags(values)
        assert result == [tag.value for tag in Tag][:10]

    def test_none_and_empty(self):
        assert normalize_tags(None) is None
        assert normalize_tags([]) == []


class TestTruncate:
    def test_short_values_untouched(self):
        assert truncate("abc", 5) == "abc"
        assert truncate(None, 5) is None

    def test_long_values_cut(self):
        assert truncate("abcdefgh", 5) == "abcde"
