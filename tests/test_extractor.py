"""
Tests for aerox/services/features/extractor.py

Covers field extraction from raw command source text, including the
bounded scan window and inputs that must not raise.
"""

from aerox.services.features import SCAN_LIMIT
from aerox.services.features.extractor import (
    extract_aliases,
    extract_enabled_slash,
    extract_number_field,
    extract_string_field,
)


# =============================================================================
# extract_string_field() Tests
# =============================================================================

class TestExtractStringField:
    """Tests for extract_string_field function."""

    def test_single_quotes(self):
        assert extract_string_field("name: 'ping',", "name") == "ping"

    def test_double_quotes(self):
        assert extract_string_field('name: "ping",', "name") == "ping"

    def test_backticks(self):
        assert extract_string_field("name: `ping`,", "name") == "ping"

    def test_whitespace_around_colon(self):
        assert extract_string_field("name   :\n  'ping'", "name") == "ping"

    def test_multiline_value_is_collapsed(self):
        text = "description: `Play a song\n        from a   link`,"
        assert extract_string_field(text, "description") == "Play a song from a link"

    def test_value_is_trimmed(self):
        assert extract_string_field("usage: '  play <q>  '", "usage") == "play <q>"

    def test_closing_quote_must_match_opening(self):
        text = "description: \"It's loud\","
        assert extract_string_field(text, "description") == "It's loud"

    def test_first_occurrence_wins(self):
        text = "name: 'first',\nname: 'second',"
        assert extract_string_field(text, "name") == "first"

    def test_missing_field(self):
        assert extract_string_field("description: 'x'", "usage") is None

    def test_unquoted_value_not_matched(self):
        assert extract_string_field("name: someVariable,", "name") is None

    def test_empty_value(self):
        assert extract_string_field("usage: '',", "usage") == ""

    def test_field_name_is_escaped(self):
        assert extract_string_field("a.b: 'x'", "a.b") == "x"
        assert extract_string_field("axb: 'x'", "a.b") is None

    def test_outside_scan_limit_ignored(self):
        text = " " * SCAN_LIMIT + "name: 'late'"
        assert extract_string_field(text, "name") is None

    def test_inside_scan_limit_found(self):
        text = " " * (SCAN_LIMIT - 20) + "name: 'ok'"
        assert extract_string_field(text, "name") == "ok"

    def test_empty_text(self):
        assert extract_string_field("", "name") is None

    def test_binary_noise_does_not_raise(self):
        text = "\x00�� name: \x7f"
        assert extract_string_field(text, "name") is None


# =============================================================================
# extract_aliases() Tests
# =============================================================================

class TestExtractAliases:
    """Tests for extract_aliases function."""

    def test_mixed_quotes_in_order(self):
        assert extract_aliases("aliases: [\"a\", 'b', `c`]") == ("a", "b", "c")

    def test_multiline_list(self):
        text = "aliases: [\n    'p',\n    'pl',\n],"
        assert extract_aliases(text) == ("p", "pl")

    def test_empty_list(self):
        assert extract_aliases("aliases: [],") == ()

    def test_missing_list(self):
        assert extract_aliases("name: 'ping'") == ()

    def test_unquoted_entries_ignored(self):
        assert extract_aliases("aliases: [FOO, 'bar']") == ("bar",)

    def test_returns_tuple(self):
        assert isinstance(extract_aliases("aliases: ['x']"), tuple)


# =============================================================================
# extract_enabled_slash() Tests
# =============================================================================

class TestExtractEnabledSlash:
    """Tests for extract_enabled_slash function."""

    def test_true(self):
        assert extract_enabled_slash("enabledSlash: true,") is True

    def test_false(self):
        assert extract_enabled_slash("enabledSlash:false") is False

    def test_absent_is_none(self):
        assert extract_enabled_slash("name: 'ping'") is None

    def test_non_literal_is_none(self):
        assert extract_enabled_slash("enabledSlash: isEnabled()") is None


# =============================================================================
# extract_number_field() Tests
# =============================================================================

class TestExtractNumberField:
    """Tests for extract_number_field function."""

    def test_integer(self):
        assert extract_number_field("cooldown: 5,", "cooldown") == 5

    def test_zero(self):
        assert extract_number_field("cooldown:0", "cooldown") == 0

    def test_quoted_number_not_matched(self):
        assert extract_number_field("cooldown: '5'", "cooldown") is None

    def test_missing(self):
        assert extract_number_field("name: 'x'", "cooldown") is None
