"""Tests for pattern specification parsing."""

import re

import pytest
from structlog.testing import capture_logs

from tabextract.patterns import (
    DEFAULT_FIELD,
    PatternEntry,
    compile_patterns,
    parse_pattern_spec,
)


class TestParsePatternSpec:
    """Test parse_pattern_spec function."""

    def test_parse_simple_spec(self):
        """Test each line becomes one declaration."""
        entries = parse_pattern_spec("name: (\\w+)\nage: (\\d+)")

        assert entries == [
            PatternEntry(field_name="name", source="(\\w+)"),
            PatternEntry(field_name="age", source="(\\d+)"),
        ]

    def test_split_on_first_colon_only(self):
        """Test colons inside the regex body are kept."""
        entries = parse_pattern_spec("time: (\\d{2}:\\d{2})")

        assert len(entries) == 1
        assert entries[0].field_name == "time"
        assert entries[0].source == "(\\d{2}:\\d{2})"

    def test_whitespace_trimmed(self):
        """Test name and pattern are trimmed."""
        entries = parse_pattern_spec("   price   :   \\$(\\d+)   ")

        assert entries[0].field_name == "price"
        assert entries[0].source == "\\$(\\d+)"

    @pytest.mark.parametrize("line", [
        "no colon here",
        ": (\\d+)",
        "name:",
        "name:    ",
        "   ",
        "",
    ])
    def test_malformed_lines_skipped(self, line):
        """Test malformed lines are dropped without error."""
        assert parse_pattern_spec(line) == []

    def test_none_spec(self):
        """Test a missing specification parses to nothing."""
        assert parse_pattern_spec(None) == []


class TestCompilePatterns:
    """Test compile_patterns function."""

    def test_compiles_valid_patterns(self):
        """Test map holds exactly the valid names."""
        pattern_set = compile_patterns("name: (\\w+)\nage: (\\d+)")

        assert list(pattern_set.patterns) == ["name", "age"]
        assert DEFAULT_FIELD not in pattern_set.patterns
        assert pattern_set.used_default is False
        assert pattern_set.warnings == []

    def test_case_insensitive(self):
        """Test compiled patterns ignore case."""
        pattern_set = compile_patterns("status: (paid)")

        regex = pattern_set.patterns["status"]
        assert regex.flags & re.IGNORECASE
        assert regex.search("Invoice PAID in full").group(1) == "PAID"

    def test_invalid_regex_dropped_with_warning(self):
        """Test compile failures are reported, not raised."""
        pattern_set = compile_patterns("bad: ([unclosed\ngood: (\\d+)")

        assert list(pattern_set.patterns) == ["good"]
        assert len(pattern_set.warnings) == 1
        assert "bad" in pattern_set.warnings[0]
        assert pattern_set.used_default is False

    def test_invalid_regex_logged(self):
        """Test compile failures emit an invalid_pattern warning."""
        with capture_logs() as logs:
            compile_patterns("bad: ([unclosed\ngood: (\\d+)")

        events = [log for log in logs if log["event"] == "invalid_pattern"]
        assert len(events) == 1
        assert events[0]["log_level"] == "warning"
        assert events[0]["field"] == "bad"
        assert events[0]["pattern"] == "([unclosed"
        assert events[0]["service"] == "extractor"

    def test_default_for_empty_spec(self):
        """Test empty specification installs the text fallback."""
        pattern_set = compile_patterns("")

        assert list(pattern_set.patterns) == [DEFAULT_FIELD]
        assert pattern_set.used_default is True
        match = pattern_set.patterns[DEFAULT_FIELD].search("any line at all")
        assert match.group(1) == "any line at all"

    def test_default_when_all_malformed(self):
        """Test a prose prompt with no declarations falls back to text."""
        pattern_set = compile_patterns("Extract item, quantity, and price for each line item.")

        assert list(pattern_set.patterns) == [DEFAULT_FIELD]

    def test_default_when_all_invalid(self):
        """Test fallback still applies when every regex fails."""
        pattern_set = compile_patterns("a: (\nb: [")

        assert list(pattern_set.patterns) == [DEFAULT_FIELD]
        assert len(pattern_set.warnings) == 2

    def test_last_definition_wins(self):
        """Test duplicate names keep the later regex."""
        pattern_set = compile_patterns("id: (\\d+)\nother: (x)\nid: ([A-Z]+)")

        assert list(pattern_set.patterns) == ["id", "other"]
        assert pattern_set.patterns["id"].pattern == "([A-Z]+)"

    def test_fresh_map_per_call(self):
        """Test compiled maps are not shared between calls."""
        first = compile_patterns("a: (\\d+)")
        second = compile_patterns("a: (\\d+)")

        assert first.patterns is not second.patterns

    def test_to_dict(self):
        """Test serialization of a pattern set."""
        data = compile_patterns("a: (\\d+)\nb: (").to_dict()

        assert data["patterns"] == {"a": "(\\d+)"}
        assert data["used_default"] is False
        assert len(data["warnings"]) == 1
