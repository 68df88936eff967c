"""
Unit Tests for Advisory Text Parsing
"""

from benefitscout.insights import extract_section, parse_advisory_text
from benefitscout.insights.parser import split_lines


FULL_TEXT = "1. Save here\n2. Card expiring\n3. Try X\n4. Tip Y"


class TestSplitLines:
    """Test line splitting."""

    def test_drops_blank_lines_and_trims(self):
        assert split_lines("  a \n\n   \n b\r\n") == ["a", "b"]


class TestExtractSection:
    """Test single-section extraction."""

    def test_missing_marker(self):
        assert extract_section(["hello", "world"], "1.") == ""

    def test_continuation_lines_are_joined(self):
        lines = ["1. Use your card", "at the supermarket", "on Tuesdays", "2. Alert"]
        assert extract_section(lines, "1.") == "Use your card at the supermarket on Tuesdays"

    def test_stops_at_any_numbered_line(self):
        lines = ["1. First", "continued", "7. Unrelated item", "more"]
        assert extract_section(lines, "1.") == "First continued"


class TestParseAdvisoryText:
    """Test full parsing in the default mode."""

    def test_empty_text(self):
        record = parse_advisory_text("")
        assert record.opportunities == ""
        assert record.alerts == ""
        assert record.recommendations == ""
        assert record.tips == ""
        assert record.raw == ""

    def test_four_sections(self):
        record = parse_advisory_text(FULL_TEXT)
        assert record.opportunities == "Save here"
        assert record.alerts == "Card expiring"
        assert record.recommendations == "Try X"
        assert record.tips == "Tip Y"

    def test_missing_section_leaves_others_untouched(self):
        text = "1. Save here\n3. Try X\n4. Tip Y"
        record = parse_advisory_text(text)
        assert record.alerts == ""
        assert record.opportunities == "Save here"
        assert record.recommendations == "Try X"
        assert record.tips == "Tip Y"

    def test_raw_is_unmodified(self):
        text = "\n  Intro line\n1. **Opportunity**: spend less \n\n"
        assert parse_advisory_text(text).raw == text

    def test_text_without_markers(self):
        text = "The model answered in free prose only."
        record = parse_advisory_text(text)
        assert record.to_dict() == {
            "opportunities": "",
            "alerts": "",
            "recommendations": "",
            "tips": "",
            "raw": text,
        }

    def test_multiline_sections_with_intro(self):
        text = (
            "Here are your insights:\n\n"
            "1. Opportunity: use the Itaú card at Pão de Açúcar\n"
            "   to earn 5% back.\n\n"
            "2. Alert: 500 points expire on 12/10.\n"
            "3. Recommendation: concentrate fuel on Shell Box.\n"
            "4. Tip: register in Livelo promotions.\n"
        )
        record = parse_advisory_text(text)
        assert record.opportunities == "Opportunity: use the Itaú card at Pão de Açúcar to earn 5% back."
        assert record.alerts == "Alert: 500 points expire on 12/10."
        assert record.tips == "Tip: register in Livelo promotions."

    def test_embedded_marker_is_picked_up_leniently(self):
        """Independent scanning accepts a marker inside a sentence."""
        text = "1. Upgrade to plan 2.0 now\n3. Try X"
        record = parse_advisory_text(text)
        assert record.opportunities == "Upgrade to plan 2.0 now"
        assert record.alerts == "1. Upgrade to plan 0 now"

    def test_none_is_treated_as_empty(self):
        assert parse_advisory_text(None).raw == ""


class TestStrictParsing:
    """Test sequential parsing."""

    def test_four_sections(self):
        record = parse_advisory_text(FULL_TEXT, strict=True)
        assert (record.opportunities, record.alerts, record.recommendations, record.tips) == (
            "Save here", "Card expiring", "Try X", "Tip Y"
        )

    def test_embedded_marker_is_ignored(self):
        text = "1. Upgrade to plan 2.0 now\n3. Try X"
        record = parse_advisory_text(text, strict=True)
        assert record.opportunities == "Upgrade to plan 2.0 now"
        assert record.alerts == ""
        assert record.recommendations == "Try X"

    def test_repeated_marker_keeps_first(self):
        text = "1. First\n2. Alert\n1. Second"
        record = parse_advisory_text(text, strict=True)
        assert record.opportunities == "First"
        assert record.alerts == "Alert"

    def test_unknown_number_closes_section(self):
        text = "4. Tip\nmore tip\n5. Extra\nignored"
        record = parse_advisory_text(text, strict=True)
        assert record.tips == "Tip more tip"

    def test_raw_is_unmodified(self):
        assert parse_advisory_text(FULL_TEXT, strict=True).raw == FULL_TEXT
