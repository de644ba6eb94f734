"""Tests for release-note relevance highlighting."""

from output.highlight import StyleMode, highlight_body, style_body, style_line
from versioning.models import HighlightedLine


class TestHighlightBody:
    """Line tagging against the identifier set."""

    def test_relevant_and_plain_lines(self):
        lines = highlight_body("fix: renamed azurerm_foo field\nunrelated change", {"azurerm_foo"})

        assert lines == [
            HighlightedLine("fix: renamed azurerm_foo field", relevant=True),
            HighlightedLine("unrelated change", relevant=False),
        ]

    def test_line_count_is_preserved(self):
        body = "## 3.1.0\n\nFEATURES:\n\n* `azurerm_key_vault`: new field\n\n"
        lines = highlight_body(body, ["azurerm_key_vault"])

        assert len(lines) == len(body.split("\n"))
        assert [line.text for line in lines] == body.split("\n")

    def test_empty_lines_are_never_relevant(self):
        lines = highlight_body("a\n\nb", ["a", ""])
        assert [line.relevant for line in lines] == [True, False, False]

    def test_matching_is_case_sensitive(self):
        lines = highlight_body("AZURERM_FOO changed", ["azurerm_foo"])
        assert not lines[0].relevant

    def test_substring_match_has_no_word_boundary(self):
        """Known limitation: a prefix identifier matches longer type names."""
        lines = highlight_body("* `aws_s3_bucket_policy`: fixed diff", ["aws_s3_bucket"])
        assert lines[0].relevant

    def test_carriage_returns_are_kept(self):
        lines = highlight_body("one\r\ntwo", [])
        assert [line.text for line in lines] == ["one\r", "two"]

    def test_empty_body(self):
        assert highlight_body("", ["x"]) == [HighlightedLine("", relevant=False)]


class TestStyle:
    """Presentation markup for each style mode."""

    def test_default_mode_wraps_in_emphasis(self):
        line = HighlightedLine("azurerm_foo fixed", relevant=True)
        assert style_line(line, StyleMode.DEFAULT) == "[bold yellow]azurerm_foo fixed[/]"

    def test_caps_mode_prefixes_and_uppercases(self):
        line = HighlightedLine("azurerm_foo fixed", relevant=True)
        assert style_line(line, StyleMode.CAPS) == ">> AZURERM_FOO FIXED"

    def test_plain_lines_are_unchanged_in_both_modes(self):
        line = HighlightedLine("docs update", relevant=False)
        assert style_line(line, StyleMode.DEFAULT) == "docs update"
        assert style_line(line, StyleMode.CAPS) == "docs update"

    def test_markup_in_notes_is_escaped(self):
        line = HighlightedLine("see [bold] docs", relevant=False)
        assert style_line(line, StyleMode.DEFAULT) == "see \\[bold] docs"

    def test_style_body_joins_lines(self):
        lines = highlight_body("a_type\nother", ["a_type"])
        assert style_body(lines, StyleMode.CAPS) == ">> A_TYPE\nother"

    def test_mode_from_flag(self):
        assert StyleMode.from_flag(True) is StyleMode.CAPS
        assert StyleMode.from_flag(False) is StyleMode.DEFAULT
