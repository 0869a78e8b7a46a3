"""Test template filename and content parsing"""

import pytest
from pydantic import ValidationError

from jotr.templates import (
    Prompt,
    TemplateError,
    TemplateErrorKind,
    Variable,
    parse_filename,
    parse_path_directive,
    parse_prompts,
    parse_template,
    parse_variables,
)

MEETING_TEMPLATE = """<!-- Path: ~/Notes/Meetings/{$date}-{$topic}.md -->
# Meeting: {$topic}

topic = <prompt>Topic?</prompt>

## Notes
<prompt>What was discussed?</prompt>
"""


class TestParseFilename:
    """Test the {priority}-{category}-{name}.md grammar"""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("1-1-meeting.md", (1, "1", "meeting")),
            ("10-work-weekly-review.md", (10, "work", "weekly-review")),
            ("0-journal-daily-log-entry.md", (0, "journal", "daily-log-entry")),
            ("2--untitled.md", (2, "", "untitled")),
            ("3-misc-notes", (3, "misc", "notes")),
        ],
    )
    def test_valid_filenames(self, filename, expected) -> None:
        """Test valid filenames split into priority, category and name"""
        assert parse_filename(filename) == expected

    @pytest.mark.parametrize(
        "filename",
        ["meeting.md", "1-meeting.md", "invalid.md", "a-b-c.md", " 1-b-c.md"],
    )
    def test_invalid_filenames(self, filename) -> None:
        """Test short or non-numeric filenames are rejected"""
        with pytest.raises(TemplateError) as exc_info:
            parse_filename(filename)

        assert exc_info.value.is_kind(TemplateErrorKind.INVALID_FILENAME)

    def test_too_few_segments_names_the_file(self) -> None:
        """Test the error message carries the filename"""
        with pytest.raises(TemplateError, match="1-meeting.md"):
            parse_filename("1-meeting.md")


class TestParsePathDirective:
    """Test <!-- Path: ... --> extraction"""

    def test_directive_found(self) -> None:
        content = "# Title\n<!-- Path: ~/Notes/{$date}.md -->\nbody"
        assert parse_path_directive(content) == "~/Notes/{$date}.md"

    def test_indented_directive(self) -> None:
        content = "   <!-- Path:   journal/{$date}.md   -->   \n"
        assert parse_path_directive(content) == "journal/{$date}.md"

    def test_first_directive_wins(self) -> None:
        content = "<!-- Path: first.md -->\n<!-- Path: second.md -->"
        assert parse_path_directive(content) == "first.md"

    def test_missing_closing_marker(self) -> None:
        assert parse_path_directive("<!-- Path: notes/x.md") == "notes/x.md"

    def test_absent_directive(self) -> None:
        assert parse_path_directive("# Just a heading\n") == ""

    @pytest.mark.parametrize("line", ["<!-- Path: -->", "<!-- Path:-->", "<!-- Path:"])
    def test_empty_directive(self, line) -> None:
        """Test an empty path is a syntax error"""
        with pytest.raises(TemplateError) as exc_info:
            parse_path_directive(f"# Title\n{line}\n")

        assert exc_info.value.is_kind(TemplateErrorKind.INVALID_PATH_SYNTAX)


class TestParseVariables:
    """Test name = <prompt>...</prompt> declarations"""

    def test_document_order_preserved(self) -> None:
        content = (
            "zeta = <prompt>Last letter?</prompt>\n"
            "text in between\n"
            "alpha=<prompt>First letter?</prompt>\n"
            "mid   =   <prompt>Middle?</prompt>\n"
        )

        assert parse_variables(content) == [
            Variable(name="zeta", prompt="Last letter?"),
            Variable(name="alpha", prompt="First letter?"),
            Variable(name="mid", prompt="Middle?"),
        ]

    def test_declaration_must_start_line(self) -> None:
        """Test declarations are anchored at the start of a line"""
        content = "  indented = <prompt>No?</prompt>\nsee name = <prompt>No</prompt>"
        assert parse_variables(content) == []

    def test_duplicate_name_conflicts(self) -> None:
        content = "topic = <prompt>A?</prompt>\ntopic = <prompt>B?</prompt>\n"

        with pytest.raises(TemplateError) as exc_info:
            parse_variables(content)

        assert exc_info.value.is_kind(TemplateErrorKind.VARIABLE_CONFLICT)
        assert exc_info.value.detail == "topic"

    def test_no_declarations(self) -> None:
        assert parse_variables("plain <prompt>free?</prompt> text") == []


class TestParsePrompts:
    """Test positional <prompt> extraction"""

    def test_textual_order_across_lines(self) -> None:
        content = (
            "<prompt>One?</prompt> and <prompt>Two?</prompt>\n<prompt>Three?</prompt>"
        )

        assert parse_prompts(content) == [
            Prompt(question="One?"),
            Prompt(question="Two?"),
            Prompt(question="Three?"),
        ]

    def test_declaration_prompt_counted(self) -> None:
        """Test a declaration's prompt is also a positional prompt"""
        content = "name = <prompt>Name?</prompt>\n<prompt>Free?</prompt>"

        assert [p.question for p in parse_prompts(content)] == ["Name?", "Free?"]

    def test_prompt_does_not_span_lines(self) -> None:
        assert parse_prompts("<prompt>broken\n</prompt>") == []

    def test_empty_question(self) -> None:
        assert parse_prompts("<prompt></prompt>") == [Prompt(question="")]


class TestParseTemplate:
    """Test full template parsing"""

    def test_meeting_scenario(self) -> None:
        template = parse_template("/templates/1-1-meeting.md", MEETING_TEMPLATE)

        assert template.filename == "1-1-meeting.md"
        assert template.priority == 1
        assert template.category == "1"
        assert template.name == "meeting"
        assert template.body == MEETING_TEMPLATE
        assert template.target_path_template == "~/Notes/Meetings/{$date}-{$topic}.md"
        assert template.variables == [Variable(name="topic", prompt="Topic?")]
        assert [p.question for p in template.prompts] == [
            "Topic?",
            "What was discussed?",
        ]
        assert template.built_ins == {}
        assert template.has_target_path
        assert template.display_name == "1/meeting"

    def test_template_without_path(self) -> None:
        template = parse_template("2-journal-entry.md", "# Entry\n")

        assert template.target_path_template == ""
        assert not template.has_target_path

    def test_variable_conflict_carries_filename(self) -> None:
        content = "a = <prompt>1</prompt>\na = <prompt>2</prompt>"

        with pytest.raises(TemplateError) as exc_info:
            parse_template("1-x-dup.md", content)

        error = exc_info.value
        assert error.is_kind(TemplateErrorKind.VARIABLE_CONFLICT)
        assert error.template == "1-x-dup.md"
        assert str(error) == (
            "template 1-x-dup.md: variable defined multiple times: a"
        )

    def test_filename_error_is_not_wrapped(self) -> None:
        with pytest.raises(TemplateError) as exc_info:
            parse_template("bad.md", "# Bad")

        assert exc_info.value.is_kind(TemplateErrorKind.INVALID_FILENAME)
        assert exc_info.value.template is None

    def test_path_error_is_not_wrapped(self) -> None:
        with pytest.raises(TemplateError) as exc_info:
            parse_template("1-a-b.md", "<!-- Path: -->")

        assert exc_info.value.is_kind(TemplateErrorKind.INVALID_PATH_SYNTAX)
        assert exc_info.value.template is None

    def test_template_fields_are_frozen(self) -> None:
        template = parse_template("1-a-b.md", "# B")

        with pytest.raises(ValidationError):
            template.name = "other"
