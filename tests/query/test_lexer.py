"""Tests for DartQL field validation."""

from dartql.query.lexer import VALID_FIELDS, Lexer
from dartql.query.tokenizer import tokenize


def analyze(text, **kwargs):
    return Lexer(tokenize(text), **kwargs).analyze()


class TestLexerFields:
    """Test field name validation."""

    def test_valid_query_has_no_errors(self):
        result = analyze("status = 'Todo' AND priority >= 3")
        assert result.errors == []
        assert result.fields == {"status", "priority"}

    def test_tokens_are_passed_through(self):
        tokens = tokenize("status = 'Todo'")
        result = Lexer(tokens).analyze()
        assert result.tokens is tokens

    def test_field_names_are_case_insensitive(self):
        result = analyze("STATUS = 'Todo' AND Due_At < '2026-01-01'")
        assert result.errors == []
        assert result.fields == {"status", "due_at"}

    def test_relationship_fields_are_valid(self):
        result = analyze("blocker_ids CONTAINS 'task-1' OR subtask_ids IS NOT NULL")
        assert result.errors == []

    def test_typo_suggests_closest_field(self):
        """Test that a near miss gets a did-you-mean hint."""
        result = analyze("priorty = 1")
        assert len(result.errors) == 1
        assert "Unknown field: 'priorty'" in result.errors[0]
        assert "Did you mean 'priority'?" in result.errors[0]
        assert "(at position 0)" in result.errors[0]

    def test_distant_name_lists_valid_fields(self):
        result = analyze("zzzzz = 1")
        assert len(result.errors) == 1
        message = result.errors[0]
        assert "Did you mean" not in message
        assert "Valid fields:" in message
        for field_name in VALID_FIELDS:
            assert field_name in message

    def test_all_unknown_fields_are_reported(self):
        """Test that validation does not stop at the first bad field."""
        result = analyze("statsu = 'a' AND priorty = 1")
        assert len(result.errors) == 2
        assert "Did you mean 'status'?" in result.errors[0]
        assert "Did you mean 'priority'?" in result.errors[1]
        assert "(at position 17)" in result.errors[1]

    def test_unknown_fields_still_recorded(self):
        result = analyze("priorty = 1")
        assert result.fields == {"priorty"}

    def test_keywords_are_not_fields(self):
        result = analyze("status IN ('a') AND NOT title LIKE 'x%' OR tags CONTAINS 'y'")
        assert result.errors == []
        assert result.fields == {"status", "title", "tags"}

    def test_custom_vocabulary(self):
        assert analyze("owner = 'me'", valid_fields=["owner"]).errors == []
        errors = analyze("status = 'Todo'", valid_fields=["owner"]).errors
        assert errors == ["Unknown field: 'status'. Valid fields: owner (at position 0)"]

    def test_threshold_controls_suggestions(self):
        result = analyze("priorty = 1", threshold=0)
        assert "Did you mean" not in result.errors[0]


class TestLexerIsUsage:
    """Test IS keyword validation."""

    def test_is_null_is_valid(self):
        assert analyze("assignee IS NULL").errors == []

    def test_is_not_null_is_valid(self):
        assert analyze("assignee IS NOT NULL").errors == []

    def test_is_followed_by_value(self):
        result = analyze("status IS 'x'")
        assert result.errors == [
            "IS keyword must be followed by NULL or NOT NULL at position 7"
        ]

    def test_is_at_end_of_input(self):
        result = analyze("status IS")
        assert len(result.errors) == 1
        assert "IS keyword must be followed by NULL or NOT NULL" in result.errors[0]

    def test_field_and_is_errors_combined(self):
        result = analyze("priorty IS 1")
        assert len(result.errors) == 2
