"""
Semantic validation of a DartQL token stream.

Checks every identifier against the field vocabulary and reports all unknown
names in one pass, with "did you mean" suggestions for near misses. No AST is
built here.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field as dataclass_field

from dartql.fuzzy import DEFAULT_THRESHOLD, find_closest
from dartql.query.tokenizer import Token, TokenType

VALID_FIELDS: tuple[str, ...] = (
    "status",
    "priority",
    "size",
    "title",
    "description",
    "assignee",
    "dartboard",
    "tags",
    "created_at",
    "updated_at",
    "due_at",
    "start_at",
    "completed_at",
    "parent_task",
    "id",
    "dart_id",
    # Relationship fields
    "subtask_ids",
    "blocker_ids",
    "blocking_ids",
    "duplicate_ids",
    "related_ids",
)


@dataclass
class LexerResult:
    """Outcome of validating a token stream."""

    tokens: list[Token]
    errors: list[str] = dataclass_field(default_factory=list)
    fields: set[str] = dataclass_field(default_factory=set)


class Lexer:
    """Validates field names and IS usage in a token stream."""

    def __init__(
        self,
        tokens: list[Token],
        valid_fields: Sequence[str] | None = None,
        threshold: int = DEFAULT_THRESHOLD,
    ):
        self.tokens = tokens
        self.valid_fields = tuple(valid_fields) if valid_fields is not None else VALID_FIELDS
        self.threshold = threshold
        self.errors: list[str] = []
        self.fields: set[str] = set()

    def analyze(self) -> LexerResult:
        """Validate the whole stream, collecting every error."""
        self.errors = []
        self.fields = set()

        for index, token in enumerate(self.tokens):
            if token.type == TokenType.IDENTIFIER:
                self._validate_field_name(token)
            elif token.type == TokenType.IS:
                following = self.tokens[index + 1] if index + 1 < len(self.tokens) else None
                if following is None or following.type not in (TokenType.NULL, TokenType.NOT):
                    self.errors.append(
                        f"IS keyword must be followed by NULL or NOT NULL at position {token.position}"
                    )

        return LexerResult(tokens=self.tokens, errors=self.errors, fields=self.fields)

    def _validate_field_name(self, token: Token):
        field_name = token.text.lower()
        self.fields.add(field_name)

        if field_name in self.valid_fields:
            return

        suggestion = find_closest(field_name, self.valid_fields, self.threshold)
        if suggestion:
            self.errors.append(
                f"Unknown field: '{token.text}'. Did you mean '{suggestion}'? "
                f"(at position {token.position})"
            )
        else:
            self.errors.append(
                f"Unknown field: '{token.text}'. Valid fields: {', '.join(self.valid_fields)} "
                f"(at position {token.position})"
            )
