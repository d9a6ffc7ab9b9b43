"""
Tokenizer for DartQL queries.

Turns raw WHERE-clause text into a flat list of tokens terminated by EOF.
"""

import string
from dataclasses import dataclass
from enum import Enum, auto

from dartql.query.errors import DartQLSyntaxError


class TokenType(Enum):
    """Token types for DartQL queries."""

    # Identifiers and literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Comparison operators
    EQUALS = auto()  # =
    NOT_EQUALS = auto()  # !=
    GREATER_THAN = auto()  # >
    GREATER_EQUAL = auto()  # >=
    LESS_THAN = auto()  # <
    LESS_EQUAL = auto()  # <=

    # Logical operators
    AND = auto()
    OR = auto()
    NOT = auto()

    # Keywords
    IN = auto()
    LIKE = auto()
    CONTAINS = auto()
    IS = auto()
    NULL = auto()
    BETWEEN = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # Special
    EOF = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class Token:
    """A token in a DartQL query."""

    type: TokenType
    text: str
    position: int
    length: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.text!r}, {self.position})"


KEYWORDS = {
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "NOT": TokenType.NOT,
    "IN": TokenType.IN,
    "LIKE": TokenType.LIKE,
    "CONTAINS": TokenType.CONTAINS,
    "IS": TokenType.IS,
    "NULL": TokenType.NULL,
    "BETWEEN": TokenType.BETWEEN,
}

TWO_CHAR_OPERATORS = {
    "!=": TokenType.NOT_EQUALS,
    ">=": TokenType.GREATER_EQUAL,
    "<=": TokenType.LESS_EQUAL,
}

ONE_CHAR_OPERATORS = {
    "=": TokenType.EQUALS,
    ">": TokenType.GREATER_THAN,
    "<": TokenType.LESS_THAN,
}

PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\"}

DIGITS = frozenset(string.digits)
IDENTIFIER_START = frozenset(string.ascii_letters + "_")
IDENTIFIER_CHARS = IDENTIFIER_START | DIGITS


class Tokenizer:
    """Tokenizer for DartQL queries."""

    def __init__(self, text: str):
        self.text = text.strip()
        self.pos = 0
        self.tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the entire input."""
        while self.pos < len(self.text):
            self._skip_whitespace()
            if self.pos >= len(self.text):
                break
            self.tokens.append(self._next_token())

        self.tokens.append(Token(TokenType.EOF, "", self.pos, 0))
        return self.tokens

    def _skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _next_token(self) -> Token:
        char = self.text[self.pos]

        if char in ('"', "'"):
            return self._read_string()

        if char in DIGITS:
            return self._read_number()

        if char in "=!<>":
            return self._read_operator()

        if char in PUNCTUATION:
            self.pos += 1
            return Token(PUNCTUATION[char], char, self.pos - 1, 1)

        if char in IDENTIFIER_START:
            return self._read_identifier()

        raise DartQLSyntaxError(f"Unexpected character: '{char}'", self.pos, char)

    def _read_string(self) -> Token:
        """Read a single- or double-quoted string literal, decoding escapes."""
        start = self.pos
        quote = self.text[self.pos]
        self.pos += 1
        chars: list[str] = []

        while self.pos < len(self.text) and self.text[self.pos] != quote:
            char = self.text[self.pos]
            self.pos += 1
            if char == "\\" and self.pos < len(self.text):
                escaped = self.text[self.pos]
                self.pos += 1
                chars.append(ESCAPES.get(escaped, escaped))
            else:
                chars.append(char)

        if self.pos >= len(self.text):
            raise DartQLSyntaxError(
                f"Unterminated string literal starting at position {start}", start, quote
            )

        self.pos += 1  # closing quote
        return Token(TokenType.STRING, "".join(chars), start, self.pos - start)

    def _read_number(self) -> Token:
        """Read an integer or decimal literal."""
        start = self.pos
        while self._peek() in DIGITS:
            self.pos += 1

        # A dot only belongs to the number when a digit follows it
        if self._peek() == "." and self._peek(1) in DIGITS:
            self.pos += 1
            while self._peek() in DIGITS:
                self.pos += 1

        return Token(TokenType.NUMBER, self.text[start : self.pos], start, self.pos - start)

    def _read_operator(self) -> Token:
        start = self.pos
        two_char = self.text[self.pos : self.pos + 2]
        if two_char in TWO_CHAR_OPERATORS:
            self.pos += 2
            return Token(TWO_CHAR_OPERATORS[two_char], two_char, start, 2)

        char = self.text[self.pos]
        if char in ONE_CHAR_OPERATORS:
            self.pos += 1
            return Token(ONE_CHAR_OPERATORS[char], char, start, 1)

        raise DartQLSyntaxError(f"Invalid operator starting with '{char}'", start, char)

    def _read_identifier(self) -> Token:
        """Read an identifier or keyword. Keywords match case-insensitively."""
        start = self.pos
        while self._peek() in IDENTIFIER_CHARS:
            self.pos += 1

        text = self.text[start : self.pos]
        token_type = KEYWORDS.get(text.upper(), TokenType.IDENTIFIER)
        return Token(token_type, text, start, self.pos - start)


def tokenize(text: str) -> list[Token]:
    """Tokenize `text` with a fresh Tokenizer."""
    return Tokenizer(text).tokenize()
