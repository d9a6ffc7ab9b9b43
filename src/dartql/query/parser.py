"""
Parser for DartQL queries.

Recursive descent over the token stream. Precedence, lowest first:
OR, AND, NOT, then a parenthesized group or a single comparison.
"""

from typing import Any

from dartql.query.ast import (
    Comparison,
    ComparisonOperator,
    Expression,
    Group,
    Logical,
    LogicalOperator,
    ParseResult,
    empty_ast,
)
from dartql.query.errors import DartQLSyntaxError
from dartql.query.tokenizer import Token, TokenType

BINARY_OPERATORS = {
    TokenType.EQUALS: ComparisonOperator.EQ,
    TokenType.NOT_EQUALS: ComparisonOperator.NEQ,
    TokenType.GREATER_THAN: ComparisonOperator.GT,
    TokenType.GREATER_EQUAL: ComparisonOperator.GTE,
    TokenType.LESS_THAN: ComparisonOperator.LT,
    TokenType.LESS_EQUAL: ComparisonOperator.LTE,
    TokenType.LIKE: ComparisonOperator.LIKE,
    TokenType.CONTAINS: ComparisonOperator.CONTAINS,
}


class Parser:
    """Parser for DartQL queries."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0
        self.fields: set[str] = set()

    def parse(self) -> ParseResult:
        """Parse the token stream into an AST.

        Never raises: syntax errors are reported in `ParseResult.errors`
        together with the empty AST.
        """
        self.pos = 0
        self.fields = set()

        if not self.tokens or self.tokens[0].type == TokenType.EOF:
            return ParseResult(ast=empty_ast(), fields=set(), errors=["Empty query"])

        try:
            ast = self._parse_expression()
        except DartQLSyntaxError as e:
            return ParseResult(ast=empty_ast(), fields=self.fields, errors=[str(e)])

        errors = []
        if not self._is_at_end():
            token = self._current()
            errors.append(f"Unexpected token: '{token.text}' at position {token.position}")

        return ParseResult(ast=ast, fields=self.fields, errors=errors)

    def _parse_expression(self) -> Expression:
        """Parse OR expression (lowest precedence)."""
        left = self._parse_and_expression()

        while self._check(TokenType.OR):
            self._advance()
            right = self._parse_and_expression()
            left = Logical(LogicalOperator.OR, left, right)

        return left

    def _parse_and_expression(self) -> Expression:
        """Parse AND expression."""
        left = self._parse_not_expression()

        while self._check(TokenType.AND):
            self._advance()
            right = self._parse_not_expression()
            left = Logical(LogicalOperator.AND, left, right)

        return left

    def _parse_not_expression(self) -> Expression:
        """Parse NOT expression (binds tighter than AND)."""
        if self._check(TokenType.NOT):
            self._advance()

            if self._check(TokenType.IN):
                # NOT IN is a comparison operator, not a negation
                self.pos -= 1
                return self._parse_primary()

            operand = self._parse_not_expression()
            return Logical(LogicalOperator.NOT, right=operand)

        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        """Parse a parenthesized group or a comparison."""
        if self._check(TokenType.LPAREN):
            self._advance()
            inner = self._parse_expression()
            self._expect(TokenType.RPAREN, "Expected closing parenthesis")
            return Group(inner)

        return self._parse_comparison()

    def _parse_comparison(self) -> Comparison:
        """Parse `field <operator> value` and its keyword forms."""
        field_token = self._expect(TokenType.IDENTIFIER, "Expected field name")
        field = field_token.text.lower()
        self.fields.add(field)

        if self._check(TokenType.IS):
            self._advance()
            negated = self._check(TokenType.NOT)
            if negated:
                self._advance()
            self._expect(TokenType.NULL, "Expected NULL after IS or IS NOT")
            operator = ComparisonOperator.IS_NOT_NULL if negated else ComparisonOperator.IS_NULL
            return Comparison(field, operator, None)

        if self._check(TokenType.NOT) and self._peek().type == TokenType.IN:
            self._advance()
            self._advance()
            return Comparison(field, ComparisonOperator.NOT_IN, self._parse_value_list())

        if self._check(TokenType.IN):
            self._advance()
            return Comparison(field, ComparisonOperator.IN, self._parse_value_list())

        if self._check(TokenType.BETWEEN):
            self._advance()
            low = self._parse_value()
            self._expect(TokenType.AND, "Expected AND in BETWEEN clause")
            high = self._parse_value()
            return Comparison(field, ComparisonOperator.BETWEEN, (low, high))

        operator = self._parse_operator()
        return Comparison(field, operator, self._parse_value())

    def _parse_operator(self) -> ComparisonOperator:
        token = self._current()
        operator = BINARY_OPERATORS.get(token.type)
        if operator is None:
            raise self._error("Expected comparison operator", token)
        self._advance()
        return operator

    def _parse_value(self) -> Any:
        """Parse a string, number or NULL literal."""
        token = self._current()

        if token.type == TokenType.STRING:
            self._advance()
            return token.text

        if token.type == TokenType.NUMBER:
            self._advance()
            try:
                if "." in token.text:
                    return float(token.text)
                return int(token.text)
            except ValueError:
                # int() refuses digit strings past sys.get_int_max_str_digits()
                raise self._error("Invalid number literal", token)

        if token.type == TokenType.NULL:
            self._advance()
            return None

        raise self._error("Expected value (string, number, or NULL)", token)

    def _parse_value_list(self) -> list[Any]:
        """Parse `( value, value, ... )`; an empty list is allowed."""
        self._expect(TokenType.LPAREN, "Expected opening parenthesis for IN clause")

        values: list[Any] = []
        if self._check(TokenType.RPAREN):
            self._advance()
            return values

        values.append(self._parse_value())
        while self._check(TokenType.COMMA):
            self._advance()
            values.append(self._parse_value())

        self._expect(TokenType.RPAREN, "Expected closing parenthesis for IN clause")
        return values

    # Helper methods

    def _current(self) -> Token:
        """Get the current token."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]  # EOF

    def _peek(self, offset: int = 1) -> Token:
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]

    def _advance(self) -> Token:
        """Advance to the next token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches the given type."""
        return self._current().type == token_type

    def _expect(self, token_type: TokenType, message: str) -> Token:
        if not self._check(token_type):
            raise self._error(message, self._current())
        return self._advance()

    def _is_at_end(self) -> bool:
        """Check if we're at the end of tokens."""
        return self._current().type == TokenType.EOF

    @staticmethod
    def _error(message: str, token: Token) -> DartQLSyntaxError:
        found = "end of input" if token.type == TokenType.EOF else f"'{token.text}'"
        return DartQLSyntaxError(
            f"{message}, got {found} at position {token.position}", token.position, token.text
        )
