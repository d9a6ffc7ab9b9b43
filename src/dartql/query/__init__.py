"""
DartQL query engine.

Parses SQL-like WHERE clauses for selecting tasks, e.g.
`status = 'Todo' AND priority >= 3`, and compiles them into API filters or
a client-side predicate.
"""

from dartql.query.ast import (
    Comparison,
    ComparisonOperator,
    Expression,
    Group,
    Logical,
    LogicalOperator,
    ParseResult,
)
from dartql.query.compiler import (
    FilterCompilationResult,
    FilterCompiler,
    ServerCapabilities,
    compile_filter,
)
from dartql.query.engine import (
    compile_query,
    compile_selector,
    parse_query,
    validate_query,
)
from dartql.query.errors import (
    DartQLCompileError,
    DartQLError,
    DartQLSyntaxError,
    DartQLValidationError,
)
from dartql.query.lexer import VALID_FIELDS, Lexer, LexerResult
from dartql.query.parser import Parser
from dartql.query.tokenizer import Token, Tokenizer, TokenType, tokenize

__all__ = [
    # AST
    "Comparison",
    "ComparisonOperator",
    "Expression",
    "Group",
    "Logical",
    "LogicalOperator",
    "ParseResult",
    # Compiler
    "FilterCompilationResult",
    "FilterCompiler",
    "ServerCapabilities",
    "compile_filter",
    # Engine
    "compile_query",
    "compile_selector",
    "parse_query",
    "validate_query",
    # Errors
    "DartQLCompileError",
    "DartQLError",
    "DartQLSyntaxError",
    "DartQLValidationError",
    # Lexer
    "VALID_FIELDS",
    "Lexer",
    "LexerResult",
    # Parser
    "Parser",
    # Tokenizer
    "Token",
    "Tokenizer",
    "TokenType",
    "tokenize",
]
