"""
Entry points tying the tokenizer, lexer, parser and compiler together.

Callers hand in a query string and get back plain result objects whose
errors and warnings can be shown to users as-is.
"""

import time
from typing import TYPE_CHECKING

from loguru import logger

from dartql.query.ast import ParseResult, empty_ast
from dartql.query.compiler.compiler import FilterCompilationResult, FilterCompiler
from dartql.query.errors import DartQLSyntaxError, DartQLValidationError
from dartql.query.lexer import Lexer, LexerResult
from dartql.query.parser import Parser
from dartql.query.tokenizer import Tokenizer

if TYPE_CHECKING:  # pragma: no cover
    from dartql.config import DartQLConfig


def _lexer(tokens, config: "DartQLConfig | None") -> Lexer:
    if config is None:
        return Lexer(tokens)
    return Lexer(tokens, config.valid_fields, config.suggestion_threshold)


def validate_query(query_text: str, config: "DartQLConfig | None" = None) -> LexerResult:
    """Tokenize and validate field names without building an AST."""
    try:
        tokens = Tokenizer(query_text).tokenize()
    except DartQLSyntaxError as e:
        return LexerResult(tokens=[], errors=[str(e)])
    return _lexer(tokens, config).analyze()


def parse_query(query_text: str, config: "DartQLConfig | None" = None) -> ParseResult:
    """Parse a DartQL WHERE clause into an AST.

    Args:
        query_text: Query such as "status = 'Todo' AND priority >= 3"
        config: Optional settings overriding the field vocabulary

    Returns:
        ParseResult with the AST, referenced fields and any errors. When
        errors are present the AST is the empty group.
    """
    start_time = time.time()

    try:
        tokens = Tokenizer(query_text).tokenize()
    except DartQLSyntaxError as e:
        logger.debug(f"DartQL tokenizer error: {e}")
        return ParseResult(ast=empty_ast(), fields=set(), errors=[str(e)])

    lexer_result = _lexer(tokens, config).analyze()
    if lexer_result.errors:
        logger.debug(f"DartQL validation failed with {len(lexer_result.errors)} error(s)")
        return ParseResult(ast=empty_ast(), fields=lexer_result.fields, errors=lexer_result.errors)

    result = Parser(tokens).parse()

    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.debug(
        f"Parsed DartQL query {query_text!r}: fields={sorted(result.fields)}, "
        f"errors={len(result.errors)}, {elapsed_ms}ms"
    )
    return result


def compile_query(
    query_text: str, config: "DartQLConfig | None" = None
) -> FilterCompilationResult:
    """Parse and compile a query. Parse errors are returned in `errors`."""
    parse_result = parse_query(query_text, config)
    if parse_result.errors:
        return FilterCompilationResult(errors=list(parse_result.errors))

    compiler = FilterCompiler(config.capabilities if config is not None else None)
    return compiler.compile(parse_result.ast)


def compile_selector(
    query_text: str, config: "DartQLConfig | None" = None
) -> FilterCompilationResult:
    """Compile a selector for a batch operation, failing loudly.

    Raises:
        DartQLValidationError: If the selector does not parse or compile.
    """
    parse_result = parse_query(query_text, config)
    if parse_result.errors:
        raise DartQLValidationError(
            f"DartQL parse errors: {'; '.join(parse_result.errors)}", parse_result.errors
        )

    compiler = FilterCompiler(config.capabilities if config is not None else None)
    result = compiler.compile(parse_result.ast)
    if result.errors:
        raise DartQLValidationError(
            f"DartQL conversion errors: {'; '.join(result.errors)}", result.errors
        )
    return result
