"""
Compiles a DartQL AST into API filters and/or a client-side predicate.

A single walk over the tree decides whether the whole query can be sent to
the API. If it can, the comparisons are merged into one flat filter mapping.
If any part of the tree cannot, the API filter is dropped entirely and the
whole tree is evaluated client-side instead.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field as dataclass_field
from typing import Any

from loguru import logger

from dartql.query.ast import (
    RANGE_OPERATORS,
    Comparison,
    Expression,
    Group,
    Logical,
    LogicalOperator,
)
from dartql.query.compiler.capabilities import (
    CLIENT_SIDE_OPERATORS,
    DEFAULT_CAPABILITIES,
    ServerCapabilities,
)
from dartql.query.compiler.predicate import Predicate, build_predicate
from dartql.query.errors import DartQLCompileError

CLIENT_SIDE_WARNING = (
    "Query requires client-side filtering which may impact performance. "
    "Consider using simpler queries with API-supported filters for better performance."
)


@dataclass
class FilterCompilationResult:
    """Output of the filter compiler."""

    server_filter: dict[str, Any] = dataclass_field(default_factory=dict)
    client_predicate: Predicate | None = None
    requires_client_side: bool = False
    warnings: list[str] = dataclass_field(default_factory=list)
    errors: list[str] = dataclass_field(default_factory=list)

    def apply(self, records: Iterable[Any]) -> list[Any]:
        """Keep the records accepted by the client-side predicate.

        Records are assumed to already satisfy `server_filter`, so without a
        predicate every record is kept.
        """
        if self.client_predicate is None:
            return list(records)
        return [record for record in records if self.client_predicate(record)]


class FilterCompiler:
    """Turns an expression tree into a FilterCompilationResult."""

    def __init__(self, capabilities: ServerCapabilities | None = None):
        self.capabilities = capabilities or DEFAULT_CAPABILITIES
        self.reasons: list[str] = []
        self.server_filter: dict[str, Any] = {}

    def compile(self, ast: Expression) -> FilterCompilationResult:
        """Compile `ast`. Never raises; failures are reported in `errors`."""
        self.reasons = []
        self.server_filter = {}
        result = FilterCompilationResult()

        try:
            if isinstance(ast, Group) and ast.is_empty:
                raise DartQLCompileError("Cannot compile an empty query")

            if self._visit(ast):
                result.server_filter = self.server_filter
                logger.debug(f"Query compiled to API filters: {self.server_filter}")
                return result

            result.requires_client_side = True
            result.client_predicate = build_predicate(ast)
            result.warnings = [CLIENT_SIDE_WARNING, *self.reasons]
            logger.debug(f"Query requires client-side filtering: {self.reasons}")

        except DartQLCompileError as e:
            result.errors.append(f"Failed to convert AST to filters: {e}")

        except Exception as e:
            logger.exception(f"Unexpected error compiling query AST: {e}")
            result = FilterCompilationResult(errors=[f"Failed to convert AST to filters: {e}"])

        return result

    def _visit(self, expression: Expression | None) -> bool:
        """Return True if `expression` can be sent to the API.

        Compatible comparisons are added to `self.server_filter` on the way;
        every incompatibility found is recorded in `self.reasons`.
        """
        match expression:
            case Comparison():
                return self._visit_comparison(expression)

            case Logical(operator=LogicalOperator.AND, left=left, right=right):
                # Visit both sides so every reason gets reported
                left_ok = self._visit(left)
                right_ok = self._visit(right)
                return left_ok and right_ok

            case Logical(operator=LogicalOperator.OR):
                self.reasons.append("OR logic requires client-side filtering (API only supports AND)")
                return False

            case Logical(operator=LogicalOperator.NOT):
                self.reasons.append("NOT logic requires client-side filtering")
                return False

            case Group(inner=inner):
                return inner is not None and self._visit(inner)

        return False

    def _visit_comparison(self, comparison: Comparison) -> bool:
        field = comparison.field
        operator = comparison.operator

        if not self.capabilities.supports_field(field):
            self.reasons.append(f"Field '{field}' not supported by API filters")
            return False

        if operator in CLIENT_SIDE_OPERATORS:
            self.reasons.append(f"{operator.value} operator requires client-side filtering")
            return False

        key = self.capabilities.server_key(field, operator)
        if key is None:
            if operator in RANGE_OPERATORS:
                self.reasons.append(
                    f"Range operator '{operator.value}' on '{field}' requires client-side "
                    "filtering (API only supports equality)"
                )
            else:
                self.reasons.append(
                    f"Operator '{operator.value}' not supported by API for field '{field}'"
                )
            return False

        value = comparison.value
        if value is None:
            # An API parameter cannot express "field is empty"
            self.reasons.append(f"Comparison with NULL on '{field}' requires client-side filtering")
            return False

        if key in self.capabilities.list_valued:
            value = [value]

        if key in self.server_filter and self.server_filter[key] != value:
            self.reasons.append(
                f"Field '{field}' is constrained more than once; requires client-side filtering"
            )
            return False

        self.server_filter[key] = value
        return True


def compile_filter(
    ast: Expression, capabilities: ServerCapabilities | None = None
) -> FilterCompilationResult:
    """Compile `ast` with a fresh FilterCompiler."""
    return FilterCompiler(capabilities).compile(ast)
