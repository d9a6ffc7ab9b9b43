"""
Abstract Syntax Tree (AST) definitions for DartQL queries.

An expression is one of three node types: Comparison, Logical or Group.
"""

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Union


class ComparisonOperator(Enum):
    """Operator of a field comparison."""

    EQ = "="
    NEQ = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    IN = "IN"
    NOT_IN = "NOT IN"
    LIKE = "LIKE"
    CONTAINS = "CONTAINS"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"
    BETWEEN = "BETWEEN"


class LogicalOperator(Enum):
    """Boolean connective."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


RANGE_OPERATORS = frozenset(
    [
        ComparisonOperator.GT,
        ComparisonOperator.GTE,
        ComparisonOperator.LT,
        ComparisonOperator.LTE,
    ]
)


@dataclass(frozen=True)
class Comparison:
    """Field comparison (e.g., 'status = "Todo"', 'priority BETWEEN 1 AND 3').

    `value` is a literal for binary operators, a list for IN / NOT IN, a
    (low, high) tuple for BETWEEN and None for IS [NOT] NULL.
    """

    field: str
    operator: ComparisonOperator
    value: Any = None


@dataclass(frozen=True)
class Logical:
    """AND / OR / NOT. NOT keeps its operand in `right`."""

    operator: LogicalOperator
    left: "Expression | None" = None
    right: "Expression | None" = None


@dataclass(frozen=True)
class Group:
    """Explicitly parenthesized expression. Group(None) is the empty AST."""

    inner: "Expression | None" = None

    @property
    def is_empty(self) -> bool:
        return self.inner is None


Expression = Union[Comparison, Logical, Group]


def empty_ast() -> Group:
    """The degenerate AST returned whenever parsing fails."""
    return Group()


@dataclass
class ParseResult:
    """Result of parsing one query string."""

    ast: Expression = dataclass_field(default_factory=empty_ast)
    fields: set[str] = dataclass_field(default_factory=set)
    errors: list[str] = dataclass_field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def to_dict(expression: Expression | None) -> dict[str, Any] | None:
    """Convert an expression tree into plain data (for JSON output)."""
    match expression:
        case None:
            return None
        case Comparison(field=name, operator=operator, value=value):
            if isinstance(value, tuple):
                value = list(value)
            return {
                "type": "comparison",
                "field": name,
                "operator": operator.value,
                "value": value,
            }
        case Logical(operator=operator, left=left, right=right):
            data: dict[str, Any] = {"type": "logical", "operator": operator.value}
            if left is not None:
                data["left"] = to_dict(left)
            data["right"] = to_dict(right)
            return data
        case Group(inner=inner):
            return {"type": "group", "inner": to_dict(inner)}
