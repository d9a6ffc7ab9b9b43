"""
Client-side evaluation of DartQL expressions.

Used when a query cannot be expressed as API filters. Records are plain
mappings (task dicts as returned by the API). Evaluation never raises: any
type mismatch makes the comparison false.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

from dartql.query.ast import Comparison, ComparisonOperator, Expression, Group, Logical, LogicalOperator

Predicate = Callable[[Any], bool]
OperatorFunc = Callable[[Any, Any], bool]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _same_kind(a: Any, b: Any) -> bool:
    """Both numbers or both strings."""
    return (_is_number(a) and _is_number(b)) or (isinstance(a, str) and isinstance(b, str))


def _equals(a: Any, b: Any) -> bool:
    # True == 1 in Python; a boolean never equals a number here
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return bool(a == b)


def _eq(actual: Any, expected: Any) -> bool:
    """Equality; against a list-valued field (e.g. tags) it means membership,
    matching how the API reads `tags=[value]`."""
    if isinstance(actual, (list, tuple)) and not isinstance(expected, (list, tuple)):
        return any(_equals(item, expected) for item in actual)
    return _equals(actual, expected)


def _neq(actual: Any, expected: Any) -> bool:
    return not _eq(actual, expected)


def _gt(actual: Any, expected: Any) -> bool:
    return _same_kind(actual, expected) and actual > expected


def _gte(actual: Any, expected: Any) -> bool:
    return _same_kind(actual, expected) and actual >= expected


def _lt(actual: Any, expected: Any) -> bool:
    return _same_kind(actual, expected) and actual < expected


def _lte(actual: Any, expected: Any) -> bool:
    return _same_kind(actual, expected) and actual <= expected


def _in(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, (list, tuple)):
        return False
    return any(_equals(actual, item) for item in expected)


def _not_in(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, (list, tuple)):
        return False
    return not _in(actual, expected)


def _contains(actual: Any, expected: Any) -> bool:
    """Array membership, or substring match when both sides are strings."""
    if isinstance(actual, (list, tuple)):
        return any(_equals(item, expected) for item in actual)
    if isinstance(actual, str) and isinstance(expected, str):
        return expected in actual
    return False


def like_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a SQL LIKE pattern: % is any run of characters, _ is one character."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def _like(actual: Any, expected: Any) -> bool:
    if not isinstance(actual, str) or not isinstance(expected, str):
        return False
    return like_to_regex(expected).fullmatch(actual) is not None


def _is_null(actual: Any, _expected: Any) -> bool:
    return actual is None


def _is_not_null(actual: Any, _expected: Any) -> bool:
    return actual is not None


def _between(actual: Any, expected: Any) -> bool:
    """Inclusive range check; bounds must be the same kind as the value."""
    if not isinstance(expected, (list, tuple)) or len(expected) != 2:
        return False
    low, high = expected
    if not (_same_kind(actual, low) and _same_kind(actual, high)):
        return False
    return low <= actual <= high


# Operator registry
OPERATORS: dict[ComparisonOperator, OperatorFunc] = {
    ComparisonOperator.EQ: _eq,
    ComparisonOperator.NEQ: _neq,
    ComparisonOperator.GT: _gt,
    ComparisonOperator.GTE: _gte,
    ComparisonOperator.LT: _lt,
    ComparisonOperator.LTE: _lte,
    ComparisonOperator.IN: _in,
    ComparisonOperator.NOT_IN: _not_in,
    ComparisonOperator.CONTAINS: _contains,
    ComparisonOperator.LIKE: _like,
    ComparisonOperator.IS_NULL: _is_null,
    ComparisonOperator.IS_NOT_NULL: _is_not_null,
    ComparisonOperator.BETWEEN: _between,
}


def evaluate(expression: Expression | None, record: Any) -> bool:
    """Evaluate an expression against one record."""
    if not isinstance(record, Mapping):
        return False

    match expression:
        case Comparison(field=field, operator=operator, value=value):
            op_func = OPERATORS.get(operator)
            if op_func is None:
                return False
            try:
                return op_func(record.get(field), value)
            except (TypeError, ValueError):
                return False

        case Logical(operator=LogicalOperator.AND, left=left, right=right):
            return evaluate(left, record) and evaluate(right, record)

        case Logical(operator=LogicalOperator.OR, left=left, right=right):
            return evaluate(left, record) or evaluate(right, record)

        case Logical(operator=LogicalOperator.NOT, right=right):
            return not evaluate(right, record)

        case Group(inner=inner):
            return evaluate(inner, record)

    # Missing child of a malformed tree
    return False


def build_predicate(expression: Expression) -> Predicate:
    """Close over `expression` and return a record -> bool function."""

    def predicate(record: Any) -> bool:
        return evaluate(expression, record)

    return predicate
