"""
What the task API can filter on by itself.

The list endpoint accepts a handful of equality parameters plus a due-date
window. Everything else has to be evaluated client-side.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from dartql.query.ast import ComparisonOperator

# field -> operator -> request parameter
DEFAULT_SERVER_FILTERS: dict[str, dict[str, str]] = {
    "status": {"=": "status"},
    "assignee": {"=": "assignee"},
    "dartboard": {"=": "dartboard"},
    "priority": {"=": "priority"},
    "tags": {"=": "tags"},
    "due_at": {
        "=": "due_at",
        "<": "due_before",
        "<=": "due_before",
        ">": "due_after",
        ">=": "due_after",
    },
}

# Request parameters that take a list even when a single value is given
DEFAULT_LIST_VALUED = ("tags",)

# Operators the API never supports, whatever the field
CLIENT_SIDE_OPERATORS = frozenset(
    [
        ComparisonOperator.NEQ,
        ComparisonOperator.IN,
        ComparisonOperator.NOT_IN,
        ComparisonOperator.LIKE,
        ComparisonOperator.CONTAINS,
        ComparisonOperator.IS_NULL,
        ComparisonOperator.IS_NOT_NULL,
        ComparisonOperator.BETWEEN,
    ]
)


@dataclass(frozen=True)
class ServerCapabilities:
    """Per-field operator support of the remote filter API."""

    filters: Mapping[str, Mapping[ComparisonOperator, str]]
    list_valued: frozenset[str] = frozenset()

    @classmethod
    def from_mapping(
        cls, filters: Mapping[str, Mapping[str, str]], list_valued: Iterable[str] = ()
    ) -> "ServerCapabilities":
        """Build capabilities from plain strings, e.g. loaded from configuration.

        Raises:
            ValueError: If an operator is not a DartQL comparison operator.
        """
        parsed = {
            field.lower(): {ComparisonOperator(op.upper()): key for op, key in operators.items()}
            for field, operators in filters.items()
        }
        return cls(filters=parsed, list_valued=frozenset(list_valued))

    def supports_field(self, field: str) -> bool:
        return field in self.filters

    def server_key(self, field: str, operator: ComparisonOperator) -> str | None:
        """Request parameter for `field operator value`, or None if unsupported."""
        return self.filters.get(field, {}).get(operator)


DEFAULT_CAPABILITIES = ServerCapabilities.from_mapping(DEFAULT_SERVER_FILTERS, DEFAULT_LIST_VALUED)
