"""Configuration for DartQL.

Defaults mirror the compiled-in vocabulary and API capability table. Every
setting can be overridden with a DARTQL_ environment variable; list and dict
settings take JSON, e.g.

    DARTQL_VALID_FIELDS='["status", "priority"]'
    DARTQL_SERVER_FILTERS='{"status": {"=": "status"}}'
"""

from copy import deepcopy

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dartql.fuzzy import DEFAULT_THRESHOLD
from dartql.query.ast import ComparisonOperator
from dartql.query.compiler.capabilities import (
    DEFAULT_LIST_VALUED,
    DEFAULT_SERVER_FILTERS,
    ServerCapabilities,
)
from dartql.query.lexer import VALID_FIELDS

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class DartQLConfig(BaseSettings):
    """Settings for the query engine and the CLI."""

    model_config = SettingsConfigDict(env_prefix="DARTQL_", extra="ignore")

    valid_fields: list[str] = Field(
        default_factory=lambda: list(VALID_FIELDS),
        description="Field names a query may reference",
    )
    server_filters: dict[str, dict[str, str]] = Field(
        default_factory=lambda: deepcopy(DEFAULT_SERVER_FILTERS),
        description="Field -> operator -> API request parameter",
    )
    list_valued_filters: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LIST_VALUED),
        description="API parameters that take a list of values",
    )
    suggestion_threshold: int = Field(
        default=DEFAULT_THRESHOLD,
        ge=0,
        description="Maximum edit distance for 'did you mean' suggestions",
    )
    log_level: str = Field(default="WARNING", description="Log level for the CLI")

    @field_validator("valid_fields")
    @classmethod
    def normalize_fields(cls, value: list[str]) -> list[str]:
        fields = [name.strip().lower() for name in value if name.strip()]
        if not fields:
            raise ValueError("valid_fields must not be empty")
        return fields

    @field_validator("server_filters")
    @classmethod
    def validate_operators(cls, value: dict[str, dict[str, str]]) -> dict[str, dict[str, str]]:
        for field, operators in value.items():
            for operator in operators:
                try:
                    ComparisonOperator(operator.upper())
                except ValueError:
                    raise ValueError(f"Unknown operator '{operator}' for field '{field}'")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def capabilities(self) -> ServerCapabilities:
        return ServerCapabilities.from_mapping(self.server_filters, self.list_valued_filters)
