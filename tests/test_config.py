"""Tests for DartQL configuration."""

import pytest
from pydantic import ValidationError

from dartql.config import DartQLConfig
from dartql.query.ast import ComparisonOperator
from dartql.query.compiler.capabilities import DEFAULT_SERVER_FILTERS
from dartql.query.lexer import VALID_FIELDS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "DARTQL_VALID_FIELDS",
        "DARTQL_SERVER_FILTERS",
        "DARTQL_LIST_VALUED_FILTERS",
        "DARTQL_SUGGESTION_THRESHOLD",
        "DARTQL_LOG_LEVEL",
    ]:
        monkeypatch.delenv(name, raising=False)


class TestDartQLConfig:
    """Test DartQLConfig defaults and validation."""

    def test_defaults(self):
        config = DartQLConfig()
        assert config.valid_fields == list(VALID_FIELDS)
        assert config.server_filters == DEFAULT_SERVER_FILTERS
        assert config.list_valued_filters == ["tags"]
        assert config.suggestion_threshold == 2
        assert config.log_level == "WARNING"

    def test_defaults_are_copies(self):
        config = DartQLConfig()
        config.server_filters["status"]["!="] = "status_not"
        assert "!=" not in DEFAULT_SERVER_FILTERS["status"]

    def test_valid_fields_are_normalized(self):
        config = DartQLConfig(valid_fields=[" Status ", "OWNER", ""])
        assert config.valid_fields == ["status", "owner"]

    def test_empty_valid_fields_rejected(self):
        with pytest.raises(ValidationError):
            DartQLConfig(valid_fields=[])

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValidationError, match="Unknown operator"):
            DartQLConfig(server_filters={"status": {"~": "status"}})

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValidationError):
            DartQLConfig(suggestion_threshold=-1)

    def test_log_level_normalized(self):
        assert DartQLConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            DartQLConfig(log_level="LOUD")

    def test_capabilities(self):
        capabilities = DartQLConfig().capabilities
        assert capabilities.server_key("due_at", ComparisonOperator.GT) == "due_after"
        assert "tags" in capabilities.list_valued


class TestEnvironmentOverrides:
    """Test DARTQL_ environment variables."""

    def test_valid_fields_from_env(self, monkeypatch):
        monkeypatch.setenv("DARTQL_VALID_FIELDS", '["Status", "owner"]')
        assert DartQLConfig().valid_fields == ["status", "owner"]

    def test_server_filters_from_env(self, monkeypatch):
        monkeypatch.setenv("DARTQL_SERVER_FILTERS", '{"owner": {"=": "owner_id"}}')
        config = DartQLConfig()
        assert config.capabilities.server_key("owner", ComparisonOperator.EQ) == "owner_id"
        assert not config.capabilities.supports_field("status")

    def test_threshold_from_env(self, monkeypatch):
        monkeypatch.setenv("DARTQL_SUGGESTION_THRESHOLD", "3")
        assert DartQLConfig().suggestion_threshold == 3

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("DARTQL_LOG_LEVEL", "info")
        assert DartQLConfig().log_level == "INFO"

    def test_explicit_values_override_env(self, monkeypatch):
        monkeypatch.setenv("DARTQL_LOG_LEVEL", "INFO")
        assert DartQLConfig(log_level="ERROR").log_level == "ERROR"
