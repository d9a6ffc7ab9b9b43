"""Pytest fixtures for DartQL tests."""

import pytest

from dartql.query import parse_query


@pytest.fixture
def sample_tasks():
    """Task records shaped like the list endpoint's response items."""
    return [
        {
            "dart_id": "task-1",
            "title": "Fix login redirect",
            "status": "Todo",
            "priority": 4,
            "assignee": "alice@example.com",
            "dartboard": "Engineering",
            "tags": ["bug", "urgent"],
            "due_at": "2026-01-15",
        },
        {
            "dart_id": "task-2",
            "title": "Write release notes",
            "status": "Doing",
            "priority": 2,
            "assignee": None,
            "dartboard": "Marketing",
            "tags": ["docs"],
            "due_at": "2026-02-01",
        },
        {
            "dart_id": "task-3",
            "title": "Refactor billing",
            "status": "Done",
            "priority": 3,
            "assignee": "bob@example.com",
            "dartboard": "Engineering",
            "tags": [],
            "due_at": None,
            "blocker_ids": ["task-1"],
        },
    ]


@pytest.fixture
def parse_ast():
    """Parse a query and return its AST, failing loudly on errors."""

    def _parse(query_text):
        result = parse_query(query_text)
        assert result.errors == [], result.errors
        return result.ast

    return _parse
