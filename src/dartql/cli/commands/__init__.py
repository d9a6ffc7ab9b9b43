"""CLI commands for dartql."""

from . import query

__all__ = [
    "query",
]
