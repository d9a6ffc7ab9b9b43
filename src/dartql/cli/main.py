"""Main CLI entry point for dartql."""  # pragma: no cover

from dartql.cli.app import app  # pragma: no cover

# Register commands
from dartql.cli.commands import query  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
