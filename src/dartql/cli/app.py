from typing import Optional

import typer
from pydantic import ValidationError

from dartql.config import DartQLConfig
from dartql.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import dartql

        typer.echo(f"DartQL version: {dartql.__version__}")
        raise typer.Exit()


app = typer.Typer(name="dartql", no_args_is_help=True)


@app.callback()
def app_callback(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ...). Defaults to DARTQL_LOG_LEVEL.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """DartQL - parse and compile task selector queries."""
    overrides = {"log_level": log_level} if log_level else {}
    try:
        config = DartQLConfig(**overrides)
    except ValidationError as e:
        raise typer.BadParameter(str(e))
    setup_logging(config.log_level)
    ctx.obj = config
