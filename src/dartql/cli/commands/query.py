"""Query CLI commands for DartQL.

`dartql parse`, `dartql compile` and `dartql filter` expose the query engine
for trying out selectors before using them in batch operations.
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from dartql.cli.app import app
from dartql.query import compile_query, parse_query
from dartql.query.ast import to_dict
from dartql.query.compiler import FilterCompiler, evaluate

console = Console()

QueryArgument = Annotated[str, typer.Argument(help="DartQL WHERE clause, e.g. \"status = 'Todo'\"")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print machine-readable JSON")]


def _print_messages(title: str, messages: list[str], style: str) -> None:
    for message in messages:
        console.print(f"[{style}]{title}:[/{style}] {message}")


@app.command("parse")
def parse_command(ctx: typer.Context, query: QueryArgument, as_json: JsonOption = False):
    """Parse a query and show the referenced fields and syntax tree."""
    result = parse_query(query, ctx.obj)

    if as_json:
        payload = {
            "ast": to_dict(result.ast),
            "fields": sorted(result.fields),
            "errors": result.errors,
        }
        print(json.dumps(payload, indent=2, ensure_ascii=True, default=str))
    else:
        if result.fields:
            console.print(f"Fields: {', '.join(sorted(result.fields))}")
        console.print_json(data=to_dict(result.ast))
        _print_messages("error", result.errors, "red")

    if result.errors:
        raise typer.Exit(1)


@app.command("compile")
def compile_command(ctx: typer.Context, query: QueryArgument, as_json: JsonOption = False):
    """Compile a query into API filters or a client-side filter."""
    result = compile_query(query, ctx.obj)

    if as_json:
        payload = {
            "server_filter": result.server_filter,
            "requires_client_side": result.requires_client_side,
            "warnings": result.warnings,
            "errors": result.errors,
        }
        print(json.dumps(payload, indent=2, ensure_ascii=True, default=str))
    else:
        table = Table(title="API filters")
        table.add_column("Parameter", style="cyan")
        table.add_column("Value")
        for key, value in result.server_filter.items():
            table.add_row(key, json.dumps(value))
        if result.server_filter:
            console.print(table)

        if result.requires_client_side:
            console.print("[yellow]Client-side filtering required[/yellow]")
        _print_messages("warning", result.warnings, "yellow")
        _print_messages("error", result.errors, "red")

    if result.errors:
        raise typer.Exit(1)


def _load_records(path: Path) -> list[dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"Could not read records from {path}: {e}", err=True)
        raise typer.Exit(1)

    # Accept both a bare list and the API's {"tasks": [...]} envelope
    if isinstance(data, dict) and isinstance(data.get("tasks"), list):
        data = data["tasks"]
    if not isinstance(data, list):
        typer.echo(f"Expected a JSON array of records in {path}", err=True)
        raise typer.Exit(1)
    return data


@app.command("filter")
def filter_command(
    ctx: typer.Context,
    query: QueryArgument,
    records_file: Annotated[
        Path, typer.Argument(help="JSON file holding an array of task records")
    ],
):
    """Apply a query to records from a JSON file and print the matches.

    The records did not come through the API, so the whole query is
    evaluated locally, including the parts the API could have filtered.
    """
    config = ctx.obj
    parse_result = parse_query(query, config)
    errors = parse_result.errors
    if not errors:
        compiled = FilterCompiler(config.capabilities if config is not None else None).compile(
            parse_result.ast
        )
        errors = compiled.errors
        for warning in compiled.warnings:
            logger.info(warning)

    if errors:
        for error in errors:
            typer.echo(error, err=True)
        raise typer.Exit(1)

    records = _load_records(records_file)
    matches = [record for record in records if evaluate(parse_result.ast, record)]
    logger.debug(f"{len(matches)} of {len(records)} records matched")
    print(json.dumps(matches, indent=2, ensure_ascii=True, default=str))
