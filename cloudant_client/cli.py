import json
import re
from typing import Any, List, Optional

import typer
from pydantic import ValidationError

from .config import load_settings
from .database import Database
from .exceptions import CloudantError
from .query import Query

cli = typer.Typer(name="cloudant", help="Read and write documents in a Cloudant database.")

doc_help = "A JSON document, created via Python's ``json.dumps`` method, for example."
param_help = "A query parameter as NAME=VALUE. May be repeated."


def get_database(
    config: Optional[str],
    host: str,
    database: str,
    username: str,
    password: str,
) -> Database:
    # Putting this in a function means that the environment variables are checked
    # at evaluation time rather than import time.
    settings = load_settings(
        config, host=host, database=database, username=username, password=password
    )
    return Database.from_settings(settings)


def coerce_param(value: str) -> Any:
    if value in ("true", "false"):
        return value == "true"
    if re.fullmatch(r"-?\d+", value):
        return int(value)
    return value


def parse_params(params: Optional[List[str]]) -> dict:
    parsed = {}
    for p in params or []:
        name, sep, value = p.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=VALUE, got {p!r}.", param_hint="--param")
        parsed[name] = coerce_param(value)
    return parsed


def parse_sort(sort: Optional[List[str]]) -> list:
    parsed = []
    for s in sort or []:
        field, _, direction = s.partition(":")
        parsed.append({field: direction or "asc"})
    return parsed


def load_json(data: str, param_hint: str) -> Any:
    try:
        return json.loads(data)
    except ValueError as e:
        raise typer.BadParameter(f"Not valid JSON: {e}", param_hint=param_hint)


def run(ctx: typer.Context, method: str, *args) -> Any:
    try:
        db = get_database(**ctx.obj)
    except (ValidationError, ValueError, OSError) as e:
        typer.echo(f"Error: invalid connection settings: {e}", err=True)
        raise typer.Exit(code=2)
    try:
        with db:
            return getattr(db, method)(*args)
    except CloudantError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


@cli.callback()
def common(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, envvar="CLOUDANT_CONFIG", help="Path to a YAML file of connection settings."
    ),
    host: str = typer.Option("", envvar="CLOUDANT_HOST", help="Cloudant server URL."),
    database: str = typer.Option("", envvar="CLOUDANT_DATABASE", help="Database name."),
    username: str = typer.Option("", envvar="CLOUDANT_USERNAME", help="Account or API key."),
    password: str = typer.Option("", envvar="CLOUDANT_PASSWORD", help="Password or API secret."),
):
    """Common Entry Point"""
    ctx.obj = dict(
        config=config, host=host, database=database, username=username, password=password
    )


@cli.command()
def insert(ctx: typer.Context, doc: str = typer.Argument(..., help=doc_help)):
    """Add a new document to the database and print its rev."""
    typer.echo(run(ctx, "insert", load_json(doc, "DOC")))


@cli.command()
def get(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., help="The document _id."),
    param: Optional[List[str]] = typer.Option(None, help=param_help),
):
    """Fetch a single document by its _id."""
    echo_json(run(ctx, "get_by_id", doc_id, parse_params(param)))


@cli.command()
def update(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., help="The document _id."),
    doc: str = typer.Argument(..., help=doc_help),
):
    """Replace a document (which must include its current _rev) and print the new rev."""
    typer.echo(run(ctx, "update", doc_id, load_json(doc, "DOC")))


@cli.command()
def delete(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., help="The document _id."),
    rev: str = typer.Argument(..., help="The current rev of the document."),
):
    """Delete a document."""
    run(ctx, "delete", doc_id, rev)


@cli.command()
def query(
    ctx: typer.Context,
    selector: str = typer.Argument(..., help="The selector, as JSON."),
    field: Optional[List[str]] = typer.Option(None, help="A field to return. May be repeated."),
    sort: Optional[List[str]] = typer.Option(
        None, help="FIELD:DIRECTION to sort on, direction 'asc' or 'desc'. May be repeated."
    ),
    limit: Optional[int] = typer.Option(None, help="Maximum number of documents to return."),
    skip: Optional[int] = typer.Option(None, help="Number of documents to skip."),
):
    """Find documents matching a selector."""
    q = Query(
        selector=load_json(selector, "SELECTOR"),
        fields=list(field or []),
        sort=parse_sort(sort),
        limit=limit,
        skip=skip,
    )
    echo_json(run(ctx, "query", q))


@cli.command()
def view(
    ctx: typer.Context,
    ddoc: str = typer.Argument(..., help="The design document name, without '_design/'."),
    name: str = typer.Argument(..., help="The view name."),
    param: Optional[List[str]] = typer.Option(None, help=param_help),
):
    """Read rows from a view."""
    echo_json(run(ctx, "view", ddoc, name, parse_params(param)))


@cli.command()
def search(
    ctx: typer.Context,
    ddoc: str = typer.Argument(..., help="The design document name, without '_design/'."),
    name: str = typer.Argument(..., help="The search index name."),
    param: Optional[List[str]] = typer.Option(None, help=param_help),
):
    """Run a full-text search. Pass the lucene query as --param q=..."""
    echo_json(run(ctx, "search", ddoc, name, parse_params(param)))


if __name__ == "__main__":  # pragma: no cover
    cli()
