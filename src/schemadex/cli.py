"""Command line interface for schemadex."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from schemadex.browser import SchemaBrowser
from schemadex.config import AppConfig
from schemadex.errors import SchemadexError
from schemadex.web.app import create_app


console = Console()
app = typer.Typer(help="schemadex - browse and search versioned schema documents")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_browser(schemadir: Optional[Path]) -> SchemaBrowser:
    config = AppConfig(schema_dir=schemadir if schemadir is not None else AppConfig().schema_dir)
    resolved = config.resolve_schema_dir(Path.cwd())
    if resolved is None:
        raise typer.BadParameter("No schema directory given (use --schemadir)")
    try:
        return SchemaBrowser.from_config(config, base_dir=Path.cwd())
    except SchemadexError as exc:
        _fail(exc)


def _fail(exc: SchemadexError) -> None:
    console.print(f"[red]{escape(str(exc))}[/red]")
    raise typer.Exit(code=1)


SchemaDirOption = typer.Option(None, "--schemadir", "-d", help="Directory of schema documents")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Verbose logging")


@app.command()
def resources(
    schemadir: Path = SchemaDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """List indexed resources."""
    _setup_logging(verbose)
    browser = _load_browser(schemadir)

    names = browser.list_resources()
    if not names:
        console.print("[yellow]No schemas found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Resource")
    table.add_column("Latest")
    table.add_column("Versions")
    for name in names:
        versions = browser.list_versions(name)
        table.add_row(name, versions[0] if versions else "-", str(len(versions)))
    console.print(table)


@app.command()
def versions(
    resource: str = typer.Argument(..., help="Resource name"),
    schemadir: Path = SchemaDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """List the versions of a resource, latest first."""
    _setup_logging(verbose)
    browser = _load_browser(schemadir)
    try:
        names = browser.list_versions(resource)
    except SchemadexError as exc:
        _fail(exc)

    if not names:
        console.print(f"[yellow]{resource} has only a default document.[/yellow]")
        return
    for name in names:
        console.print(name)


@app.command()
def show(
    resource: str = typer.Argument(..., help="Resource name"),
    version: str = typer.Option("", "--version", help="Version such as v1.2.0 (default document if omitted)"),
    schemadir: Path = SchemaDirOption,
    raw: bool = typer.Option(False, "--raw", help="Print the document without highlighting"),
    verbose: bool = VerboseOption,
) -> None:
    """Print a schema document."""
    _setup_logging(verbose)
    browser = _load_browser(schemadir)
    try:
        content = browser.get_content(resource, version)
    except SchemadexError as exc:
        _fail(exc)

    if raw:
        typer.echo(content)
    else:
        console.print(Syntax(content, "json", word_wrap=True))


@app.command()
def search(
    keyword: str = typer.Argument(..., help="Keyword or regular expression (case-insensitive)"),
    schemadir: Path = SchemaDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """Search property names and descriptions of the latest documents."""
    _setup_logging(verbose)
    browser = _load_browser(schemadir)
    try:
        results = browser.search(keyword)
    except SchemadexError as exc:
        _fail(exc)

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Resource", no_wrap=True)
    table.add_column("Definition", no_wrap=True)
    table.add_column("Property", no_wrap=True)
    table.add_column("Field", no_wrap=True)
    table.add_column("Text")

    for result in results:
        for prop in result.properties:
            if prop.value is None:
                table.add_row(result.name, result.model, prop.name, "name", "")
            else:
                snippet = prop.value.content.replace("\n", " ")
                table.add_row(result.name, result.model, prop.name, prop.value.name, snippet[:180])

    console.print(table)


@app.command()
def resolve(
    link: str = typer.Argument(..., help="Schema link, e.g. http://redfish.dmtf.org/schemas/v1/Chassis.json#/definitions/Chassis"),
    schemadir: Path = SchemaDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """Resolve a cross-reference link to a resource and version."""
    _setup_logging(verbose)
    browser = _load_browser(schemadir)
    try:
        reference = browser.resolve_link(link)
    except SchemadexError as exc:
        _fail(exc)

    console.print_json(data=asdict(reference))


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    schemadir: Path = SchemaDirOption,
) -> None:
    """Start the web API."""
    config = AppConfig(schema_dir=schemadir if schemadir is not None else AppConfig().schema_dir)
    resolved = config.resolve_schema_dir(Path.cwd())
    if resolved is None:
        console.print("[yellow]Warning: no schema directory configured, set one via POST /schema-path.[/yellow]")
    else:
        config.schema_dir = resolved

    try:
        web_app = create_app(config)
    except SchemadexError as exc:
        _fail(exc)

    console.print(f"Starting web API on http://{host}:{port} (schemas: {resolved})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


def main() -> None:
    app()
