# ABOUTME: The `olmeta lookup` command resolving a query into book metadata.
# ABOUTME: Prints a summary table, or the full mapped results as JSON.

import dataclasses
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from olmeta.cli.options import build_query, create_provider, query_options, variant_option
from olmeta.formats.epub import EpubReadError
from olmeta.metadata.http import MetadataFetchError
from olmeta.metadata.provider import UnsupportedQueryError
from olmeta.metadata.types import LookupResult


def _cover_count(result: LookupResult) -> int:
    if result.relations is not None:
        return len(result.relations.images)
    return len(result.images)


def _render_table(console: Console, results: list[LookupResult]) -> None:
    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Year", width=5)
    table.add_column("Author")
    table.add_column("Covers", width=6)

    for result in results:
        meta = result.metadata
        authors = meta.params.get("authors") or []
        table.add_row(
            meta.id,
            meta.name,
            str(meta.year) if meta.year else "?",
            ", ".join(authors) or "[dim]unknown[/dim]",
            str(_cover_count(result)),
        )

    console.print(table)
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")


@click.command()
@query_options
@variant_option
def lookup(
    name: str | None,
    isbn13: str | None,
    edition_id: str | None,
    work_id: str | None,
    epub_path: Path | None,
    split_titles: bool,
    retries: int,
    as_json: bool,
    variant: str,
) -> None:
    """Look up book metadata by ISBN, Open Library id, or title."""
    console = Console()

    try:
        query = build_query(name, isbn13, edition_id, work_id, epub_path)
        provider = create_provider(variant, split_titles=split_titles, retries=retries)
        results = provider.lookup_metadata(query)
    except (UnsupportedQueryError, MetadataFetchError, EpubReadError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    if as_json:
        click.echo(json.dumps([dataclasses.asdict(result) for result in results], indent=2))
        return

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    _render_table(console, results)
