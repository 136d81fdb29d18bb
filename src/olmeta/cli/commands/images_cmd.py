# ABOUTME: The `olmeta images` command listing cover image URLs for a query.
# ABOUTME: Images from every resolved record, deduplicated by URL.

import dataclasses
import json
from pathlib import Path

import click
from rich.console import Console

from olmeta.cli.options import build_query, create_provider, query_options
from olmeta.formats.epub import EpubReadError
from olmeta.metadata.http import MetadataFetchError
from olmeta.metadata.provider import UnsupportedQueryError


@click.command()
@query_options
def images(
    name: str | None,
    isbn13: str | None,
    edition_id: str | None,
    work_id: str | None,
    epub_path: Path | None,
    split_titles: bool,
    retries: int,
    as_json: bool,
) -> None:
    """List cover image URLs for a book."""
    console = Console()

    try:
        query = build_query(name, isbn13, edition_id, work_id, epub_path)
        provider = create_provider(split_titles=split_titles, retries=retries)
        found = provider.lookup_images(query)
    except (UnsupportedQueryError, MetadataFetchError, EpubReadError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    if as_json:
        click.echo(json.dumps([dataclasses.asdict(image) for image in found], indent=2))
        return

    if not found:
        console.print("[yellow]No images found.[/yellow]")
        return

    for image in found:
        click.echo(image.url)
