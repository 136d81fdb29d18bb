# ABOUTME: Shared Click options for olmeta CLI commands.
# ABOUTME: Provides the query option decorator and helpers turning options into a LookupQuery.

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from olmeta.formats.epub import read_epub_query
from olmeta.metadata.http import OlmetaHttpClient
from olmeta.metadata.openlibrary import OpenLibraryProvider
from olmeta.metadata.output import OUTPUT_VARIANTS, get_output_mapper
from olmeta.metadata.query import BookIds, LookupQuery

_QUERY_OPTIONS = [
    click.argument("name", required=False),
    click.option("--isbn", "isbn13", default=None, help="ISBN-13 (hyphens allowed)."),
    click.option(
        "--edition",
        "edition_id",
        default=None,
        help="Open Library edition id, e.g. OL7353617M or /books/OL7353617M.",
    ),
    click.option(
        "--work",
        "work_id",
        default=None,
        help="Open Library work id, e.g. OL45804W or /works/OL45804W.",
    ),
    click.option(
        "--epub",
        "epub_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Read title and identifiers from an EPUB file.",
    ),
    click.option(
        "--split-titles",
        is_flag=True,
        default=False,
        help="Split mangled titles like 'TheHobbit' into words before searching.",
    ),
    click.option(
        "--retries",
        type=click.IntRange(0, 10),
        default=3,
        help="Retries for rate-limited or failing requests (default 3).",
    ),
    click.option(
        "--json",
        "as_json",
        is_flag=True,
        default=False,
        help="Print results as JSON instead of a table.",
    ),
]

variant_option = click.option(
    "--variant",
    type=click.Choice(sorted(OUTPUT_VARIANTS)),
    default="relations",
    help="Output shape: relations bundle or flat image list (default: relations).",
)


def query_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared lookup query argument and options to a command."""
    for decorator in reversed(_QUERY_OPTIONS):
        func = decorator(func)
    return func


def build_query(
    name: str | None,
    isbn13: str | None,
    edition_id: str | None,
    work_id: str | None,
    epub_path: Path | None,
) -> LookupQuery:
    """Combine command-line values with an EPUB's metadata; explicit options win.

    Raises:
        EpubReadError: If ``epub_path`` is given but cannot be read.
    """
    query = read_epub_query(epub_path) if epub_path else LookupQuery()
    return LookupQuery(
        name=name or query.name,
        ids=BookIds(
            isbn13=isbn13 or query.ids.isbn13,
            edition_id=edition_id or query.ids.edition_id,
            work_id=work_id or query.ids.work_id,
        ),
    )


def create_provider(
    variant: str = "relations", *, split_titles: bool = False, retries: int = 3
) -> OpenLibraryProvider:
    """Create the Open Library provider with a live HTTP client."""
    return OpenLibraryProvider(
        http_client=OlmetaHttpClient(max_retries=retries),
        mapper=get_output_mapper(variant),
        split_titles=split_titles,
    )
