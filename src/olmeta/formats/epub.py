# ABOUTME: Builds a LookupQuery from the metadata embedded in an EPUB, using ebooklib.
# ABOUTME: Defensive wrapper that handles malformed files gracefully.

import logging
from pathlib import Path

from ebooklib import epub

from olmeta.metadata.identifiers import normalize_catalog_id
from olmeta.metadata.query import BookIds, LookupQuery

logger = logging.getLogger(__name__)

_ISBN_SCHEMES = ("isbn", "isbn13", "isbn-13", "isbn10", "isbn-10")
_OL_EDITION_SCHEMES = ("openlibrary", "olid", "openlibrary_edition")
_OL_WORK_SCHEMES = ("openlibrary_work", "olwid")


class EpubReadError(Exception):
    """Raised when an EPUB file cannot be read or parsed."""


def _get_metadata_value(book: epub.EpubBook, namespace: str, name: str) -> str | None:
    """Extract a single metadata value from an EpubBook, or None if missing."""
    values = book.get_metadata(namespace, name)
    if not values:
        return None
    # Metadata entries are tuples of (value, attributes)
    value = values[0][0]
    return str(value).strip() if value else None


def _identifier_scheme(attrs: dict[str, str] | None) -> str:
    """The opf:scheme attribute, whichever way the parser spelled its namespace."""
    for key, value in (attrs or {}).items():
        if key == "scheme" or key.endswith(":scheme") or key.endswith("}scheme"):
            return str(value).lower()
    return "id"


def _get_identifiers(book: epub.EpubBook) -> dict[str, str]:
    """Identifiers keyed by lower-cased scheme; "urn:isbn:" values count as ISBNs."""
    identifiers: dict[str, str] = {}
    for value, attrs in book.get_metadata("DC", "identifier"):
        if not value:
            continue
        text = str(value).strip()
        scheme = _identifier_scheme(attrs)
        if text.lower().startswith("urn:isbn:"):
            scheme, text = "isbn", text[len("urn:isbn:") :]
        identifiers.setdefault(scheme, text)
    return identifiers


def _first_by_scheme(identifiers: dict[str, str], schemes: tuple[str, ...]) -> str | None:
    for scheme in schemes:
        if scheme in identifiers:
            return identifiers[scheme]
    return None


def _detect_isbn(identifiers: dict[str, str]) -> str | None:
    """Find an ISBN by scheme, else any identifier value shaped like one."""
    isbn = _first_by_scheme(identifiers, _ISBN_SCHEMES)
    if isbn:
        return isbn
    for value in identifiers.values():
        cleaned = value.replace("-", "").replace(" ", "")
        if len(cleaned) == 13 and cleaned.isdigit():
            return value
    return None


def read_epub_query(path: Path) -> LookupQuery:
    """Build a lookup query from an EPUB's title and identifiers.

    Args:
        path: Path to the EPUB file.

    Returns:
        LookupQuery with the title as name and any ISBN or Open Library ids.

    Raises:
        EpubReadError: If the file cannot be read or parsed.
    """
    if not path.exists():
        raise EpubReadError(f"File not found: {path}")

    try:
        book = epub.read_epub(str(path), options={"ignore_ncx": True})
    except Exception as exc:
        raise EpubReadError(f"Failed to read EPUB: {path}: {exc}") from exc

    title = _get_metadata_value(book, "DC", "title") or path.stem
    identifiers = _get_identifiers(book)

    edition = _first_by_scheme(identifiers, _OL_EDITION_SCHEMES)
    work = _first_by_scheme(identifiers, _OL_WORK_SCHEMES)
    ids = BookIds(
        isbn13=_detect_isbn(identifiers),
        edition_id=normalize_catalog_id(edition, "books") if edition else None,
        work_id=normalize_catalog_id(work, "works") if work else None,
    )
    logger.debug("EPUB %s -> title=%r ids=%s", path.name, title, ids)
    return LookupQuery(name=title, ids=ids)
