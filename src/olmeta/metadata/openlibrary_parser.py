# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Maps search docs, edition responses, and work responses onto BookRecord.

from dataclasses import dataclass
from typing import Any

from olmeta.metadata.identifiers import (
    extract_year_from_text,
    first_isbn13,
    language_from_key,
    normalize_catalog_id,
    valid_year,
)
from olmeta.metadata.types import BookRecord

_MAX_PAGES = 2**32 - 1


@dataclass(frozen=True)
class TextDescription:
    """Description given as a bare string."""

    text: str

    def as_text(self) -> str | None:
        return _clean_text(self.text)


@dataclass(frozen=True)
class ValueDescription:
    """Description given as {"type": "/type/text", "value": "..."}."""

    value: str | None = None

    def as_text(self) -> str | None:
        if self.value is None:
            return None
        return _clean_text(self.value)


def parse_description(raw: Any) -> TextDescription | ValueDescription | None:
    """Classify the raw description field, which OL returns in two shapes."""
    if isinstance(raw, str):
        return TextDescription(raw)
    if isinstance(raw, dict):
        value = raw.get("value")
        return ValueDescription(value if isinstance(value, str) else None)
    return None


def _clean_text(value: str) -> str | None:
    trimmed = value.strip()
    return trimmed or None


def _description(data: dict[str, Any]) -> str | None:
    description = parse_description(data.get("description"))
    return description.as_text() if description else None


def _get_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _get_str_list(data: dict[str, Any], key: str) -> list[str]:
    values = data.get(key)
    if not isinstance(values, list):
        return []
    return [value for value in values if isinstance(value, str)]


def _get_key_refs(data: dict[str, Any], key: str) -> list[str]:
    """Keys of a list of {"key": "/type/ID"} references."""
    refs = data.get(key)
    if not isinstance(refs, list):
        return []
    return [
        ref["key"] for ref in refs if isinstance(ref, dict) and isinstance(ref.get("key"), str)
    ]


def _positive_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _page_count(value: Any) -> int | None:
    pages = _positive_int(value)
    if pages is None or pages > _MAX_PAGES:
        return None
    return pages


def extract_cover_ids(values: Any) -> list[int]:
    """Positive cover ids in first-seen order, duplicates dropped."""
    if not isinstance(values, list):
        return []
    cover_ids: list[int] = []
    for value in values:
        cover_id = _positive_int(value)
        if cover_id is not None and cover_id not in cover_ids:
            cover_ids.append(cover_id)
    return cover_ids


def record_from_search_doc(doc: dict[str, Any]) -> BookRecord | None:
    """Map one document of a search.json response to a BookRecord.

    Returns None when the document has no usable title, so a single bad
    doc does not spoil the batch.
    """
    title = _get_str(doc, "title").strip()
    if not title:
        return None

    edition_keys = _get_str_list(doc, "edition_key")
    edition_id = normalize_catalog_id(edition_keys[0], "books") if edition_keys else None

    cover_id = _positive_int(doc.get("cover_i"))
    languages = _get_str_list(doc, "language")

    return BookRecord(
        title=title,
        edition_id=edition_id,
        work_id=normalize_catalog_id(_get_str(doc, "key"), "works"),
        isbn13=first_isbn13(_get_str_list(doc, "isbn")),
        cover_ids=[cover_id] if cover_id is not None else [],
        cover_id=cover_id,
        publish_year=valid_year(doc.get("first_publish_year")),
        pages=_page_count(doc.get("number_of_pages_median")),
        language=languages[0] if languages else None,
        authors=_get_str_list(doc, "author_name"),
        author_keys=_get_str_list(doc, "author_key"),
        subjects=_get_str_list(doc, "subject"),
        publishers=_get_str_list(doc, "publisher"),
    )


def record_from_edition_response(data: dict[str, Any]) -> BookRecord:
    """Map an edition response (books/{id}.json or isbn/{isbn}.json).

    Editions carry physical and catalog data (ISBN, pages, publishers)
    but only author references, so author names stay empty.
    """
    cover_ids = extract_cover_ids(data.get("covers"))
    work_keys = _get_key_refs(data, "works")
    language_keys = _get_key_refs(data, "languages")

    publish_date = _get_str(data, "publish_date")

    return BookRecord(
        title=_get_str(data, "title").strip(),
        edition_id=normalize_catalog_id(_get_str(data, "key"), "books"),
        work_id=normalize_catalog_id(work_keys[0], "works") if work_keys else None,
        isbn13=first_isbn13(_get_str_list(data, "isbn_13")),
        cover_ids=cover_ids,
        cover_id=cover_ids[0] if cover_ids else None,
        publish_year=extract_year_from_text(publish_date) if publish_date else None,
        description=_description(data),
        pages=_page_count(data.get("number_of_pages")),
        language=language_from_key(language_keys[0]) if language_keys else None,
        publishers=_get_str_list(data, "publishers"),
    )


def record_from_work_response(data: dict[str, Any]) -> BookRecord:
    """Map a work response (works/{id}.json): narrative metadata only."""
    cover_ids = extract_cover_ids(data.get("covers"))
    first_publish_date = _get_str(data, "first_publish_date")

    return BookRecord(
        title=_get_str(data, "title").strip(),
        work_id=normalize_catalog_id(_get_str(data, "key"), "works"),
        cover_ids=cover_ids,
        cover_id=cover_ids[0] if cover_ids else None,
        publish_year=(
            extract_year_from_text(first_publish_date) if first_publish_date else None
        ),
        description=_description(data),
        subjects=_get_str_list(data, "subjects"),
    )


def first_record_from_work_editions(data: dict[str, Any]) -> BookRecord | None:
    """Map the first entry of a works/{id}/editions.json listing, if any."""
    entries = data.get("entries")
    if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
        return None
    return record_from_edition_response(entries[0])
