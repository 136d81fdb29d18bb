# ABOUTME: Combines a work record with its first edition record into one BookRecord.
# ABOUTME: Work wins for narrative fields; edition wins for catalog and physical fields.

from typing import TypeVar

from olmeta.metadata.types import BookRecord

T = TypeVar("T")


def _merge_cover_ids(work: BookRecord, edition: BookRecord) -> list[int]:
    cover_ids = list(work.cover_ids)
    for cover_id in edition.cover_ids:
        if cover_id not in cover_ids:
            cover_ids.append(cover_id)

    if not cover_ids:
        # Both sets empty: fall back to the primaries, work first.
        cover_ids.extend(
            cover_id for cover_id in (work.cover_id, edition.cover_id) if cover_id is not None
        )
    return cover_ids


def _first_present(*values: T | None) -> T | None:
    for value in values:
        if value is not None:
            return value
    return None


def merge_work_with_edition(work: BookRecord, edition: BookRecord | None) -> BookRecord:
    """Enrich a work record with data from one of its editions.

    Precedence:
      - work first: title (unless empty), work_id, description, authors, subjects
      - edition first: edition_id, isbn13, publish_year, pages, language, publishers
      - cover_ids: work's ids, then the edition's ids not already present

    Neither input is modified.
    """
    if edition is None:
        return work

    cover_ids = _merge_cover_ids(work, edition)

    if work.authors:
        authors, author_keys = work.authors, work.author_keys
    else:
        authors, author_keys = edition.authors, edition.author_keys

    return BookRecord(
        title=work.title or edition.title,
        edition_id=_first_present(edition.edition_id, work.edition_id),
        work_id=_first_present(work.work_id, edition.work_id),
        isbn13=_first_present(edition.isbn13, work.isbn13),
        cover_ids=cover_ids,
        cover_id=_first_present(
            cover_ids[0] if cover_ids else None, edition.cover_id, work.cover_id
        ),
        publish_year=_first_present(edition.publish_year, work.publish_year),
        description=_first_present(work.description, edition.description),
        pages=_first_present(edition.pages, work.pages),
        language=_first_present(edition.language, work.language),
        authors=list(authors),
        author_keys=list(author_keys),
        subjects=list(work.subjects or edition.subjects),
        publishers=list(edition.publishers or work.publishers),
    )
