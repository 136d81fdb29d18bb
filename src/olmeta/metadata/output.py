# ABOUTME: Maps canonical BookRecords to the published BookOutput shape and cover images.
# ABOUTME: Two strategies: relations bundle (images, people, tags) or flat image list.

from typing import Protocol, runtime_checkable

from olmeta.metadata.dedup import deduplicate_images
from olmeta.metadata.identifiers import derive_relation_key, derive_slug
from olmeta.metadata.types import (
    BookOutput,
    BookRecord,
    ExternalImage,
    GeneratedPerson,
    GeneratedTag,
    LookupResult,
    ParamKey,
    Relations,
)
from olmeta.metadata.urls import build_cover_url_from_id, build_cover_url_from_olid

ISBN13_NAMESPACE = "isbn13"
WORK_NAMESPACE = "olwid"
EDITION_NAMESPACE = "oleid"
FALLBACK_ID_PREFIX = "openlibrary-title"
PERSON_NAMESPACE = "openlib-person"
TAG_NAMESPACE = "openlib-tag"

_AUTHOR_ID_PARAM = "openlibraryAuthorId"
_TAG_KEY_PARAM = "openlibraryTagKey"


def canonical_output_id(record: BookRecord) -> str:
    """Stable, never-empty id for a record.

    ISBN-13 first, then work id, then edition id. Records with none of
    these get an id derived from the title slug.
    """
    if record.isbn13:
        return f"{ISBN13_NAMESPACE}:{record.isbn13}"
    if record.work_id:
        return f"{WORK_NAMESPACE}:{record.work_id}"
    if record.edition_id:
        return f"{EDITION_NAMESPACE}:{record.edition_id}"
    return f"{FALLBACK_ID_PREFIX}-{derive_slug(record.title)}"


def build_images(record: BookRecord) -> list[ExternalImage]:
    """One poster per distinct cover id, else one addressed by edition/work id."""
    cover_ids = list(record.cover_ids)
    if record.cover_id is not None:
        cover_ids.append(record.cover_id)

    if cover_ids:
        return deduplicate_images(
            [ExternalImage(url=build_cover_url_from_id(cover_id)) for cover_id in cover_ids]
        )

    olid = record.edition_id or record.work_id
    if olid:
        return [ExternalImage(url=build_cover_url_from_olid(olid))]
    return []


def build_people(record: BookRecord) -> list[GeneratedPerson]:
    people: list[GeneratedPerson] = []
    seen: set[str] = set()

    for index, raw_name in enumerate(record.authors):
        name = raw_name.strip()
        if not name:
            continue

        author_key = None
        if index < len(record.author_keys) and record.author_keys[index].strip():
            author_key = derive_relation_key(record.author_keys[index])

        key = derive_slug(name)
        if author_key:
            key = f"{key}-{author_key}"
        person_id = f"{PERSON_NAMESPACE}:{key}"

        if person_id in seen:
            continue
        seen.add(person_id)

        people.append(
            GeneratedPerson(
                id=person_id,
                name=name,
                params={_AUTHOR_ID_PARAM: author_key} if author_key else None,
                other_ids=[person_id],
            )
        )

    return people


def build_tags(record: BookRecord) -> list[GeneratedTag]:
    tags: list[GeneratedTag] = []
    seen: set[str] = set()

    for raw_name in record.subjects:
        name = raw_name.strip()
        if not name:
            continue

        key = derive_relation_key(name)
        tag_id = f"{TAG_NAMESPACE}:{key}"
        if tag_id in seen:
            continue
        seen.add(tag_id)

        tags.append(
            GeneratedTag(
                id=tag_id,
                name=name,
                params={_TAG_KEY_PARAM: key},
                other_ids=[tag_id],
            )
        )

    return tags


def build_params(record: BookRecord) -> dict[str, str | list[str]]:
    """Catalog-specific fields, inserted in ParamKey order, empties omitted."""
    values: dict[ParamKey, str | list[str] | None] = {
        ParamKey.AUTHORS: list(record.authors) or None,
        ParamKey.SUBJECTS: list(record.subjects) or None,
        ParamKey.PUBLISHERS: list(record.publishers) or None,
        ParamKey.EDITION_ID: record.edition_id,
        ParamKey.WORK_ID: record.work_id,
    }
    return {key.value: values[key] for key in ParamKey if values[key]}


def build_book_output(record: BookRecord) -> BookOutput:
    return BookOutput(
        id=canonical_output_id(record),
        name=record.title,
        year=record.publish_year,
        overview=record.description,
        pages=record.pages,
        lang=record.language,
        isbn13=record.isbn13,
        openlibrary_edition_id=record.edition_id,
        openlibrary_work_id=record.work_id,
        params=build_params(record),
    )


@runtime_checkable
class OutputMapper(Protocol):
    """Strategy turning a BookRecord into a LookupResult and its images."""

    def map_to_output(self, record: BookRecord) -> LookupResult: ...

    def map_to_images(self, record: BookRecord) -> list[ExternalImage]: ...


class RelationsOutputMapper:
    """Attaches images, generated people and generated tags as relations."""

    def map_to_output(self, record: BookRecord) -> LookupResult:
        relations = Relations(
            images=build_images(record),
            people=build_people(record),
            tags=build_tags(record),
        )
        return LookupResult(
            metadata=build_book_output(record),
            relations=None if relations.is_empty else relations,
        )

    def map_to_images(self, record: BookRecord) -> list[ExternalImage]:
        return build_images(record)


class FlatOutputMapper:
    """Images alongside the metadata; authors and subjects live only in params."""

    def map_to_output(self, record: BookRecord) -> LookupResult:
        return LookupResult(metadata=build_book_output(record), images=build_images(record))

    def map_to_images(self, record: BookRecord) -> list[ExternalImage]:
        return build_images(record)


OUTPUT_VARIANTS: dict[str, type[OutputMapper]] = {
    "relations": RelationsOutputMapper,
    "flat": FlatOutputMapper,
}


def get_output_mapper(variant: str) -> OutputMapper:
    """Instantiate the mapper registered under ``variant``."""
    try:
        return OUTPUT_VARIANTS[variant]()
    except KeyError:
        msg = f"unknown output variant {variant!r}, expected one of {sorted(OUTPUT_VARIANTS)}"
        raise ValueError(msg) from None
